from datetime import datetime, timezone

from mapty.core.constants import MONTHS


def utc_now() -> datetime:
    """Current UTC time, truncated to whole seconds.

    Workout timestamps are held at second precision so the stored snapshot
    (ISO-8601, seconds) reproduces them exactly.
    """
    return datetime.now(timezone.utc).replace(microsecond=0)


def normalize_timestamp(dt: datetime) -> datetime:
    """Make `dt` timezone-aware UTC (assume UTC if naive) and drop sub-seconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(microsecond=0)


def format_timestamp(dt: datetime) -> str:
    """Format a workout timestamp for the snapshot, e.g. '2025-01-01T07:00:00+00:00'."""
    return normalize_timestamp(dt).isoformat(timespec="seconds")


def format_pace(pace_min_per_km: float) -> str:
    """
    Format pace (decimal minutes per km) as 'M:SS'.
    Example: 6.25 -> '6:15'
    """
    pace_sec = int(round(pace_min_per_km * 60))

    minutes = pace_sec // 60
    seconds = pace_sec % 60
    return f"{minutes}:{seconds:02d}"


def month_day(dt: datetime, tz_name: str | None = None) -> str:
    """'October 19' for the local calendar day of `dt`."""
    local = to_local_datetime(dt, tz_name)
    return f"{MONTHS[local.month - 1]} {local.day}"


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError):
            return dt.astimezone()
    return dt.astimezone()
