"""Snapshot the workout list into the key-value port and rebuild it on load.

Snapshot format: one JSON array stored under a single key, one flat object per
workout, in insertion order::

    [{"id": "...", "kind": "running", "created_at": "2025-01-01T07:00:00+00:00",
      "latitude": 51.5, "longitude": -0.1, "distance_km": 5.0,
      "duration_min": 30.0, "cadence_spm": 178,
      "label": "Running on January 1", "pace_min_per_km": 6.0}, ...]

`kind` selects which variant is rebuilt. Derived values (label, pace / speed)
are written for readability only; on load every entry goes back through
`build_activity`, so they are always recomputed from the source fields.
Timestamps are stored at whole-second precision, which is also the precision
records are created with.
"""
import json
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from mapty.core.config import settings
from mapty.core.errors import InvalidInputError, PersistenceCorruptError
from mapty.core.time_utils import format_timestamp
from mapty.models.activity import ActivityKind, ActivityRecord, build_activity
from mapty.schemas.activity import StoredActivity
from mapty.services.ports import KeyValuePort


def to_entry(record: ActivityRecord) -> dict:
    lat, lng = record.coordinates
    entry = {
        "id": record.id,
        "created_at": format_timestamp(record.created_at),
        "latitude": lat,
        "longitude": lng,
        "distance_km": record.distance_km,
        "duration_min": record.duration_min,
    }
    # kind + the kind-specific field (cadence_spm / elevation_gain_m)
    entry.update(record.details.model_dump())
    entry["label"] = record.label
    entry[record.metric_name] = record.metric
    return entry


def from_entry(raw) -> ActivityRecord:
    """Rebuild one workout from a snapshot entry.

    Raises PersistenceCorruptError for a malformed entry or unknown kind, and
    InvalidInputError when the stored values fail current validation.
    """
    try:
        stored = StoredActivity.model_validate(raw)
    except ValidationError as e:
        raise PersistenceCorruptError(f"malformed entry: {e.error_count()} invalid field(s)") from e

    try:
        kind = ActivityKind(stored.kind)
    except ValueError:
        raise PersistenceCorruptError(f"unknown workout kind {stored.kind!r}") from None

    return build_activity(
        kind,
        (stored.latitude, stored.longitude),
        stored.distance_km,
        stored.duration_min,
        stored.extra_for(kind),
        record_id=stored.id,
        created_at=stored.created_at,
    )


class PersistenceAdapter:
    def __init__(self, kv: KeyValuePort, key: Optional[str] = None):
        self._kv = kv
        self.key = key or settings.storage_key

    def save(self, records) -> None:
        records = list(records)
        blob = json.dumps([to_entry(r) for r in records])
        self._kv.set(self.key, blob)
        logger.info(f"Saved {len(records)} workout(s) under {self.key!r}")

    def load(self) -> list[ActivityRecord]:
        """Rebuild the stored workouts, in order.

        A missing snapshot means no prior session and gives an empty list.
        Bad entries are skipped with a warning; an unreadable snapshot gives
        an empty list.
        """
        blob = self._kv.get(self.key)
        if blob is None:
            logger.info(f"No stored workouts under {self.key!r}")
            return []

        try:
            entries = self._parse(blob)
        except PersistenceCorruptError as e:
            logger.warning(f"Ignoring stored workouts under {self.key!r}: {e}")
            return []

        records: list[ActivityRecord] = []
        seen: set[str] = set()
        for index, raw in enumerate(entries):
            try:
                record = from_entry(raw)
            except (PersistenceCorruptError, InvalidInputError) as e:
                logger.warning(f"Dropping stored workout #{index}: {e}")
                continue
            if record.id in seen:
                logger.warning(f"Dropping stored workout #{index}: duplicate id {record.id!r}")
                continue
            seen.add(record.id)
            records.append(record)

        logger.info(f"Loaded {len(records)} of {len(entries)} stored workout(s)")
        return records

    def clear(self) -> None:
        self._kv.remove(self.key)
        logger.info(f"Removed stored workouts under {self.key!r}")

    @staticmethod
    def _parse(blob: str) -> list:
        try:
            entries = json.loads(blob)
        except (TypeError, ValueError, RecursionError) as e:
            raise PersistenceCorruptError(f"not valid JSON ({e})") from e
        if not isinstance(entries, list):
            raise PersistenceCorruptError(f"expected a JSON array, got {type(entries).__name__}")
        return entries
