"""Kind-specific presentation of a workout (popup text and list rows).

This is the only place that looks at which variant a record is; the rest of
the code goes through `record.metric` / `record.label`.
"""
from mapty.core.constants import (
    CADENCE_ICON,
    DURATION_ICON,
    ELEVATION_ICON,
    KIND_ICONS,
    METRIC_ICON,
)
from mapty.core.time_utils import format_pace
from mapty.models.activity import ActivityKind, ActivityRecord
from mapty.schemas.activity import DetailItem, ListEntry


def _num(value: float) -> str:
    """5.0 -> '5', 5.25 -> '5.25'."""
    return f"{value:g}"


def popup_text(record: ActivityRecord) -> str:
    return f"{KIND_ICONS[record.kind.value]} {record.label}"


def popup_style(record: ActivityRecord) -> str:
    return f"{record.kind.value}-popup"


def list_entry(record: ActivityRecord) -> ListEntry:
    details = [
        DetailItem(icon=KIND_ICONS[record.kind.value], value=_num(record.distance_km), unit="km"),
        DetailItem(icon=DURATION_ICON, value=_num(record.duration_min), unit="min"),
    ]

    if record.kind is ActivityKind.running:
        details += [
            DetailItem(icon=METRIC_ICON, value=format_pace(record.metric), unit=record.metric_unit),
            DetailItem(icon=CADENCE_ICON, value=str(record.details.cadence_spm), unit="spm"),
        ]
    elif record.kind is ActivityKind.cycling:
        details += [
            DetailItem(icon=METRIC_ICON, value=f"{record.metric:.1f}", unit=record.metric_unit),
            DetailItem(icon=ELEVATION_ICON, value=_num(record.details.elevation_gain_m), unit="m"),
        ]

    return ListEntry(id=record.id, kind=record.kind, title=record.label, details=details)
