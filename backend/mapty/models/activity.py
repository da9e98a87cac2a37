"""Workout records: one shared base plus a kind-tagged payload.

A record is built through `build_activity` only, both for a fresh form submit
and when a stored snapshot is loaded again. Pace / speed and the label are
derived once, at construction, from the record's own fields.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from mapty.core.config import settings
from mapty.core.constants import LAT_RANGE, LNG_RANGE
from mapty.core.errors import InvalidInputError
from mapty.core.time_utils import month_day, normalize_timestamp, utc_now


class ActivityKind(str, Enum):
    running = "running"
    cycling = "cycling"


# Name of the kind-specific input field, per kind
EXTRA_FIELDS = {
    ActivityKind.running: "cadence_spm",
    ActivityKind.cycling: "elevation_gain_m",
}

Latitude = Annotated[float, Field(ge=LAT_RANGE[0], le=LAT_RANGE[1], allow_inf_nan=False)]
Longitude = Annotated[float, Field(ge=LNG_RANGE[0], le=LNG_RANGE[1], allow_inf_nan=False)]
Coordinates = tuple[Latitude, Longitude]


class RunningDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["running"] = "running"
    cadence_spm: int = Field(gt=0)  # steps per minute


class CyclingDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["cycling"] = "cycling"
    elevation_gain_m: float = Field(ge=0, allow_inf_nan=False)


ActivityDetails = Annotated[
    Union[RunningDetails, CyclingDetails],
    Field(discriminator="kind"),
]


def derive_metric(kind: ActivityKind, distance_km: float, duration_min: float) -> float:
    """Running -> pace (min/km); cycling -> speed (km/h)."""
    if kind is ActivityKind.running:
        return duration_min / distance_km
    elif kind is ActivityKind.cycling:
        return distance_km / (duration_min / 60)
    raise ValueError(f"Unsupported workout kind: {kind!r}")


def unit_for(kind: ActivityKind) -> str:
    if kind is ActivityKind.running:
        return "min/km"
    return "km/h"


def metric_field_for(kind: ActivityKind) -> str:
    if kind is ActivityKind.running:
        return "pace_min_per_km"
    return "speed_km_per_h"


def describe(kind: ActivityKind, created_at: datetime) -> str:
    """Label such as 'Cycling on March 3'."""
    return f"{kind.value.capitalize()} on {month_day(created_at, settings.timezone)}"


class ActivityRecord(BaseModel):
    """A logged workout. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    created_at: datetime
    coordinates: Coordinates  # (lat, lng)
    distance_km: float = Field(gt=0, allow_inf_nan=False)
    duration_min: float = Field(gt=0, allow_inf_nan=False)
    details: ActivityDetails

    # Derived at construction, never read from storage
    _metric: float = PrivateAttr()
    _label: str = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        self._metric = derive_metric(self.kind, self.distance_km, self.duration_min)
        self._label = describe(self.kind, self.created_at)

    @property
    def kind(self) -> ActivityKind:
        return ActivityKind(self.details.kind)

    @property
    def metric(self) -> float:
        return self._metric

    @property
    def metric_name(self) -> str:
        return metric_field_for(self.kind)

    @property
    def metric_unit(self) -> str:
        return unit_for(self.kind)

    @property
    def label(self) -> str:
        return self._label

    @property
    def pace_min_per_km(self) -> Optional[float]:
        return self._metric if self.kind is ActivityKind.running else None

    @property
    def speed_km_per_h(self) -> Optional[float]:
        return self._metric if self.kind is ActivityKind.cycling else None


def new_activity_id() -> str:
    return uuid.uuid4().hex


def _describe_errors(exc: ValidationError) -> tuple[str, list[str]]:
    fields: list[str] = []
    parts: list[str] = []
    for err in exc.errors():
        name = next((str(p) for p in reversed(err["loc"]) if isinstance(p, str)), "input")
        if name not in fields:
            fields.append(name)
        parts.append(f"{name}: {err['msg']}")
    return "; ".join(parts), fields


def build_activity(
    kind,
    coordinates,
    distance_km,
    duration_min,
    extra,
    *,
    record_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> ActivityRecord:
    """Validate inputs and build the record variant matching `kind`.

    `extra` is the kind-specific value: cadence (spm) for running, elevation
    gain (m) for cycling. `record_id` / `created_at` are only passed when a stored
    workout is rebuilt; fresh workouts get a new id and the current time.

    Raises InvalidInputError if any field is missing, non-finite or out of
    range.
    """
    try:
        kind = ActivityKind(kind)
    except ValueError:
        raise InvalidInputError(f"kind: unknown workout kind {kind!r}", ["kind"])

    try:
        return ActivityRecord(
            id=record_id if record_id is not None else new_activity_id(),
            created_at=normalize_timestamp(created_at) if created_at is not None else utc_now(),
            coordinates=coordinates,
            distance_km=distance_km,
            duration_min=duration_min,
            details={"kind": kind.value, EXTRA_FIELDS[kind]: extra},
        )
    except ValidationError as e:
        message, fields = _describe_errors(e)
        raise InvalidInputError(message, fields) from e
