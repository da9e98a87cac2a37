from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mapty.models.activity import EXTRA_FIELDS, ActivityKind, ActivityRecord


class LatLng(BaseModel):
    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class StoredActivity(BaseModel):
    """One flat entry of the persisted workouts snapshot.

    Derived values written alongside (label, pace / speed) are ignored on
    read; they're recomputed when the record is rebuilt.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    kind: str
    created_at: datetime
    latitude: float
    longitude: float
    distance_km: float
    duration_min: float
    cadence_spm: Optional[float] = None
    elevation_gain_m: Optional[float] = None

    def extra_for(self, kind: ActivityKind) -> Optional[float]:
        return getattr(self, EXTRA_FIELDS[kind])


class ActivitySubmission(BaseModel):
    """Form submit payload.

    Both kind-specific inputs are accepted; only the one matching `kind` is
    used. Values are validated by the workout model, not here, so bad numbers
    come back as a user-facing error instead of a schema error.
    """

    kind: Optional[ActivityKind] = None  # falls back to the kind selected on the form
    distance_km: Optional[float] = None
    duration_min: Optional[float] = None
    cadence_spm: Optional[float] = None
    elevation_gain_m: Optional[float] = None

    def extra_for(self, kind: ActivityKind) -> Optional[float]:
        return getattr(self, EXTRA_FIELDS[kind])


class KindSelect(BaseModel):
    kind: ActivityKind


class ActivityRead(BaseModel):
    """Workout as returned to the frontend."""

    id: str
    kind: ActivityKind
    label: str
    created_at: datetime
    coordinates: LatLng
    distance_km: float
    duration_min: float
    cadence_spm: Optional[int] = None
    elevation_gain_m: Optional[float] = None
    pace_min_per_km: Optional[float] = None
    speed_km_per_h: Optional[float] = None

    @classmethod
    def from_record(cls, record: ActivityRecord) -> "ActivityRead":
        lat, lng = record.coordinates
        return cls(
            id=record.id,
            kind=record.kind,
            label=record.label,
            created_at=record.created_at,
            coordinates=LatLng(lat=lat, lng=lng),
            distance_km=record.distance_km,
            duration_min=record.duration_min,
            pace_min_per_km=record.pace_min_per_km,
            speed_km_per_h=record.speed_km_per_h,
            **record.details.model_dump(exclude={"kind"}),
        )


class DetailItem(BaseModel):
    icon: str
    value: str
    unit: str


class ListEntry(BaseModel):
    """One rendered row of the workout list."""

    id: str
    kind: ActivityKind
    title: str
    details: list[DetailItem]


class MarkerRead(BaseModel):
    coordinates: LatLng
    popup_text: str
    style_hint: str


class MapState(BaseModel):
    ready: bool
    center: Optional[LatLng] = None
    zoom: Optional[int] = None
    markers: list[MarkerRead]


class FormState(BaseModel):
    visible: bool
    kind: ActivityKind
    error: Optional[str] = None


class SessionRead(BaseModel):
    state: str
    pending_coordinates: Optional[LatLng] = None
    selected_kind: ActivityKind
    form: FormState
