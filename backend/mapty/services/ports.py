"""Capabilities the workout core calls through but does not implement.

The in-process implementations live in `mapty.ui` (map, form, list) and
`mapty.services.kv_store` (storage).
"""
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from mapty.models.activity import ActivityKind, ActivityRecord
    from mapty.schemas.activity import ActivitySubmission

LatLng = tuple[float, float]


class MapPort(Protocol):
    def on_ready(self, callback: Callable[[], None]) -> None: ...

    def on_coordinate_picked(self, callback: Callable[[LatLng], None]) -> None: ...

    def add_marker(self, coordinates: LatLng, popup_text: str, style_hint: str) -> None: ...

    def center_on(self, coordinates: LatLng, zoom_level: int) -> None: ...

    def clear_markers(self) -> None: ...


class FormPort(Protocol):
    def on_submit(
        self, callback: Callable[["ActivitySubmission"], Optional["ActivityRecord"]]
    ) -> None: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def reset_fields(self) -> None: ...

    def set_kind(self, kind: "ActivityKind") -> None: ...

    def report_error(self, message: str) -> None: ...


class ListRenderPort(Protocol):
    def append_entry(self, record: "ActivityRecord") -> None: ...

    def clear(self) -> None: ...


class KeyValuePort(Protocol):
    """Flat, synchronous, single-slot-per-key storage."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, blob: str) -> None: ...

    def remove(self, key: str) -> None: ...
