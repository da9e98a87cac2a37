"""Server-side implementations of the map, form and list ports.

Each adapter keeps the view state the browser should show and forwards
user events (map load, clicks, form submits) to the callbacks the session
controller registered.
"""
from typing import Callable, Optional

from loguru import logger

from mapty.core.errors import MapNotReadyError
from mapty.models.activity import ActivityKind, ActivityRecord
from mapty.schemas.activity import (
    ActivitySubmission,
    FormState,
    LatLng,
    ListEntry,
    MapState,
    MarkerRead,
)
from mapty.ui.render import list_entry


class MapBoard:
    """MapPort: map centre / zoom, markers, and the ready signal."""

    def __init__(self):
        self.ready = False
        self.center: Optional[tuple[float, float]] = None
        self.zoom: Optional[int] = None
        self.markers: list[MarkerRead] = []
        self._ready_callbacks: list[Callable[[], None]] = []
        self._pick_callbacks: list[Callable[[tuple[float, float]], None]] = []

    # --- events from the browser ---
    def load(self, coordinates: tuple[float, float], zoom_level: int) -> None:
        """Map created at the user's position; fires the ready signal once."""
        self.center = tuple(coordinates)
        self.zoom = zoom_level
        if self.ready:
            return
        self.ready = True
        logger.info(f"Map ready at {coordinates}")
        for callback in self._ready_callbacks:
            callback()

    def pick(self, coordinates: tuple[float, float]) -> None:
        if not self.ready:
            raise MapNotReadyError()
        for callback in self._pick_callbacks:
            callback(coordinates)

    # --- MapPort ---
    def on_ready(self, callback: Callable[[], None]) -> None:
        """Call `callback` once the map is ready (right away if it already is)."""
        self._ready_callbacks.append(callback)
        if self.ready:
            callback()

    def on_coordinate_picked(self, callback: Callable[[tuple[float, float]], None]) -> None:
        self._pick_callbacks.append(callback)

    def add_marker(self, coordinates, popup_text: str, style_hint: str) -> None:
        if not self.ready:
            raise MapNotReadyError()
        lat, lng = coordinates
        self.markers.append(
            MarkerRead(coordinates=LatLng(lat=lat, lng=lng), popup_text=popup_text, style_hint=style_hint)
        )

    def center_on(self, coordinates, zoom_level: int) -> None:
        if not self.ready:
            raise MapNotReadyError()
        self.center = tuple(coordinates)
        self.zoom = zoom_level

    def clear_markers(self) -> None:
        self.markers = []

    def state(self) -> MapState:
        center = LatLng(lat=self.center[0], lng=self.center[1]) if self.center else None
        return MapState(ready=self.ready, center=center, zoom=self.zoom, markers=list(self.markers))


class FormPanel:
    """FormPort: visibility, selected kind and the last error shown to the user."""

    def __init__(self, kind: ActivityKind = ActivityKind.running):
        self.visible = False
        self.kind = kind
        self.error: Optional[str] = None
        self._submit_callback: Optional[Callable[[ActivitySubmission], Optional[ActivityRecord]]] = None

    def submit(self, submission: ActivitySubmission) -> Optional[ActivityRecord]:
        """Forward a submit from the browser; returns the created workout or None."""
        if self._submit_callback is None:
            raise RuntimeError("No submit handler registered")
        return self._submit_callback(submission)

    def on_submit(self, callback) -> None:
        self._submit_callback = callback

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def reset_fields(self) -> None:
        self.error = None

    def set_kind(self, kind: ActivityKind) -> None:
        self.kind = kind

    def report_error(self, message: str) -> None:
        self.error = message

    def state(self) -> FormState:
        return FormState(visible=self.visible, kind=self.kind, error=self.error)


class WorkoutList:
    """ListRenderPort: rendered rows, newest first."""

    def __init__(self):
        self.entries: list[ListEntry] = []

    def append_entry(self, record: ActivityRecord) -> None:
        self.entries.insert(0, list_entry(record))

    def clear(self) -> None:
        self.entries = []
