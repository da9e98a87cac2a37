"""Create-workout workflow: map pick -> form -> validated workout -> save + draw."""
from enum import Enum
from typing import Optional

from loguru import logger

from mapty.core.config import settings
from mapty.core.errors import InvalidInputError, NoPendingLocationError
from mapty.models.activity import ActivityKind, ActivityRecord
from mapty.schemas.activity import ActivitySubmission
from mapty.services.persistence import PersistenceAdapter
from mapty.services.ports import FormPort, ListRenderPort, MapPort
from mapty.services.store import ActivityStore
from mapty.ui.render import popup_style, popup_text


class SessionState(str, Enum):
    idle = "idle"
    awaiting_form_input = "awaiting_form_input"


class SessionController:
    """Drives one user's session.

    Idle --pick--> AwaitingFormInput --valid submit / cancel--> Idle.
    An invalid submit reports the error on the form and stays put. The
    pending coordinate only lives in memory; nothing half-entered is saved.

    Restored workouts are drawn once the map signals ready, never before.
    """

    def __init__(
        self,
        store: ActivityStore,
        persistence: PersistenceAdapter,
        map_port: MapPort,
        form_port: FormPort,
        list_port: ListRenderPort,
        zoom_level: Optional[int] = None,
    ):
        self.store = store
        self._persistence = persistence
        self._map = map_port
        self._form = form_port
        self._list = list_port
        self.zoom_level = zoom_level if zoom_level is not None else settings.map_zoom_level

        self.state = SessionState.idle
        self.pending_coordinates: Optional[tuple[float, float]] = None
        self.selected_kind = ActivityKind.running
        self._map_ready = False
        self._started = False
        self._to_draw: list[ActivityRecord] = []

        self._map.on_coordinate_picked(self.handle_coordinate_picked)
        self._form.on_submit(self.submit)
        self._map.on_ready(self._handle_map_ready)

    def start(self) -> None:
        """Load the stored workouts into the store and schedule them for drawing.

        Only the first call loads; the store is the source of truth after that.
        """
        if self._started:
            logger.debug("Session already started, not loading again")
            return
        self._started = True
        self.store.replace_all(self._persistence.load())
        self._to_draw = list(self.store.all())
        logger.info(f"Session started with {len(self._to_draw)} restored workout(s)")
        if self._map_ready:
            self._draw_restored()

    def _handle_map_ready(self) -> None:
        self._map_ready = True
        self._draw_restored()

    def _draw_restored(self) -> None:
        pending, self._to_draw = self._to_draw, []
        for record in pending:
            self._draw(record)

    def _draw(self, record: ActivityRecord) -> None:
        self._map.add_marker(record.coordinates, popup_text(record), popup_style(record))
        self._list.append_entry(record)

    def handle_coordinate_picked(self, coordinates) -> None:
        if self.state is SessionState.awaiting_form_input:
            logger.debug(f"Moving pending location to {coordinates}")
        self.pending_coordinates = tuple(coordinates)
        self.state = SessionState.awaiting_form_input
        self._form.show()

    def select_kind(self, kind) -> None:
        # Only changes which extra field the next submit needs
        self.selected_kind = ActivityKind(kind)
        self._form.set_kind(self.selected_kind)

    def submit(self, submission: ActivitySubmission) -> Optional[ActivityRecord]:
        """Create, save and draw a workout at the pending location.

        Returns the new workout, or None if the input was rejected (the error
        is reported on the form and the session keeps waiting for input).
        """
        if self.state is not SessionState.awaiting_form_input or self.pending_coordinates is None:
            raise NoPendingLocationError()

        kind = submission.kind if submission.kind is not None else self.selected_kind
        try:
            record = self.store.create(
                kind,
                self.pending_coordinates,
                submission.distance_km,
                submission.duration_min,
                submission.extra_for(kind),
            )
        except InvalidInputError as e:
            logger.info(f"Rejected {kind.value} workout: {e}")
            self._form.report_error(e.message)
            return None

        try:
            self._persistence.save(self.store.all())
        except Exception:
            # Not saved means not created: the form stays open for a retry
            self.store.discard(record.id)
            logger.exception(f"Could not save workout {record.id}, discarded it")
            raise
        self._draw(record)
        self._close_form()
        logger.info(f"Created {record.label} ({record.id})")
        return record

    def cancel(self) -> None:
        self._close_form()

    def _close_form(self) -> None:
        self._form.hide()
        self._form.reset_fields()
        self.pending_coordinates = None
        self.state = SessionState.idle

    def focus(self, record_id: str) -> ActivityRecord:
        """Centre the map on a workout. Raises NotFoundError for an unknown id."""
        record = self.store.find_by_id(record_id)
        self._map.center_on(record.coordinates, self.zoom_level)
        return record

    def reset(self) -> None:
        """Forget every workout: store, snapshot, markers and list."""
        self._close_form()
        self.store.clear()
        self._persistence.clear()
        self._to_draw = []
        self._map.clear_markers()
        self._list.clear()
        logger.info("Session reset")
