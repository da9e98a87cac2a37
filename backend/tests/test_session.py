from datetime import datetime, timedelta, timezone

import pytest

from mapty.core.constants import MONTHS
from mapty.core.errors import MapNotReadyError, NoPendingLocationError, NotFoundError
from mapty.models.activity import ActivityKind, build_activity
from mapty.schemas.activity import ActivitySubmission
from mapty.services.kv_store import InMemoryKeyValueStore
from mapty.services.persistence import PersistenceAdapter
from mapty.services.session import SessionController, SessionState
from mapty.services.store import ActivityStore
from mapty.ui.adapters import FormPanel, MapBoard, WorkoutList


HOME = (51.5, -0.1)


def running(distance=5, duration=30, cadence=178):
    return ActivitySubmission(kind="running", distance_km=distance, duration_min=duration, cadence_spm=cadence)


def cycling(distance=20, duration=60, elevation=150):
    return ActivitySubmission(kind="cycling", distance_km=distance, duration_min=duration, elevation_gain_m=elevation)


@pytest.fixture
def ready(controller, ui):
    map_board, _, _ = ui
    controller.start()
    map_board.load(HOME, 13)
    return controller


def test_pick_opens_form_and_waits_for_input(ready, ui):
    map_board, form, _ = ui
    map_board.pick((51.5, -0.1))

    assert ready.state is SessionState.awaiting_form_input
    assert ready.pending_coordinates == (51.5, -0.1)
    assert form.visible


def test_submit_creates_saves_and_draws_once(ready, ui, persistence):
    map_board, form, workout_list = ui
    map_board.pick((51.5, -0.1))

    record = form.submit(running())

    assert record.kind is ActivityKind.running
    assert record.pace_min_per_km == 6
    assert record.coordinates == (51.5, -0.1)
    assert record.label == f"Running on {MONTHS[record.created_at.month - 1]} {record.created_at.day}"
    assert datetime.now(timezone.utc) - record.created_at < timedelta(minutes=1)

    assert ready.store.all() == (record,)
    assert [r.id for r in persistence.load()] == [record.id]

    assert len(map_board.markers) == 1
    marker = map_board.markers[0]
    assert marker.popup_text.endswith(record.label)
    assert marker.style_hint == "running-popup"
    assert (marker.coordinates.lat, marker.coordinates.lng) == (51.5, -0.1)
    assert [e.id for e in workout_list.entries] == [record.id]

    assert ready.state is SessionState.idle
    assert ready.pending_coordinates is None
    assert not form.visible


def test_invalid_submit_stays_awaiting_input(ready, ui, kv):
    map_board, form, workout_list = ui
    map_board.pick((51.5, -0.1))

    result = form.submit(running(distance=-5))

    assert result is None
    assert ready.state is SessionState.awaiting_form_input
    assert ready.pending_coordinates == (51.5, -0.1)
    assert len(ready.store) == 0
    assert kv.get("workouts") is None
    assert map_board.markers == []
    assert workout_list.entries == []
    assert form.visible
    assert "distance_km" in form.error


def test_corrected_submit_after_error_succeeds(ready, ui):
    map_board, form, _ = ui
    map_board.pick((51.5, -0.1))
    form.submit(cycling(elevation=-1))

    ride = form.submit(cycling())

    assert ride.speed_km_per_h == 20
    assert form.error is None
    assert ready.state is SessionState.idle


def test_missing_extra_field_for_kind_is_rejected(ready, ui):
    map_board, form, _ = ui
    map_board.pick((51.5, -0.1))

    # Cadence filled in but kind is cycling: elevation is what's required
    result = form.submit(ActivitySubmission(kind="cycling", distance_km=20, duration_min=60, cadence_spm=170))

    assert result is None
    assert "elevation_gain_m" in form.error


def test_selected_kind_is_used_when_submission_has_none(ready, ui):
    map_board, form, _ = ui
    map_board.pick((51.5, -0.1))
    ready.select_kind("cycling")

    assert ready.state is SessionState.awaiting_form_input
    assert form.kind is ActivityKind.cycling

    ride = form.submit(ActivitySubmission(distance_km=30, duration_min=90, elevation_gain_m=0))
    assert ride.kind is ActivityKind.cycling


def test_second_pick_moves_pending_location(ready, ui):
    map_board, form, _ = ui
    map_board.pick((51.5, -0.1))
    map_board.pick((40.0, -3.7))

    record = form.submit(running())

    assert record.coordinates == (40.0, -3.7)


def test_cancel_discards_pending_location(ready, ui):
    map_board, form, _ = ui
    map_board.pick((51.5, -0.1))

    ready.cancel()

    assert ready.state is SessionState.idle
    assert ready.pending_coordinates is None
    assert not form.visible
    with pytest.raises(NoPendingLocationError):
        form.submit(running())
    assert len(ready.store) == 0


def test_submit_without_pick_raises(ready, ui):
    _, form, _ = ui
    with pytest.raises(NoPendingLocationError):
        form.submit(running())


def test_pick_before_map_ready_is_refused(controller, ui):
    map_board, _, _ = ui
    with pytest.raises(MapNotReadyError):
        map_board.pick(HOME)
    assert controller.state is SessionState.idle


def stored_session(persistence):
    persistence.save([
        build_activity("running", (51.5, -0.1), 5, 30, 178, record_id="r1"),
        build_activity("cycling", (51.6, -0.2), 20, 60, 150, record_id="c1"),
    ])


def test_restored_workouts_wait_for_map_ready(persistence):
    stored_session(persistence)
    map_board, form, workout_list = MapBoard(), FormPanel(), WorkoutList()
    controller = SessionController(ActivityStore(), persistence, map_board, form, workout_list)

    controller.start()

    assert [r.id for r in controller.store.all()] == ["r1", "c1"]
    assert map_board.markers == []
    assert workout_list.entries == []

    map_board.load(HOME, 13)

    assert [m.style_hint for m in map_board.markers] == ["running-popup", "cycling-popup"]
    # newest first in the list
    assert [e.id for e in workout_list.entries] == ["c1", "r1"]

    # a later ready signal does not draw again
    map_board.load(HOME, 13)
    assert len(map_board.markers) == 2


def test_restored_workouts_drawn_right_away_if_map_already_ready(persistence):
    stored_session(persistence)
    map_board, form, workout_list = MapBoard(), FormPanel(), WorkoutList()
    map_board.load(HOME, 13)
    controller = SessionController(ActivityStore(), persistence, map_board, form, workout_list)

    controller.start()

    assert len(map_board.markers) == 2
    assert len(workout_list.entries) == 2


def test_focus_centres_map_on_workout(ready, ui):
    map_board, form, _ = ui
    map_board.pick((48.85, 2.35))
    record = form.submit(cycling())
    map_board.center_on(HOME, 5)

    ready.focus(record.id)

    assert map_board.center == (48.85, 2.35)
    assert map_board.zoom == 13


def test_focus_unknown_workout_raises(ready):
    with pytest.raises(NotFoundError):
        ready.focus("missing")


def test_reset_forgets_everything(ready, ui, kv):
    map_board, form, workout_list = ui
    map_board.pick((51.5, -0.1))
    form.submit(running())
    map_board.pick((51.5, -0.1))

    ready.reset()

    assert len(ready.store) == 0
    assert kv.get("workouts") is None
    assert map_board.markers == []
    assert workout_list.entries == []
    assert ready.state is SessionState.idle


class FlakyKeyValueStore(InMemoryKeyValueStore):
    broken = True

    def set(self, key, blob):
        if self.broken:
            raise RuntimeError("disk full")
        super().set(key, blob)


def test_failed_save_leaves_no_workout_behind(ui):
    map_board, form, workout_list = ui
    kv = FlakyKeyValueStore()
    persistence = PersistenceAdapter(kv, key="workouts")
    controller = SessionController(ActivityStore(), persistence, map_board, form, workout_list)
    controller.start()
    map_board.load(HOME, 13)
    map_board.pick((51.5, -0.1))

    with pytest.raises(RuntimeError):
        form.submit(running())

    assert len(controller.store) == 0
    assert map_board.markers == []
    assert workout_list.entries == []
    assert controller.state is SessionState.awaiting_form_input

    # storage is back: retrying creates exactly one workout
    kv.broken = False
    record = form.submit(running())
    assert controller.store.all() == (record,)
    assert [r.id for r in persistence.load()] == [record.id]


def test_second_start_does_not_draw_twice(persistence):
    stored_session(persistence)
    map_board, form, workout_list = MapBoard(), FormPanel(), WorkoutList()
    controller = SessionController(ActivityStore(), persistence, map_board, form, workout_list)
    map_board.load(HOME, 13)

    controller.start()
    controller.start()

    assert len(controller.store) == 2
    assert len(map_board.markers) == 2
    assert len(workout_list.entries) == 2
