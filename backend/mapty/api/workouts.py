from fastapi import APIRouter, Depends, HTTPException

from mapty.api.deps import MaptySession, get_session
from mapty.core.errors import MapNotReadyError, NotFoundError
from mapty.schemas.activity import ActivityRead, ListEntry, MapState

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("/", response_model=list[ListEntry])
def list_workouts(session: MaptySession = Depends(get_session)):
    """
    Rendered workout rows, newest first.

    Empty until the map has loaded: restored workouts are drawn on the
    map's ready signal.
    """
    with session.lock:
        return list(session.list.entries)


@router.get("/{workout_id}", response_model=ActivityRead)
def get_workout(workout_id: str, session: MaptySession = Depends(get_session)):
    with session.lock:
        try:
            record = session.controller.store.find_by_id(workout_id)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
    return ActivityRead.from_record(record)


@router.post("/{workout_id}/focus", response_model=MapState)
def focus_workout(workout_id: str, session: MaptySession = Depends(get_session)):
    """Move the map to a workout clicked in the list."""
    with session.lock:
        try:
            session.controller.focus(workout_id)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except MapNotReadyError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return session.map.state()


@router.delete("/")
def reset_workouts(session: MaptySession = Depends(get_session)):
    with session.lock:
        count = len(session.controller.store)
        session.controller.reset()
    return {"deleted": count}
