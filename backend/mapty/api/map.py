from fastapi import APIRouter, Depends, HTTPException

from mapty.api.deps import MaptySession, get_session
from mapty.core.errors import MapNotReadyError
from mapty.schemas.activity import LatLng, MapState, SessionRead

router = APIRouter(prefix="/map", tags=["map"])


@router.get("/", response_model=MapState)
def get_map(session: MaptySession = Depends(get_session)):
    with session.lock:
        return session.map.state()


@router.post("/load", response_model=MapState)
def load_map(position: LatLng, session: MaptySession = Depends(get_session)):
    """
    Called by the frontend once geolocation resolved and the map is created.

    Centres the map on the user's position and signals ready, which is when
    restored workouts get their markers and list rows.
    """
    with session.lock:
        session.map.load(position.as_tuple(), session.controller.zoom_level)
        return session.map.state()


@router.post("/click", response_model=SessionRead)
def click_map(position: LatLng, session: MaptySession = Depends(get_session)):
    with session.lock:
        try:
            session.map.pick(position.as_tuple())
        except MapNotReadyError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return session.read()
