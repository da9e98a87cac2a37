from fastapi import APIRouter, Depends, HTTPException

from mapty.api.deps import MaptySession, get_session
from mapty.core.errors import NoPendingLocationError
from mapty.schemas.activity import ActivityRead, ActivitySubmission, KindSelect, SessionRead

router = APIRouter(prefix="/session", tags=["session"])


@router.get("/", response_model=SessionRead)
def get_session_state(session: MaptySession = Depends(get_session)):
    with session.lock:
        return session.read()


@router.put("/kind", response_model=SessionRead)
def select_kind(payload: KindSelect, session: MaptySession = Depends(get_session)):
    with session.lock:
        session.controller.select_kind(payload.kind)
        return session.read()


@router.post("/submit", response_model=ActivityRead)
def submit_workout(payload: ActivitySubmission, session: MaptySession = Depends(get_session)):
    with session.lock:
        try:
            record = session.form.submit(payload)
        except NoPendingLocationError as e:
            raise HTTPException(status_code=409, detail=str(e))

        # Rejected input: the form keeps the message, session stays open
        if record is None:
            raise HTTPException(status_code=422, detail=session.form.error)

        return ActivityRead.from_record(record)


@router.post("/cancel", response_model=SessionRead)
def cancel_workout(session: MaptySession = Depends(get_session)):
    with session.lock:
        session.controller.cancel()
        return session.read()
