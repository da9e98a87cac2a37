import threading

from fastapi import Request

from mapty.schemas.activity import LatLng, SessionRead
from mapty.services.persistence import PersistenceAdapter
from mapty.services.ports import KeyValuePort
from mapty.services.session import SessionController
from mapty.services.store import ActivityStore
from mapty.ui.adapters import FormPanel, MapBoard, WorkoutList


class MaptySession:
    """The process' single session: UI adapters plus the controller wired to them.

    Sync routes run in a threadpool, so every route holds `lock` while it
    touches the session. One request runs to completion before the next.
    """

    def __init__(self, kv: KeyValuePort):
        self.lock = threading.Lock()
        self.map = MapBoard()
        self.form = FormPanel()
        self.list = WorkoutList()
        self.controller = SessionController(
            ActivityStore(),
            PersistenceAdapter(kv),
            self.map,
            self.form,
            self.list,
        )

    def read(self) -> SessionRead:
        c = self.controller
        pending = None
        if c.pending_coordinates is not None:
            lat, lng = c.pending_coordinates
            pending = LatLng(lat=lat, lng=lng)
        return SessionRead(
            state=c.state.value,
            pending_coordinates=pending,
            selected_kind=c.selected_kind,
            form=self.form.state(),
        )


# Dependency used by the routers
def get_session(request: Request) -> MaptySession:
    return request.app.state.session
