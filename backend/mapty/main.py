from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mapty.api.map import router as map_router
from mapty.api.session import router as session_router
from mapty.api.workouts import router as workouts_router
from mapty.api.deps import MaptySession
from mapty.core.config import settings
from mapty.core.log import configure_logging
from mapty.db import SessionLocal, init_db
from mapty.services.kv_store import SqlKeyValueStore


app = FastAPI(title="Mapty")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create the key-value table on startup
init_db()


@app.on_event("startup")
def start_session():
    configure_logging(settings.log_level)
    session = MaptySession(SqlKeyValueStore(SessionLocal))
    session.controller.start()
    app.state.session = session


app.include_router(map_router)
app.include_router(session_router)
app.include_router(workouts_router)


@app.get("/")
def root():
    return {"message": "Mapty backend is running"}
