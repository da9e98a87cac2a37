import os

# Use in-memory sqlite and a fixed label timezone for tests.
# Must happen before anything imports mapty (settings are read at import).
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest  # noqa: E402
from loguru import logger  # noqa: E402

from mapty.services.kv_store import InMemoryKeyValueStore  # noqa: E402
from mapty.services.persistence import PersistenceAdapter  # noqa: E402
from mapty.services.session import SessionController  # noqa: E402
from mapty.services.store import ActivityStore  # noqa: E402
from mapty.ui.adapters import FormPanel, MapBoard, WorkoutList  # noqa: E402


@pytest.fixture
def log_messages():
    """Collect (level, message) pairs logged through loguru during a test."""
    messages = []
    handler_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def persistence(kv):
    return PersistenceAdapter(kv, key="workouts")


@pytest.fixture
def ui():
    return MapBoard(), FormPanel(), WorkoutList()


@pytest.fixture
def controller(persistence, ui):
    map_board, form, workout_list = ui
    return SessionController(ActivityStore(), persistence, map_board, form, workout_list)
