from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from mapty.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def make_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory sqlite: share one connection so every thread sees the same db
        if ":memory:" in url or url.endswith("://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)  # helps avoid stale connections


engine = make_engine(settings.database_url)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create the key-value table if it doesn't exist yet."""
    from mapty.models.kv_entry import KeyValueEntry  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
