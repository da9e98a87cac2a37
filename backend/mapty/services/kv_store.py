from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session, sessionmaker

from mapty.models.kv_entry import KeyValueEntry


class SqlKeyValueStore:
    """Key-value port backed by the `kv_entries` table, one row per key.

    Every call opens and commits its own session; there is no transaction
    spanning several keys.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db: Session = self._session_factory()
        try:
            row = db.get(KeyValueEntry, key)
            return row.value if row is not None else None
        finally:
            db.close()

    def set(self, key: str, blob: str) -> None:
        db: Session = self._session_factory()
        try:
            db.merge(KeyValueEntry(key=key, value=blob))
            db.commit()
            logger.debug(f"Wrote {len(blob)} chars under key {key!r}")
        finally:
            db.close()

    def remove(self, key: str) -> None:
        db: Session = self._session_factory()
        try:
            db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
            db.commit()
        finally:
            db.close()


class InMemoryKeyValueStore:
    """Dict-backed key-value port (tests, scripts)."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, blob: str) -> None:
        self.data[key] = blob

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
