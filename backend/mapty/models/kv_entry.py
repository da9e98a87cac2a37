from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from mapty.db import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(128), primary_key=True)

    # Opaque blob; for "workouts" this is the JSON snapshot of all workouts
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
