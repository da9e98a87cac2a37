"""Domain errors raised by the workout core.

The API layer maps these onto HTTP status codes; the core never imports
FastAPI.
"""


class MaptyError(Exception):
    """Base class for all workout-core errors."""


class InvalidInputError(MaptyError):
    """User-correctable input: a non-finite, non-positive or out-of-range field."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class NotFoundError(MaptyError):
    def __init__(self, record_id: str):
        super().__init__(f"Workout {record_id!r} not found")
        self.record_id = record_id


class PersistenceCorruptError(MaptyError):
    """Stored snapshot (or one entry of it) could not be reconstituted."""


class NoPendingLocationError(MaptyError):
    def __init__(self):
        super().__init__("Pick a location on the map before submitting a workout")


class MapNotReadyError(MaptyError):
    def __init__(self):
        super().__init__("Map is not loaded yet")
