"""In-memory, insertion-ordered collection of workouts for one session."""
from typing import Iterable, Iterator

from loguru import logger

from mapty.core.errors import InvalidInputError, NotFoundError
from mapty.models.activity import ActivityRecord, build_activity, new_activity_id


class ActivityStore:
    """Owns the workouts of the running process.

    Constructed explicitly (empty) and filled either by `create` or, once at
    startup, by `replace_all` with what the persistence adapter loaded.
    """

    def __init__(self) -> None:
        self._records: list[ActivityRecord] = []
        self._by_id: dict[str, ActivityRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ActivityRecord]:
        return iter(self.all())

    def create(self, kind, coordinates, distance_km, duration_min, extra) -> ActivityRecord:
        """Build the matching workout variant and append it.

        Raises InvalidInputError (store untouched) if the inputs don't validate.
        """
        record_id = new_activity_id()
        while record_id in self._by_id:
            record_id = new_activity_id()

        record = build_activity(
            kind,
            coordinates,
            distance_km,
            duration_min,
            extra,
            record_id=record_id,
        )
        self._records.append(record)
        self._by_id[record.id] = record
        logger.debug(f"Stored {record.kind.value} workout {record.id}")
        return record

    def all(self) -> tuple[ActivityRecord, ...]:
        return tuple(self._records)

    def find_by_id(self, record_id: str) -> ActivityRecord:
        try:
            return self._by_id[record_id]
        except KeyError:
            raise NotFoundError(record_id) from None

    def replace_all(self, records: Iterable[ActivityRecord]) -> None:
        """Swap the whole backing sequence. Rejects duplicate ids; keeps the old contents then."""
        records = list(records)
        by_id: dict[str, ActivityRecord] = {}
        for record in records:
            if record.id in by_id:
                raise InvalidInputError(f"id: duplicate workout id {record.id!r}", ["id"])
            by_id[record.id] = record

        self._records = records
        self._by_id = by_id

    def discard(self, record_id: str) -> None:
        """Drop one workout again; unknown ids are ignored."""
        record = self._by_id.pop(record_id, None)
        if record is not None:
            self._records = [r for r in self._records if r.id != record_id]

    def clear(self) -> None:
        self._records = []
        self._by_id = {}
