"""
In-memory record store.

The store snapshots the records it is constructed with into an immutable
tuple and indexes them by id. It performs no laziness of its own; deferred
evaluation lives in ``deferred_records.query``.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Tuple

from deferred_records.domain.models import Person
from deferred_records.utils.logging import get_logger

log = get_logger(__name__)


class DuplicateRecordError(ValueError):
    """Raised when seed data contains the same id twice."""

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Duplicate record id {record_id} in seed data")


class RecordStore:
    """
    Fixed, ordered collection of ``Person`` records.
    """

    def __init__(self, records: Iterable[Person]) -> None:
        snapshot = tuple(records)
        index: Dict[int, Person] = {}
        for record in snapshot:
            if record.id in index:
                raise DuplicateRecordError(record.id)
            index[record.id] = record

        self._records: Tuple[Person, ...] = snapshot
        self._index = index
        log.debug("Record store initialised", extra={"records": len(snapshot)})

    def all_records(self) -> Tuple[Person, ...]:
        """Return every record in seed order."""
        return self._records

    def record_by_id(self, record_id: int) -> Optional[Person]:
        """Return the record with ``record_id``, or None when absent."""
        return self._index.get(record_id)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)})"


__all__ = ["DuplicateRecordError", "RecordStore"]
