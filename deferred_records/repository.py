"""
Person repository: the entry point that hands out deferred queries over the
record store.

Concrete repositories implement the ``PersonRepository`` protocol; callers
depend on the protocol so an alternative store can be swapped in without
touching query composition.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from deferred_records.domain.models import Person
from deferred_records.infrastructure.store import RecordStore
from deferred_records.query.handles import ManyQuery, SingleQuery


@runtime_checkable
class PersonRepository(Protocol):
    """
    Read-only access to people through deferred queries.
    """

    def get_by_id(self, person_id: int) -> SingleQuery[Person]:
        """
        Look up one person by id.

        Returns
        -------
        SingleQuery[Person]
            Yields the match on evaluation, or completes empty when no person
            has that id. Absence is not an error.
        """
        ...

    def find_all(self) -> ManyQuery[Person]:
        """All people, in store order."""
        ...


class InMemoryPersonRepository:
    """
    ``PersonRepository`` backed by a ``RecordStore``.

    The repository keeps a reference to the store and reads it afresh on every
    evaluation; it never copies or mutates records.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @property
    def store(self) -> RecordStore:
        return self._store

    def get_by_id(self, person_id: int) -> SingleQuery[Person]:
        store = self._store

        def lookup() -> Iterator[Person]:
            person = store.record_by_id(person_id)
            if person is not None:
                yield person

        return SingleQuery(lookup, f"get_by_id({person_id})")

    def find_all(self) -> ManyQuery[Person]:
        store = self._store

        def scan() -> Iterator[Person]:
            yield from store.all_records()

        return ManyQuery(scan, "find_all()")


__all__ = ["InMemoryPersonRepository", "PersonRepository"]
