"""
Infrastructure package for Deferred Records.

Holds the in-memory record store and the seed loading that populates it.
Keep this layer free of query composition logic.
"""

from deferred_records.infrastructure.seed import DEFAULT_PEOPLE, build_store, load_people
from deferred_records.infrastructure.store import DuplicateRecordError, RecordStore

__all__ = [
    "DEFAULT_PEOPLE",
    "DuplicateRecordError",
    "RecordStore",
    "build_store",
    "load_people",
]
