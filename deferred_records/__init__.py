"""
Deferred Records - lazy, composable queries over an in-memory record store.

This package provides:

- An immutable, id-indexed store of person records
- ``SingleQuery`` and ``ManyQuery`` handles that do no work until evaluated
- Composition operators (map, filter, single, collect, next, count)
- Blocking-pull, tagged-result and push-subscription evaluation
- A typed ``CardinalityError`` distinguishing "none" from "multiple"
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from deferred_records.config import Settings, get_settings
from deferred_records.domain.models import Person
from deferred_records.infrastructure.seed import DEFAULT_PEOPLE, build_store, load_people
from deferred_records.infrastructure.store import DuplicateRecordError, RecordStore
from deferred_records.query import (
    Cardinality,
    CardinalityError,
    Err,
    ManyQuery,
    Ok,
    Result,
    SingleQuery,
)
from deferred_records.repository import InMemoryPersonRepository, PersonRepository
from deferred_records.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Person",
    # Store
    "DEFAULT_PEOPLE",
    "DuplicateRecordError",
    "RecordStore",
    "build_store",
    "load_people",
    # Queries
    "Cardinality",
    "CardinalityError",
    "Err",
    "ManyQuery",
    "Ok",
    "Result",
    "SingleQuery",
    # Repository
    "InMemoryPersonRepository",
    "PersonRepository",
    # Logging
    "configure_logging",
    "get_logger",
]
