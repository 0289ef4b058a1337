"""
Deferred query engine.

Exports the two query shapes, the tagged ``Result`` returned by
``SingleQuery.evaluate`` and the ``CardinalityError`` raised by ``single()``.
"""

from deferred_records.query.abstract import AbstractQuery
from deferred_records.query.errors import Cardinality, CardinalityError, QueryError
from deferred_records.query.handles import ManyQuery, SingleQuery
from deferred_records.query.result import Err, Ok, Result

__all__ = [
    "AbstractQuery",
    "Cardinality",
    "CardinalityError",
    "Err",
    "ManyQuery",
    "Ok",
    "QueryError",
    "Result",
    "SingleQuery",
]
