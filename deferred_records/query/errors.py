"""
Failure types raised by query evaluation.

Absence is never an error in this package: an empty lookup completes with no
value. The only query-level failure is a violated ``single()`` constraint.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Cardinality(str, Enum):
    """Which side of the exactly-one constraint was violated."""

    NONE = "none"
    MULTIPLE = "multiple"


class QueryError(Exception):
    """Base class for errors produced by the query engine itself."""


class CardinalityError(QueryError):
    """
    Raised when ``single()`` sees zero or more than one element.

    Attributes
    ----------
    kind : Cardinality
        ``Cardinality.NONE`` or ``Cardinality.MULTIPLE``.
    count : int | None
        Number of elements seen; only set for ``MULTIPLE``.
    query : str | None
        Description of the pipeline that failed, when known.
    """

    def __init__(
        self, kind: Cardinality, count: Optional[int] = None, query: Optional[str] = None
    ) -> None:
        self.kind = kind
        self.count = count
        self.query = query
        if kind is Cardinality.NONE:
            message = "Source was empty; expected exactly one element"
        else:
            message = f"Source emitted {count} elements; expected exactly one"
        if query:
            message = f"{message} ({query})"
        super().__init__(message)

    @classmethod
    def none(cls, query: Optional[str] = None) -> "CardinalityError":
        return cls(Cardinality.NONE, query=query)

    @classmethod
    def multiple(cls, count: int, query: Optional[str] = None) -> "CardinalityError":
        return cls(Cardinality.MULTIPLE, count=count, query=query)

    @property
    def is_none(self) -> bool:
        return self.kind is Cardinality.NONE

    @property
    def is_multiple(self) -> bool:
        return self.kind is Cardinality.MULTIPLE

    def __repr__(self) -> str:
        return f"CardinalityError(kind={self.kind.value!r}, count={self.count!r})"


__all__ = ["Cardinality", "CardinalityError", "QueryError"]
