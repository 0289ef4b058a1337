"""
Deferred query handles: ``SingleQuery`` (zero or one value) and ``ManyQuery``
(an ordered sequence of zero or more values).

Building or composing a handle never touches the data. Terminal methods
(``block``, ``evaluate``, ``block_first``, ``block_last``, ``subscribe``) each
run one independent pass over the pipeline.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from deferred_records.query.abstract import (
    AbstractQuery,
    close_iterator,
    filtering,
    mapping,
)
from deferred_records.query.errors import CardinalityError
from deferred_records.query.result import Err, Ok, Result
from deferred_records.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")

_MISSING = object()


class SingleQuery(AbstractQuery[T]):
    """
    Deferred computation yielding at most one value.
    """

    @property
    def shape(self) -> str:
        return "single"

    @classmethod
    def just(cls, value: T, description: Optional[str] = None) -> "SingleQuery[T]":
        def source() -> Iterator[T]:
            yield value

        return cls(source, description or f"just({value!r})")

    @classmethod
    def empty(cls, description: str = "empty()") -> "SingleQuery[Any]":
        def source() -> Iterator[Any]:
            yield from ()

        return cls(source, description)

    def map(self, fn: Callable[[T], U]) -> "SingleQuery[U]":
        """Transform the value, if any. ``fn`` is never called on an empty result."""
        return SingleQuery(mapping(self._source, fn), self._step("map()"))

    def filter(self, predicate: Callable[[T], bool]) -> "SingleQuery[T]":
        """Keep the value only if it satisfies ``predicate``; otherwise complete empty."""
        return SingleQuery(filtering(self._source, predicate), self._step("filter()"))

    def default_if_empty(self, default: T) -> "SingleQuery[T]":
        upstream = self._source

        def defaulted() -> Iterator[T]:
            found = False
            for item in upstream():
                found = True
                yield item
            if not found:
                yield default

        return SingleQuery(defaulted, self._step("default_if_empty()"))

    def flux(self) -> "ManyQuery[T]":
        """View this query as a sequence of zero or one element."""
        return ManyQuery(self._source, self._step("flux()"))

    def evaluate(self) -> Result[T]:
        """
        Run the pipeline and return ``Ok(value)``, ``Ok(None)`` when empty, or
        ``Err(exc)`` when a ``CardinalityError`` or a transformation failure
        aborted the evaluation. Never raises for those failures.
        """
        log.debug(f"[EVALUATE] {self.description}", extra={"query": self.description})
        iterator = self._source()
        try:
            value = next(iterator, None)
        except Exception as exc:  # noqa: BLE001 - failures become Err values
            self._log_failure(exc)
            return Err(exc)
        finally:
            close_iterator(iterator)
        return Ok(value)

    def block(self) -> Optional[T]:
        """
        Run the pipeline on the calling thread and return the value, or None
        when empty. A failure is raised.
        """
        return self.evaluate().unwrap()


class ManyQuery(AbstractQuery[T]):
    """
    Deferred computation yielding an ordered sequence of values.
    """

    @property
    def shape(self) -> str:
        return "many"

    def map(self, fn: Callable[[T], U]) -> "ManyQuery[U]":
        """Transform each element, lazily and in order."""
        return ManyQuery(mapping(self._source, fn), self._step("map()"))

    def filter(self, predicate: Callable[[T], bool]) -> "ManyQuery[T]":
        """Keep the elements satisfying ``predicate``, preserving order."""
        return ManyQuery(filtering(self._source, predicate), self._step("filter()"))

    def single(self) -> SingleQuery[T]:
        """
        Require exactly one element.

        The resulting query fails with ``CardinalityError`` of kind ``NONE``
        when the sequence is empty, or ``MULTIPLE`` (with the element count)
        when it holds more than one element.
        """
        upstream = self._source
        description = self._step("single()")

        def only() -> Iterator[T]:
            items = upstream()
            first = next(items, _MISSING)
            if first is _MISSING:
                raise CardinalityError.none(query=description)
            extra = sum(1 for _ in items)
            if extra:
                raise CardinalityError.multiple(extra + 1, query=description)
            yield first  # type: ignore[misc]

        return SingleQuery(only, description)

    def next(self) -> SingleQuery[T]:
        """First element, or empty. Extra elements are not an error."""
        upstream = self._source

        def first() -> Iterator[T]:
            yield from islice(upstream(), 1)

        return SingleQuery(first, self._step("next()"))

    def collect(self) -> SingleQuery[List[T]]:
        """Drain the sequence into one list, preserving order; ``[]`` when empty."""
        upstream = self._source

        def collected() -> Iterator[List[T]]:
            yield list(upstream())

        return SingleQuery(collected, self._step("collect()"))

    def count(self) -> SingleQuery[int]:
        upstream = self._source

        def counted() -> Iterator[int]:
            yield sum(1 for _ in upstream())

        return SingleQuery(counted, self._step("count()"))

    def block_first(self) -> Optional[T]:
        """
        Return the first element, or None when empty, without evaluating the
        rest of the sequence. A failure is raised.
        """
        log.debug(f"[BLOCK FIRST] {self.description}", extra={"query": self.description})
        iterator = self._source()
        try:
            return next(iterator, None)
        except Exception as exc:
            self._log_failure(exc)
            raise
        finally:
            close_iterator(iterator)

    def block_last(self) -> Optional[T]:
        """Return the last element, or None when empty. A failure is raised."""
        log.debug(f"[BLOCK LAST] {self.description}", extra={"query": self.description})
        last: Optional[T] = None
        try:
            for item in self._source():
                last = item
        except Exception as exc:
            self._log_failure(exc)
            raise
        return last


__all__ = ["ManyQuery", "SingleQuery"]
