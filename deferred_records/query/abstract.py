"""
Shared machinery for deferred query handles.

A handle wraps a *source*: a zero-argument callable returning a fresh iterator
over the pipeline's elements. Composition wraps the source in another
generator closure, so nothing runs until a terminal method calls the
outermost source. Every terminal call starts a new pass.
"""

from __future__ import annotations

import abc
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from deferred_records.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")
Q = TypeVar("Q", bound="AbstractQuery[Any]")

Source = Callable[[], Iterator[T]]


def close_iterator(iterator: Iterator[Any]) -> None:
    close = getattr(iterator, "close", None)
    if close is not None:
        close()


def mapping(upstream: Source[T], fn: Callable[[T], U]) -> Source[U]:
    def mapped() -> Iterator[U]:
        for item in upstream():
            yield fn(item)

    return mapped


def filtering(upstream: Source[T], predicate: Callable[[T], bool]) -> Source[T]:
    def filtered() -> Iterator[T]:
        for item in upstream():
            if predicate(item):
                yield item

    return filtered


class AbstractQuery(abc.ABC, Generic[T]):
    """
    Base class for ``SingleQuery`` and ``ManyQuery``.

    Attributes
    ----------
    description : str
        Human-readable rendering of the composed pipeline, e.g.
        ``find_all().filter().single()``. Used in logs and ``repr``.
    """

    def __init__(self, source: Source[T], description: str) -> None:
        self._source = source
        self.description = description

    @property
    @abc.abstractmethod
    def shape(self) -> str:  # pragma: no cover - interface only
        """Short name of the handle's shape ("single" or "many")."""
        raise NotImplementedError

    def _step(self, step: str) -> str:
        return f"{self.description}.{step}"

    def _log_failure(self, exc: Exception) -> None:
        log.warning(
            f"[EVALUATION FAILED] {self.description}",
            extra={"query": self.description, "error": repr(exc)},
        )

    def do_on_next(self: Q, fn: Callable[[T], Any]) -> Q:
        """Observe each element as it passes; the element is forwarded unchanged."""
        upstream = self._source

        def observed() -> Iterator[T]:
            for item in upstream():
                fn(item)
                yield item

        return type(self)(observed, self._step("do_on_next()"))

    def do_on_error(self: Q, fn: Callable[[Exception], Any]) -> Q:
        """Observe a failure on its way downstream; the failure is re-raised."""
        upstream = self._source

        def observed() -> Iterator[T]:
            try:
                yield from upstream()
            except Exception as exc:
                fn(exc)
                raise

        return type(self)(observed, self._step("do_on_error()"))

    def subscribe(
        self,
        on_next: Optional[Callable[[T], Any]] = None,
        on_error: Optional[Callable[[Exception], Any]] = None,
        on_complete: Optional[Callable[[], Any]] = None,
    ) -> None:
        """
        Evaluate the pipeline now, pushing results into the given callbacks.

        ``on_next`` receives each element in order, ``on_error`` receives the
        failure that aborted the evaluation, and ``on_complete`` runs after a
        successful evaluation. All callbacks run before this method returns.
        Without ``on_error`` a failure is logged and re-raised. Exceptions
        raised by the callbacks themselves propagate to the caller.
        """
        log.debug(f"[SUBSCRIBE] {self.description}", extra={"query": self.description})
        delivered = 0
        iterator = self._source()
        try:
            while True:
                try:
                    item = next(iterator)
                except StopIteration:
                    break
                except Exception as exc:  # noqa: BLE001 - routed to the error channel
                    self._log_failure(exc)
                    if on_error is None:
                        raise
                    on_error(exc)
                    return
                delivered += 1
                if on_next is not None:
                    on_next(item)
        finally:
            close_iterator(iterator)

        log.debug(
            f"[COMPLETE] {self.description}",
            extra={"query": self.description, "elements": delivered},
        )
        if on_complete is not None:
            on_complete()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description})"


__all__ = ["AbstractQuery", "Source", "close_iterator", "filtering", "mapping"]
