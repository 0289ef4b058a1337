"""
Tagged evaluation outcome for single-valued queries.

``SingleQuery.evaluate()`` returns ``Ok`` or ``Err`` instead of raising, so a
caller can inspect a failure (for example the kind of a ``CardinalityError``)
as a plain value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, NoReturn, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    Successful evaluation. ``value`` is ``None`` when the query completed empty.
    """

    value: Optional[T] = None

    ok: ClassVar[bool] = True

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def unwrap(self) -> Optional[T]:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed evaluation carrying the exception that aborted it."""

    error: Exception

    ok: ClassVar[bool] = False

    @property
    def is_empty(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err]


__all__ = ["Err", "Ok", "Result"]
