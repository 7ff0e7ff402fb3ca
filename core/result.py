"""Result type returned by the assessment use cases.

Pipeline steps raise AssessmentError subclasses; use cases and the session
wrap the outcome in Success or Failure so callers decide what to surface.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E')


@dataclass(frozen=True)
class Success(Generic[T]):
    """Outcome of a step that produced a value (a report, tokens, scores)."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], Any]) -> "Result[Any, Exception]":
        """Apply ``fn`` to the value; an exception raised by ``fn`` becomes a Failure."""
        try:
            return Success(fn(self.value))
        except Exception as e:
            return Failure(e)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Outcome of a step that failed; ``error`` is usually an AssessmentError."""
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable) -> "Result[Any, E]":
        return self

    def unwrap(self):
        """Raise the stored error."""
        if isinstance(self.error, Exception):
            raise self.error
        raise Exception(str(self.error))

    def unwrap_or(self, default):
        return default


Result = Union[Success[T], Failure[E]]
