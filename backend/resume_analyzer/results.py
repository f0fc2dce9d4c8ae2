"""
Explicit success/failure values for fallible pipeline steps.

Steps return ``Ok(value)`` or ``Err(error)`` instead of raising, so the
orchestrator can compose them without relying on exception unwinding.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import AnalysisError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: AnalysisError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        """Raise the carried error; used at the HTTP boundary."""
        raise self.error


Result = Union[Ok[T], Err]
