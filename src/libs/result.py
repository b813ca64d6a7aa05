"""
Result type shared by all use cases.

A use case never raises for an expected business failure; it returns
``Return.err(Error(code, message))``. Side effects that must happen after the
transaction (emails, audit records) travel back on ``Result.events`` and are
dispatched by the caller.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    code: str
    message: str


@dataclass
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[Error] = None
    events: List[Any] = field(default_factory=list)

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    @staticmethod
    def ok(value: Optional[T] = None, events: Optional[List[Any]] = None) -> Result[T]:
        return Result(value=value, events=list(events or []))

    @staticmethod
    def err(error: Error, events: Optional[List[Any]] = None) -> Result[Any]:
        return Result(error=error, events=list(events or []))
