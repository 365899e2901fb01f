"""
Outcome of a store operation.

Stores never raise to their callers. Every operation hands back a Result that is either a success carrying a value,
or a failure carrying the kind of fault that occurred (see ErrorKind).
"""

from dataclasses import dataclass
from typing import Generic, Iterable, Optional, Self, TypeVar

from src.core.shared_types import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: Optional[T] = None) -> Self:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> Self:
        return cls(error=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    @staticmethod
    def all_ok(results: Iterable["Result"]) -> "Result[None]":
        """Logical AND over a batch. An empty batch succeeds; failures carry no per-item detail."""
        failed = [result for result in results if not result.ok]
        if not failed:
            return Result.success()
        return Result.failure(
            ErrorKind.PERSISTENCE, f"{len(failed)} operation(s) in batch failed"
        )
