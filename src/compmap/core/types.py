from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")
A = TypeVar("A")
C = TypeVar("C")


@dataclass(frozen=True)
class Keyed(Generic[K, V]):
    """A per-key result reported by a bulk or targeted operation."""

    key: K
    value: V


@dataclass
class WithArgs(Generic[A, C]):
    """A component stored together with the args it was built from."""

    component: C
    args: A


@dataclass(frozen=True)
class Outcome(Generic[V]):
    """
    Result of a fallible factory call.

    Exactly one of `value` / `error` is meaningful: a failed outcome carries
    the exception raised by the factory, a successful one carries the value
    (which may itself be None).
    """

    value: V | None = None
    error: BaseException | None = None

    @classmethod
    def success(cls, value: V) -> Outcome[V]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> Outcome[V]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def result(self) -> V:
        """Return the value, or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value
