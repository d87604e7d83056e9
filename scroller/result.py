"""Result type for explicit success/failure handling.

Operations whose failure is an expected, non-exceptional outcome return a
``Result`` instead of raising. The game phase machine is the main user: a
duplicate start request or a second collision in the same tick yields an
``Err`` that the caller treats as a no-op.

Usage:
------
    result = machine.try_transition(GamePhase.PLAYING)
    if result.is_err():
        logger.debug("Ignored: %s", result.error)
    else:
        phase = result.unwrap()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful operation result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    @property
    def error(self) -> None:
        """Ok has no error, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents a failed operation result."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raises ValueError since Err has no success value."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    @property
    def value(self) -> None:
        """Err has no value, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Result is a union of Ok and Err
Result = Union[Ok[T], Err[E]]
