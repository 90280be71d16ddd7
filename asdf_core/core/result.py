"""Result type for explicit error handling.

Every fallible operation in asdf_core returns ``Ok(value)`` or ``Err(error)``
instead of raising. Callers branch on the variant, usually with ``match``:

    match repo.head():
        case Ok(sha):
            console.print(f"plugin at {sha}")
        case Err(e):
            console.error(e.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeGuard, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result.

    Attributes:
        value: What the operation produced (a commit hash, a path, a list
            of versions...).
    """

    value: T

    def is_ok(self) -> bool:
        """Always True for Ok."""
        return True

    def is_err(self) -> bool:
        """Always False for Ok."""
        return False

    def unwrap(self) -> T:
        """Hand out the success value.

        Returns:
            The wrapped value.
        """
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Hand out the success value.

        Args:
            default: Not used; only Err falls back to it.

        Returns:
            The wrapped value.
        """
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the success value.

        Args:
            f: Applied to the wrapped value.

        Returns:
            Ok holding ``f(value)``.
        """
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """Return self; an Ok has no error to transform.

        Args:
            f: Not called.

        Returns:
            This Ok, unchanged.
        """
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result.

    Attributes:
        error: Error dataclass describing the failure, usually with a
            ``message`` property.
    """

    error: E

    def is_ok(self) -> bool:
        """Always False for Err."""
        return False

    def is_err(self) -> bool:
        """Always True for Err."""
        return True

    def unwrap(self) -> None:
        """Raise, since an Err has no value to hand out.

        Raises:
            ValueError: Always, with the error in the message.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        """Fall back to ``default``.

        Args:
            default: Value to use in place of the missing one.

        Returns:
            ``default``.
        """
        return default

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """Return self; an Err has no value to transform.

        Args:
            f: Not called.

        Returns:
            This Err, unchanged.
        """
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error, e.g. to add the failing stage as context.

        Args:
            f: Applied to the wrapped error.

        Returns:
            Err holding ``f(error)``.
        """
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Narrow ``result`` to Ok for type checkers."""
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Narrow ``result`` to Err for type checkers."""
    return isinstance(result, Err)
