"""Result type for the release pipeline.

Every pipeline stage (compile, locate, archive, relocate) returns a Result
instead of raising, so the orchestrator can stop at the first failing stage
and tests can inject a failure at any single one of them.

Usage:
    match service.release_platform(target):
        case Ok(published):
            console.success(str(published.path))
        case Err(error):
            print_release_error(error, console)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful stage outcome carrying its value."""

    value: T

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Run the next stage with this value.

        Args:
            f: Next stage, taking the value and returning a Result.

        Returns:
            Whatever the next stage returns.
        """
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed stage outcome carrying its error."""

    error: E

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Err[E]:
        """Skip the next stage; the first error wins."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
