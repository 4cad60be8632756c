"""Typed Result container for explicit success/failure returns.

Lookups that are expected to fail routinely (the ``must_*`` accessors fall
back to a caller default) use this instead of exception juggling:

- `Ok(value)` / `Err(error)` variants,
- combinator: `flat_map`,
- helpers: `unwrap`, `unwrap_err`, `get_or`.

Example
-------
>>> from inistore.core.result import Ok, catching
>>> parse_int = catching(int, ValueError)
>>> Ok("42").flat_map(parse_int).unwrap()
42
>>> Ok("x").flat_map(parse_int).get_or(5)
5
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    # ----- Introspection -----------------------------------------------------
    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    # ----- Unwraps -----------------------------------------------------------
    def unwrap(self) -> T:
        """Return the inner value if ``Ok``.

        On ``Err`` the wrapped error is raised when it is an exception,
        otherwise a :class:`RuntimeError` describing it.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        error = cast(Err[T, E], self).error
        if isinstance(error, BaseException):
            raise error
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def get_or(self, default: T) -> T:
        """Return the success value, or ``default`` if ``Err``."""
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        return default

    # ----- Combinators -------------------------------------------------------
    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain computations that already return a :class:`Result`."""
        if isinstance(self, Ok):
            return fn(cast(Ok[T, E], self).value)
        return cast(Result[U, E], self)

    # ----- Dunder helpers ----------------------------------------------------
    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True, repr=False)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True, repr=False)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def catching(fn: Callable[[T], U], *errors: type[Exception]) -> Callable[[T], Result[U, Exception]]:
    """Wrap ``fn`` so that the listed exceptions become ``Err`` values."""

    def wrapped(arg: T) -> Result[U, Exception]:
        try:
            return Ok(fn(arg))
        except errors as exc:
            return Err(exc)

    return wrapped


__all__ = ["Err", "Ok", "Result", "catching"]
