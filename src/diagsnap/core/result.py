"""Typed success/failure container returned by the diagnostic printer.

A diagnostic dump must never crash the process that asked for it, so the
public operations in :mod:`diagsnap.printer` return a ``Result`` instead of
raising. Callers decide whether a failure matters:

>>> from diagsnap.core.result import ok, err
>>> ok(3).map(lambda n: n * 2).unwrap()
6
>>> err("bad tag").unwrap(default=0)
0

Only the handful of combinators the printer and its callers need are provided:
``map``, ``flat_map``, ``map_err`` and the ``unwrap`` family.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, cast, overload

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Either ``Ok[T]`` (the call succeeded) or ``Err[E]`` (it did not)."""

    def is_ok(self) -> bool:
        """Return ``True`` for :class:`Ok`."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` for :class:`Err`."""
        return isinstance(self, Err)

    @overload
    def unwrap(self) -> T: ...
    @overload
    def unwrap(self, default: T) -> T: ...

    def unwrap(self, default: T | None = None) -> T:
        """Return the success value.

        On ``Err`` the ``default`` is returned when given; otherwise the error
        itself is raised if it is an exception, or wrapped in ``RuntimeError``.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        if default is not None:
            return default
        error = cast(Err[T, E], self).error
        if isinstance(error, BaseException):
            raise error
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error payload, raising ``RuntimeError`` on ``Ok``."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Transform the success value, leaving errors untouched."""
        if isinstance(self, Ok):
            return Ok(fn(cast(Ok[T, E], self).value))
        return cast(Result[U, E], self)

    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a step that itself returns a :class:`Result`."""
        if isinstance(self, Ok):
            return fn(cast(Ok[T, E], self).value)
        return cast(Result[U, E], self)

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        """Transform the error payload, leaving success untouched."""
        if isinstance(self, Err):
            return Err(fn(cast(Err[T, E], self).error))
        return cast(Result[T, F], self)

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed outcome carrying ``error``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Build an :class:`Ok` with friendlier inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Build an :class:`Err` with friendlier inference at call sites."""
    return Err(error)


__all__ = ["Result", "Ok", "Err", "ok", "err"]
