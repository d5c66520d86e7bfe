"""
Explicit success/failure values for collaborator calls.

Collaborators (binder, unbinder, environment reader ...) report errors by
raising. :func:`capture` converts a call into a :class:`Success` or
:class:`Failure` so callers branch on the value instead of intercepting
exceptions. ``asyncio.CancelledError`` is not an ``Exception`` and is never
captured.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def map(self, fn: Callable[[T], U]) -> Outcome[U]:
        """Apply ``fn`` to the value; an error raised by ``fn`` becomes a Failure."""
        try:
            return Success(fn(self.value))
        except Exception as e:
            return Failure(e)


@dataclass(frozen=True)
class Failure:
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__

    def map(self, fn: Callable[[Any], Any]) -> Failure:
        return self


Outcome = Union[Success[T], Failure]


async def capture(fn: Callable[..., T | Awaitable[T]], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Call ``fn`` (sync or async) and wrap its result or raised error."""
    try:
        result = fn(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        return Failure(e)
    return Success(result)
