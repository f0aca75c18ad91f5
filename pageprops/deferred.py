"""Awaitable handle for properties that arrive later."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


async def _value(value: T) -> T:
    return value


async def _raise(exc: BaseException) -> Any:
    raise exc


class Deferred(Generic[T]):
    """Lazily started work that can be chained and awaited more than once.

    ``factory`` is called the first time the handle is awaited and its awaitable
    is scheduled on the running event loop; later awaits share the same outcome.
    A handle that is never awaited never starts its work.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        self._factory: Optional[Callable[[], Awaitable[T]]] = factory
        self._future: Optional[asyncio.Future[T]] = None

    @classmethod
    def resolved(cls, value: T) -> "Deferred[T]":
        return cls(lambda: _value(value))

    @classmethod
    def rejected(cls, exc: BaseException) -> "Deferred[Any]":
        return cls(lambda: _raise(exc))

    @property
    def started(self) -> bool:
        return self._future is not None

    def then(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[Exception], U] | None = None,
    ) -> "Deferred[U]":
        """Return a new handle for ``on_success(value)``.

        When ``on_failure`` is given, a failure of this handle is passed to it and
        its return value becomes the result. Errors raised by ``on_success`` are
        not routed to ``on_failure``.
        """
        return Deferred(lambda: self._chain(on_success, on_failure))

    async def _chain(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[Exception], U] | None,
    ) -> U:
        try:
            value = await self
        except Exception as exc:
            if on_failure is None:
                raise
            return on_failure(exc)
        return on_success(value)

    def __await__(self) -> Generator[Any, None, T]:
        if self._future is None:
            assert self._factory is not None
            self._future = asyncio.ensure_future(self._factory())
            self._factory = None
        return self._future.__await__()

    def __repr__(self) -> str:
        if self._future is None or not self._future.done():
            state = "pending"
        elif self._future.cancelled():
            state = "cancelled"
        elif self._future.exception() is not None:
            state = "rejected"
        else:
            state = "resolved"
        return f"<Deferred {state}>"


class PendingProperties:
    """Non-awaitable holder for a ``Deferred`` handed to templates.

    Async Jinja awaits every call result it sees. Wrapping the handle keeps it
    intact until a helper such as ``get_property`` attaches its own failure
    handling to it.
    """

    __slots__ = ("deferred",)

    def __init__(self, deferred: Deferred[Any]) -> None:
        self.deferred = deferred

    def __repr__(self) -> str:
        return f"<PendingProperties {self.deferred!r}>"


__all__ = ["Deferred", "PendingProperties"]
