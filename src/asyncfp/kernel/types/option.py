"""Option[T] – a lazily resolved value that may be absent.

Absence is a carried value of ``None``. Unlike :class:`~asyncfp.kernel.types.try_.Try`
there is no error channel: an exception raised by a callback propagates out
of the awaited execution method.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from asyncfp.kernel.errors import NoSuchElementError
from asyncfp.kernel.types.result import Result
from asyncfp.kernel.types.steps import EMPTY_CHAIN, Deferred, as_error, resolve
from asyncfp.kernel.types.try_ import Try

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Option(Deferred[T]):
    """Value that may be absent, resolved through a deferred step chain."""

    __slots__ = ()

    _kind = "Option"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def none(cls) -> Option[Any]:
        async def step(_: Result) -> Result:
            return Result()

        return cls(EMPTY_CHAIN.append(step))

    @classmethod
    def some(cls, value: T) -> Option[T]:
        async def step(_: Result) -> Result:
            return Result().set_value(value)

        return cls(EMPTY_CHAIN.append(step))

    @classmethod
    def of(cls, value: T | None) -> Option[T]:
        return cls.none() if value is None else cls.some(value)

    @classmethod
    def when(cls, condition: bool, value: T | Callable[[], T | Awaitable[T]]) -> Option[T]:
        """``some(value)`` when *condition* holds, else ``none()``.

        A callable *value* is treated as a provider and only called when the
        chain runs.
        """
        if not condition:
            return cls.none()
        if not callable(value):
            return cls.some(value)

        async def step(_: Result) -> Result:
            return Result().set_value(await resolve(value()))

        return cls(EMPTY_CHAIN.append(step))

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[[T], bool | Awaitable[bool]]) -> Option[T]:
        """Empty the option when ``predicate(value)`` is false."""

        async def step(prev: Result) -> Result:
            value = prev.get_value()
            if value is not None and not await resolve(predicate(value)):
                prev.set_value(None)
            return prev

        return self._then(step)

    def map(self, func: Callable[[T], U | Awaitable[U]]) -> Option[U]:
        async def step(prev: Result) -> Result:
            value = prev.get_value()
            if value is not None:
                prev.set_value(await resolve(func(value)))
            return prev

        return self._then(step)

    def map_try(self, func: Callable[[T], U | Awaitable[U]]) -> Try[U]:
        """Resolve this option with ``get()`` and apply *func* inside a ``Try``.

        An empty option yields a failed ``Try`` holding ``NoSuchElementError``.
        """

        async def compute() -> U:
            return await resolve(func(await self.get()))

        return Try.of(compute)

    def flat_map(self, func: Callable[[T], Option[U] | Awaitable[Option[U]]]) -> Option[U]:
        async def step(prev: Result) -> Result:
            value = prev.get_value()
            if value is not None:
                nested = await resolve(func(value))
                prev.set_value(await nested._value())
            return prev

        return self._then(step)

    def or_else(
        self,
        alternative: Option[U] | Callable[[], Option[U] | Awaitable[Option[U]]],
    ) -> Option[T | U]:
        """Fall back to *alternative* (an ``Option`` or a provider of one) when empty."""

        async def step(prev: Result) -> Result:
            if prev.get_value() is not None:
                return prev
            other = alternative if isinstance(alternative, Option) else await resolve(alternative())
            return Result().set_value(await other._value())

        return self._then(step)

    def on_empty(self, func: Callable[[], Any]) -> Option[T]:
        async def step(prev: Result) -> Result:
            if prev.get_value() is None:
                await resolve(func())
            return prev

        return self._then(step)

    def peek(self, func: Callable[[T], Any]) -> Option[T]:
        async def step(prev: Result) -> Result:
            value = prev.get_value()
            if value is not None:
                await resolve(func(value))
            return prev

        return self._then(step)

    async def fold(self, if_none: U | Callable[[], U | Awaitable[U]], mapper: Callable[[T], R | Awaitable[R]]) -> R | U:
        return await self.map(mapper).get_or_else(if_none)

    def transform(self, func: Callable[[Option[T]], R]) -> R:
        return func(self)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def _value(self) -> T | None:
        return (await self._compute()).get_value()

    async def get(self) -> T:
        value = await self._value()
        if value is None:
            raise NoSuchElementError("No value present")
        return value

    async def run(self) -> None:
        await self._compute()

    async def get_or_else(self, fallback: U | Callable[[], U | Awaitable[U]]) -> T | U:
        """Return the value, else *fallback* (called lazily when it is callable)."""
        value = await self._value()
        if value is not None:
            return value
        if callable(fallback):
            return await resolve(fallback())
        return fallback

    async def get_or_else_raise(self, error_provider: Callable[[], BaseException | Awaitable[BaseException]]) -> T:
        value = await self._value()
        if value is None:
            raise as_error(await resolve(error_provider()))
        return value

    # ------------------------------------------------------------------
    # Cached state
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return self._cached("is_empty").get_value() is None

    def is_defined(self) -> bool:
        return self._cached("is_defined").get_value() is not None

    def _outcome(self, result: Result) -> dict[str, Any]:
        return {"empty": result.get_value() is None}

    def __repr__(self) -> str:
        if self._final is None:
            return "Option(<pending>)"
        value = self._final.get_value()
        return "Nothing" if value is None else f"Some({value!r})"


__all__ = ["Option"]
