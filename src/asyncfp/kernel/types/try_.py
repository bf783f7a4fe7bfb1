"""Try[T] – a lazily executed computation that succeeds with a value or fails.

Building a ``Try`` only records steps. The chain runs once, on the first
awaited execution method (``get``, ``run``, ``get_or_else`` …), and every
later execution method reads the cached outcome::

    price = await (
        Try.of(lambda: fetch_price(sku))
        .map(lambda p: p * 1.2)
        .recover(lambda _: 0)
        .get()
    )
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from asyncfp.kernel.errors import NoSuchElementError
from asyncfp.kernel.types.result import Result
from asyncfp.kernel.types.steps import EMPTY_CHAIN, Deferred, as_error, resolve, run_in_try

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=BaseException)

Predicate = Callable[[T], bool | Awaitable[bool]]
ErrorProvider = Callable[[T], BaseException | Awaitable[BaseException]]


def _consume(task: asyncio.Future[Any]) -> None:
    if not task.cancelled():
        task.exception()


async def _collect(tries: Sequence[Try[Any]], parallel: bool) -> list[Any]:
    if not parallel:
        return [await t.get() for t in tries]
    tasks = [asyncio.ensure_future(t.get()) for t in tries]
    for task in tasks:
        task.add_done_callback(_consume)
    pending = set(tasks)
    while pending:
        _, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
        # Inputs still running are left alone; their Try caches the outcome.
        for task in tasks:
            if task.done() and not task.cancelled() and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]
    return [task.result() for task in tasks]


class Try(Deferred[T]):
    """Computation that either succeeds with a value or fails with an exception."""

    __slots__ = ()

    _kind = "Try"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _start(cls, step: Callable[[Result], Awaitable[Result]]) -> Try[Any]:
        return cls(EMPTY_CHAIN.append(step))

    @classmethod
    def of(cls, func: Callable[[], T | Awaitable[T]]) -> Try[T]:
        """Wrap ``func()``; a raised exception becomes the failure."""

        async def step(prev: Result) -> Result:
            ok, value = await run_in_try(prev, func)
            if ok:
                prev.set_value(value)
            return prev

        return cls._start(step)

    @classmethod
    def success(cls, value: T) -> Try[T]:
        async def step(_: Result) -> Result:
            return Result().set_value(value)

        return cls._start(step)

    @classmethod
    def failure(cls, error: BaseException) -> Try[Any]:
        async def step(_: Result) -> Result:
            return Result().set_error(as_error(error))

        return cls._start(step)

    @classmethod
    def combine(cls, *args: Any, parallel: bool = True) -> Try[Any]:
        """Resolve every ``Try`` in *args* and pass their values to the last argument.

        ``Try.combine(t1, t2, lambda a, b: a + b)``. With ``parallel=True`` the
        inputs are awaited concurrently; the first failure in input order wins.
        """
        if not args or not callable(args[-1]):
            raise TypeError("Try.combine() expects one or more Try instances followed by a function")
        *tries, func = args
        for candidate in tries:
            if not isinstance(candidate, Try):
                raise TypeError(f"Try.combine() got {type(candidate).__name__}, expected Try")

        async def step(prev: Result) -> Result:
            ok, values = await run_in_try(prev, _collect, tries, parallel)
            if not ok:
                return prev
            ok, value = await run_in_try(prev, func, *values)
            if ok:
                prev.set_value(value)
            return prev

        return cls._start(step)

    @classmethod
    def sequence(cls, tries: Sequence[Try[Any]], parallel: bool = False) -> Try[list[Any]]:
        """Collect the values of *tries*, in order, into a list."""
        tries = list(tries)

        async def step(prev: Result) -> Result:
            ok, values = await run_in_try(prev, _collect, tries, parallel)
            if ok:
                prev.set_value(values)
            return prev

        return cls._start(step)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def map(self, func: Callable[[T], U | Awaitable[U]]) -> Try[U]:
        async def step(prev: Result) -> Result:
            if prev.is_error():
                return prev
            ok, value = await run_in_try(prev, func, prev.get_value())
            if ok:
                prev.set_value(value)
            return prev

        return self._then(step)

    def map_if(self, predicate: Predicate[T], func: Callable[[T], U | Awaitable[U]]) -> Try[T | U]:
        async def apply(value: T) -> Any:
            if await resolve(predicate(value)):
                return await resolve(func(value))
            return value

        return self.map(apply)

    def flat_map(self, func: Callable[[T], Try[U] | Awaitable[Try[U]]]) -> Try[U]:
        async def unwrap(value: T) -> U:
            nested = await resolve(func(value))
            return await nested.get()

        return self.map(unwrap)

    def flat_map_if(
        self,
        predicate: Predicate[T],
        func: Callable[[T], Try[U] | Awaitable[Try[U]]],
    ) -> Try[T | U]:
        async def unwrap(value: T) -> Any:
            if not await resolve(predicate(value)):
                return value
            nested = await resolve(func(value))
            return await nested.get()

        return self.map(unwrap)

    def map_failure(self, func: Callable[[BaseException], BaseException | Awaitable[BaseException]]) -> Try[T]:
        return self.map_failure_with(BaseException, func)

    def map_failure_with(
        self,
        error_type: type[E],
        func: Callable[[E], BaseException | Awaitable[BaseException]],
    ) -> Try[T]:
        """Replace the failure with ``func(error)`` when it is an ``error_type``."""

        async def step(prev: Result) -> Result:
            error = prev.get_error()
            if error is None or not isinstance(error, error_type):
                return prev
            ok, mapped = await run_in_try(prev, func, error)
            if ok:
                prev.set_error(as_error(mapped))
            return prev

        return self._then(step)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def _reject(
        self,
        predicate: Callable[[T], Any],
        error_provider: ErrorProvider[T] | None,
        *,
        reject_on: bool,
        nested: bool,
    ) -> Try[T]:
        async def verdict(value: T) -> bool:
            outcome = await resolve(predicate(value))
            if nested:
                outcome = await outcome.get()
            return bool(outcome)

        async def step(prev: Result) -> Result:
            if prev.is_error():
                return prev
            value = prev.get_value()
            ok, holds = await run_in_try(prev, verdict, value)
            if not ok or holds is not reject_on:
                return prev
            if error_provider is None:
                return prev.set_error(NoSuchElementError(f"Predicate does not hold for {value}"))
            ok, error = await run_in_try(prev, error_provider, value)
            if ok:
                prev.set_error(as_error(error))
            return prev

        return self._then(step)

    def filter(self, predicate: Predicate[T], error_provider: ErrorProvider[T] | None = None) -> Try[T]:
        """Fail when ``predicate(value)`` is true.

        The failure is ``error_provider(value)`` or a
        :class:`~asyncfp.kernel.errors.NoSuchElementError`.
        """
        return self._reject(predicate, error_provider, reject_on=True, nested=False)

    def filter_try(
        self,
        predicate: Callable[[T], Try[bool] | Awaitable[Try[bool]]],
        error_provider: ErrorProvider[T] | None = None,
    ) -> Try[T]:
        return self._reject(predicate, error_provider, reject_on=True, nested=True)

    def filter_not(self, predicate: Predicate[T], error_provider: ErrorProvider[T] | None = None) -> Try[T]:
        """Fail when ``predicate(value)`` is false."""
        return self._reject(predicate, error_provider, reject_on=False, nested=False)

    def filter_not_try(
        self,
        predicate: Callable[[T], Try[bool] | Awaitable[Try[bool]]],
        error_provider: ErrorProvider[T] | None = None,
    ) -> Try[T]:
        return self._reject(predicate, error_provider, reject_on=False, nested=True)

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------

    def recover(self, func: Callable[[BaseException], U | Awaitable[U]]) -> Try[T | U]:
        async def step(prev: Result) -> Result:
            if not prev.is_error():
                return prev
            ok, value = await run_in_try(prev, func, prev.get_error())
            if ok:
                prev.set_value(value).set_error(None)
            return prev

        return self._then(step)

    def recover_with(self, func: Callable[[BaseException], Try[U] | Awaitable[Try[U]]]) -> Try[T | U]:
        async def unwrap(error: BaseException) -> U:
            nested = await resolve(func(error))
            return await nested.get()

        return self.recover(unwrap)

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    def _tap(self, func: Callable[[Any], Any], *, on_error: bool) -> Try[T]:
        async def step(prev: Result) -> Result:
            if prev.is_error() is not on_error:
                return prev
            await run_in_try(prev, func, prev.get_error() if on_error else prev.get_value())
            return prev

        return self._then(step)

    def and_then(self, func: Callable[[T], Any]) -> Try[T]:
        """Run ``func(value)`` for its side effect; a raised error fails the ``Try``."""
        return self._tap(func, on_error=False)

    def peek(self, func: Callable[[T], Any]) -> Try[T]:
        return self._tap(func, on_error=False)

    def on_success(self, func: Callable[[T], Any]) -> Try[T]:
        return self._tap(func, on_error=False)

    def on_failure(self, func: Callable[[BaseException], Any]) -> Try[T]:
        return self._tap(func, on_error=True)

    def and_then_try(self, func: Callable[[T], Try[Any] | Awaitable[Try[Any]]]) -> Try[T]:
        async def run_nested(value: T) -> None:
            nested = await resolve(func(value))
            await nested.run()

        return self._tap(run_nested, on_error=False)

    def and_finally(self, func: Callable[[], Any]) -> Try[T]:
        """Run ``func()`` on both paths; a raised error becomes the failure."""

        async def step(prev: Result) -> Result:
            await run_in_try(prev, func)
            return prev

        return self._then(step)

    def and_finally_try(self, func: Callable[[], Try[Any] | Awaitable[Try[Any]]]) -> Try[T]:
        async def run_nested() -> None:
            nested = await resolve(func())
            await nested.run()

        return self.and_finally(run_nested)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def get(self) -> T:
        """Return the value, or raise the captured exception."""
        result = await self._compute()
        result.raise_error()
        return result.get_value()

    async def run(self) -> Try[T]:
        """Force execution; raises the captured exception on failure."""
        await self.get()
        return self

    async def get_or_else(self, fallback: U) -> T | U:
        result = await self._compute()
        return fallback if result.is_error() else result.get_value()

    async def get_or_else_get(self, func: Callable[[BaseException], U | Awaitable[U]]) -> T | U:
        result = await self._compute()
        if result.is_error():
            return await resolve(func(result.get_error()))  # type: ignore[arg-type]
        return result.get_value()

    async def get_or_else_raise(
        self,
        func: Callable[[BaseException], BaseException | Awaitable[BaseException]],
    ) -> T:
        result = await self._compute()
        if result.is_error():
            raise as_error(await resolve(func(result.get_error())))  # type: ignore[arg-type]
        return result.get_value()

    # ------------------------------------------------------------------
    # Cached state
    # ------------------------------------------------------------------

    def is_success(self) -> bool:
        return not self._cached("is_success").is_error()

    def is_failure(self) -> bool:
        return self._cached("is_failure").is_error()

    def get_cause(self) -> BaseException | None:
        return self._cached("get_cause").get_error()

    def __repr__(self) -> str:
        if self._final is None:
            return "Try(<pending>)"
        if self._final.is_error():
            return f"Failure({self._final.get_error()!r})"
        return f"Success({self._final.get_value()!r})"


__all__ = ["Try"]
