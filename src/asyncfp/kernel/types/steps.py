"""Deferred step execution shared by ``Try`` and ``Option``.

A chain is an ordered, persistent sequence of :data:`Step` callables. Nothing
runs until an execution method awaits :func:`run_steps`; the final
:class:`~asyncfp.kernel.types.result.Result` is then cached on the owning
:class:`Deferred` instance.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterator
from typing import Any, Generic, TypeVar

from asyncfp.kernel.errors import NotAnExceptionError, NotComputedError
from asyncfp.kernel.types.result import Result
from asyncfp.observability.logging import get_logger

T = TypeVar("T")

Step = Callable[[Result], Awaitable[Result]]

_log = get_logger(__name__)


class StepChain:
    """Persistent, append-only sequence of steps.

    Every node points at its parent, so :meth:`append` is O(1) and all chains
    derived from a common ancestor share the ancestor's nodes.
    """

    __slots__ = ("_parent", "_step", "_length")

    def __init__(self, parent: StepChain | None = None, step: Step | None = None) -> None:
        self._parent = parent
        self._step = step
        self._length = 0 if parent is None else parent._length + 1

    def append(self, step: Step) -> StepChain:
        return StepChain(self, step)

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Step]:
        steps: list[Step] = []
        node: StepChain = self
        while node._parent is not None:
            steps.append(node._step)  # type: ignore[arg-type]
            node = node._parent
        return reversed(steps)

    def __repr__(self) -> str:
        return f"StepChain(length={self._length})"


EMPTY_CHAIN = StepChain()


async def resolve(value: T | Awaitable[T]) -> T:
    """Await *value* when it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


async def run_in_try(prev: Result, func: Callable[..., Any], *args: Any) -> tuple[bool, Any]:
    """Call ``func(*args)`` and await its outcome, capturing failures into *prev*.

    Returns ``(True, value)`` on success. On an :class:`Exception` the error is
    stored in *prev* and ``(False, None)`` is returned. Anything that is not
    an ``Exception`` (cancellation, ``KeyboardInterrupt``) propagates.
    """
    try:
        value = await resolve(func(*args))
    except Exception as exc:  # noqa: BLE001
        _log.debug("asyncfp.try.captured", error_type=type(exc).__name__)
        prev.set_error(exc)
        return False, None
    return True, value


def as_error(value: Any) -> BaseException:
    """Return *value* when it is an exception, else wrap it in ``NotAnExceptionError``."""
    if isinstance(value, BaseException):
        return value
    return NotAnExceptionError(value)


_config_warned = False


def _trace_enabled() -> bool:
    global _config_warned
    from asyncfp.config import ConfigError, load_settings

    try:
        return load_settings().trace_steps
    except ConfigError as exc:
        if not _config_warned:
            _config_warned = True
            _log.warning("asyncfp.settings.invalid", error=str(exc), trace_steps=False)
        return False


async def run_steps(chain: StepChain, *, kind: str = "chain") -> Result:
    """Run *chain* strictly in order, starting from an empty ``Result``.

    Exceptions escaping a step are not caught here. Invalid ``ASYNCFP_*``
    settings disable step tracing instead of failing the chain.
    """
    trace = _trace_enabled()
    result = Result()
    for index, step in enumerate(chain):
        result = await step(result)
        if trace:
            _log.debug("asyncfp.step", kind=kind, index=index, error=result.is_error())
    return result


class Deferred(Generic[T]):
    """Lazy, memoized owner of a step chain.

    Subclasses only add steps through :meth:`_then`, which returns a fresh
    instance; the receiver is never mutated apart from its one-shot cache.
    """

    __slots__ = ("_steps", "_final", "_lock")

    _kind = "Deferred"

    def __init__(self, steps: StepChain = EMPTY_CHAIN) -> None:
        self._steps = steps
        self._final: Result | None = None
        self._lock = asyncio.Lock()

    def _then(self, step: Step) -> Any:
        return type(self)(self._steps.append(step))

    @property
    def is_computed(self) -> bool:
        return self._final is not None

    async def _compute(self) -> Result:
        if self._final is None:
            async with self._lock:
                if self._final is None:
                    result = await run_steps(self._steps, kind=self._kind)
                    _log.debug(
                        "asyncfp.chain.completed",
                        kind=self._kind,
                        steps=len(self._steps),
                        **self._outcome(result),
                    )
                    self._final = result
        return self._final

    def _cached(self, accessor: str) -> Result:
        if self._final is None:
            raise NotComputedError(self._kind, accessor)
        return self._final

    def _outcome(self, result: Result) -> dict[str, Any]:
        return {"failed": result.is_error()}


__all__ = [
    "Deferred",
    "EMPTY_CHAIN",
    "Step",
    "StepChain",
    "as_error",
    "resolve",
    "run_in_try",
    "run_steps",
]
