"""Result carrier threaded through a step chain."""

from __future__ import annotations

from types import TracebackType
from typing import Any


class Result:
    """Mutable box holding either a value or an error.

    A single ``Result`` is created per chain execution and handed from step
    to step; ``is_error()`` alone decides which slot is meaningful.
    """

    __slots__ = ("_value", "_error", "_traceback")

    def __init__(self) -> None:
        self._value: Any = None
        self._error: BaseException | None = None
        self._traceback: TracebackType | None = None

    def set_value(self, value: Any) -> Result:
        self._value = value
        return self

    def get_value(self) -> Any:
        return self._value

    def set_error(self, error: BaseException | None) -> Result:
        self._error = error
        # Later raises of the same object restart from this traceback.
        self._traceback = None if error is None else error.__traceback__
        return self

    def get_error(self) -> BaseException | None:
        return self._error

    def raise_error(self) -> None:
        """Re-raise the stored error with the traceback it had when stored."""
        if self._error is not None:
            raise self._error.with_traceback(self._traceback)

    def is_error(self) -> bool:
        return self._error is not None

    def has_value(self) -> bool:
        # Reports error absence; a successful ``None`` still "has a value".
        return self._error is None

    def __repr__(self) -> str:
        return f"Result(value={self._value!r}, error={self._error!r})"


__all__ = ["Result"]
