"""Root error class for the asyncfp error hierarchy."""

from __future__ import annotations

from typing import Any, ClassVar


class BaseError(Exception):
    """Root of the library's own errors.

    Errors raised *by user callbacks* are never wrapped in this class; a
    ``Try`` stores and re-raises them unchanged. ``BaseError`` only covers what
    the library itself raises (absent values, misuse, configuration).

    Args:
        message: Human-readable description, also returned by ``str()``.
        code: Machine-readable slug, ``default_code`` when omitted.
        detail: Extra structured context for log events.
        cause: Underlying exception, chained as ``__cause__``.
    """

    default_code: ClassVar[str] = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Structured form, suitable as structlog event fields."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
