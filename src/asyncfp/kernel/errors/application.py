"""Application-layer errors – misuse of the library API."""

from __future__ import annotations

from asyncfp.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class NotComputedError(ApplicationError):
    """A cached outcome was read before any execution method ran."""

    default_code = "not_computed"

    def __init__(self, kind: str, accessor: str) -> None:
        super().__init__(
            f"{kind}.{accessor}() called before the chain was executed; "
            "await get(), run() or another execution method first",
            detail={"kind": kind, "accessor": accessor},
        )
        self.kind = kind
        self.accessor = accessor


class NotAnExceptionError(ApplicationError):
    """A callback returned something other than an exception where one was expected.

    The returned object stays available as :attr:`value`.
    """

    default_code = "not_an_exception"

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Expected an exception, got {type(value).__name__}: {value!r}",
            detail={"value_type": type(value).__name__},
        )
        self.value = value


__all__ = ["ApplicationError", "NotAnExceptionError", "NotComputedError"]
