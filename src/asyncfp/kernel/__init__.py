"""Kernel – errors and the deferred Try / Option types."""

from asyncfp.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    NoSuchElementError,
    NoSuchElementException,
    NotAnExceptionError,
    NotComputedError,
)
from asyncfp.kernel.types import Option, Result, Try

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "NoSuchElementError",
    "NoSuchElementException",
    "NotAnExceptionError",
    "NotComputedError",
    "Option",
    "Result",
    "Try",
]
