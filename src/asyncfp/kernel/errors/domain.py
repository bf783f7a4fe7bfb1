"""Domain errors – absent values and broken predicates."""

from __future__ import annotations

from asyncfp.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a value does not satisfy what the caller asked of it."""

    default_code = "domain_error"


class NoSuchElementError(DomainError):
    """A required element is absent.

    Raised by ``Option.get`` on an empty option and stored as the failure of a
    ``Try`` whose ``filter`` predicate matched without an error provider.
    """

    default_code = "no_such_element"


NoSuchElementException = NoSuchElementError


__all__ = [
    "DomainError",
    "NoSuchElementError",
    "NoSuchElementException",
]
