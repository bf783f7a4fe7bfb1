"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   └── NoSuchElementError
    └── ApplicationError     (application.py)
        ├── NotComputedError
        └── NotAnExceptionError
"""

from asyncfp.kernel.errors.application import (
    ApplicationError,
    NotAnExceptionError,
    NotComputedError,
)
from asyncfp.kernel.errors.base import BaseError
from asyncfp.kernel.errors.domain import (
    DomainError,
    NoSuchElementError,
    NoSuchElementException,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "NoSuchElementError",
    "NoSuchElementException",
    "NotAnExceptionError",
    "NotComputedError",
]
