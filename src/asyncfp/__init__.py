"""
asyncfp – lazy, memoized ``Try`` and ``Option`` for asyncio code.

Import path convention::

    from asyncfp import Option, Try
    from asyncfp.kernel.errors import NoSuchElementError
    from asyncfp.config import AsyncFpSettings
"""

from __future__ import annotations

from asyncfp.config import AsyncFpSettings, load_settings
from asyncfp.kernel import (
    BaseError,
    NoSuchElementError,
    NoSuchElementException,
    NotAnExceptionError,
    NotComputedError,
    Option,
    Try,
)
from asyncfp.observability.logging import JsonLoggerFactory

__version__ = "0.1.0"


def configure(settings: AsyncFpSettings | None = None) -> AsyncFpSettings:
    """Configure structlog output from *settings* (env-loaded when omitted)."""
    settings = settings or load_settings()
    JsonLoggerFactory.configure(settings.level, json=settings.log_json)
    return settings


__all__ = [
    "BaseError",
    "NoSuchElementError",
    "NoSuchElementException",
    "NotAnExceptionError",
    "NotComputedError",
    "Option",
    "Try",
    "__version__",
    "configure",
]
