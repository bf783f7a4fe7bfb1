"""Config settings – AsyncFpSettings and the cached loader."""
from __future__ import annotations

import dataclasses
import functools
import logging

from asyncfp.config.settings.base import Settings
from asyncfp.config.settings.loaders import EnvSettingsLoader
from asyncfp.config.validation import InvalidSettingValueError

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclasses.dataclass(frozen=True)
class AsyncFpSettings(Settings):
    """Library-wide knobs, read from ``ASYNCFP_*`` environment variables.

    Attributes:
        log_level: Root level applied by :func:`asyncfp.configure`.
        log_json: Render log events as JSON instead of console lines.
        trace_steps: Emit one debug event per executed step.
    """

    _prefix: dataclasses.ClassVar[str] = "ASYNCFP"

    log_level: str = "WARNING"
    log_json: bool = False
    trace_steps: bool = False

    def _validate(self) -> None:
        if self.log_level.upper() not in _LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"expected one of {', '.join(_LEVELS)}"
            )

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@functools.lru_cache(maxsize=1)
def load_settings() -> AsyncFpSettings:
    """Load :class:`AsyncFpSettings` once; ``load_settings.cache_clear()`` reloads."""
    return EnvSettingsLoader().load(AsyncFpSettings)


__all__ = ["AsyncFpSettings", "load_settings"]
