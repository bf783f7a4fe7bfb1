"""Config settings – SettingsValidator."""
from __future__ import annotations

import dataclasses

from asyncfp.config.settings.base import Settings


class SettingsValidator:
    """Report fields that ended up ``None`` although they have no default."""

    def validate(self, settings: Settings) -> list[str]:
        return [
            f"{field.name} is required but None"
            for field in dataclasses.fields(settings)
            if getattr(settings, field.name) is None and field.default is dataclasses.MISSING
        ]


__all__ = ["SettingsValidator"]
