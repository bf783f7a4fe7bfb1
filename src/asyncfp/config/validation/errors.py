"""Config validation errors."""
from __future__ import annotations

from asyncfp.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or failed validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable backing a field without default is unset."""

    default_code = "missing_required_setting"

    def __init__(self, env_key: str) -> None:
        super().__init__(
            f"Environment variable '{env_key}' is required",
            detail={"env_key": env_key},
        )
        self.env_key = env_key


class InvalidSettingValueError(ConfigError):
    """A field holds a value outside of what the engines accept."""

    default_code = "invalid_setting_value"

    def __init__(self, field_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{field_name}={value!r} rejected: {reason}",
            detail={"field": field_name, "reason": reason},
        )
        self.field_name = field_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
