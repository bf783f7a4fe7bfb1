"""Config – settings, loaders and validation errors."""

from asyncfp.config.settings import (
    AsyncFpSettings,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
    SettingsValidator,
    load_settings,
)
from asyncfp.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "AsyncFpSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "SettingsValidator",
    "load_settings",
]
