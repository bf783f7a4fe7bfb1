"""Config settings – env-based configuration."""
from asyncfp.config.settings.fp import AsyncFpSettings, load_settings
from asyncfp.config.settings.base import Settings
from asyncfp.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from asyncfp.config.settings.validator import SettingsValidator

__all__ = [
    "AsyncFpSettings",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
    "SettingsValidator",
    "load_settings",
]
