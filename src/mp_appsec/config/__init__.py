"""Config: settings loading and validation errors."""
from mp_appsec.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SecuritySettings,
    SettingsLoader,
)
from mp_appsec.config.validation import InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SecuritySettings",
    "SettingsLoader",
]
