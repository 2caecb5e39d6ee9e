"""Config settings: env-based configuration of the security service."""
from mp_appsec.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_appsec.config.settings.security import SecuritySettings

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SecuritySettings", "SettingsLoader"]
