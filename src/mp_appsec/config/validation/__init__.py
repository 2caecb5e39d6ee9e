"""Config validation errors."""
from mp_appsec.config.validation.errors import (
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["InvalidSettingValueError", "MissingRequiredSettingError"]
