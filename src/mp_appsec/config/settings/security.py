"""Config settings: SecuritySettings."""
from __future__ import annotations

import dataclasses
import logging
import typing

from mp_appsec.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class SecuritySettings:
    """Process-level settings of the security service.

    Read from ``APPSEC_*`` environment variables by
    :class:`~mp_appsec.config.settings.loaders.EnvSettingsLoader`:

    * ``APPSEC_DEFAULT_ROLE``: role applied to users whose role store entry
      is missing (required).
    * ``APPSEC_LOG_LEVEL``: stdlib level name (default ``INFO``).
    * ``APPSEC_LOG_JSON``: JSON log lines instead of console output.
    * ``APPSEC_SERVICE_NAME``: service name stamped on audit entries.
    """

    _prefix: typing.ClassVar[str] = "APPSEC"

    default_role: str
    log_level: str = "INFO"
    log_json: bool = True
    service_name: str = "appsec"

    def __post_init__(self) -> None:
        if not self.default_role:
            raise InvalidSettingValueError(
                "default_role", self.default_role, "a default role is required"
            )
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
        self.log_level = level


__all__ = ["SecuritySettings"]
