"""Configuration errors: structural or referential problems in the security definition."""

from __future__ import annotations

from typing import Any

from mp_appsec.kernel.errors.base import BaseError

GENERIC_CONFIGURATION_MESSAGE = "Invalid Application Security Configuration"


class ConfigurationError(BaseError):
    """The security configuration cannot be used.

    Always fatal to the operation that discovered it (load, compilation or
    enforcement); callers should fail closed.
    """

    default_code = "invalid_security_configuration"


class InvalidResourceTypeError(ConfigurationError):
    """A resource type declaration breaks a registry rule."""

    default_code = "invalid_resource_type"


class InvalidProtectedResourceError(ConfigurationError):
    """A dictionary entry breaks a dictionary rule."""

    default_code = "invalid_protected_resource"


class InvalidPolicyError(ConfigurationError):
    """A policy, one of its settings or one of its grants is inconsistent."""

    default_code = "invalid_policy"


class UnknownResourceError(ConfigurationError):
    """No protected resource matches the given locator or name."""

    default_code = "unknown_protected_resource"

    def __init__(self, locator: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Protected resource [{locator}] undefined", **kwargs)
        self.locator = locator


class UnknownConditionFactoryError(ConfigurationError):
    """A policy condition names a condition factory that was never registered."""

    default_code = "unknown_condition_factory"

    def __init__(self, factory: str, **kwargs: Any) -> None:
        super().__init__(
            f"Undefined condition factory [{factory}]. Check your security config.",
            **kwargs,
        )
        self.factory = factory


class UnknownConditionFunctionError(ConfigurationError):
    """The condition factory exists but does not provide the named function."""

    default_code = "unknown_condition_function"

    def __init__(self, factory: str, function: str, **kwargs: Any) -> None:
        super().__init__(
            f"No condition implementation [{function}] in [{factory}]",
            **kwargs,
        )
        self.factory = factory
        self.function = function


class UnknownPolicySettingError(ConfigurationError):
    """A role selects a setting label that its policy does not define."""

    default_code = "unknown_policy_setting"

    def __init__(self, policy: str, setting: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Setting [{setting}] does NOT exist for policy [{policy}]",
            **kwargs,
        )
        self.policy = policy
        self.setting = setting


class SecurityNotInitializedError(ConfigurationError):
    """The security service was used before a definition was loaded."""

    default_code = "security_not_initialized"

    def __init__(self, message: str = "System security not initialized", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "GENERIC_CONFIGURATION_MESSAGE",
    "ConfigurationError",
    "InvalidPolicyError",
    "InvalidProtectedResourceError",
    "InvalidResourceTypeError",
    "SecurityNotInitializedError",
    "UnknownConditionFactoryError",
    "UnknownConditionFunctionError",
    "UnknownPolicySettingError",
    "UnknownResourceError",
]
