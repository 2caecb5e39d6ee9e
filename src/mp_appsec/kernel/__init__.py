"""Kernel: framework-agnostic security records and error hierarchy."""

from mp_appsec.kernel.errors import (
    AuthorizationError,
    BaseError,
    ConditionEvaluationError,
    ConfigurationError,
    ResourceDeniedError,
    UnknownConditionFactoryError,
    UnknownConditionFunctionError,
    UnknownResourceError,
)

__all__ = [
    "AuthorizationError",
    "BaseError",
    "ConditionEvaluationError",
    "ConfigurationError",
    "ResourceDeniedError",
    "UnknownConditionFactoryError",
    "UnknownConditionFunctionError",
    "UnknownResourceError",
]
