"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── ConfigurationError                 (configuration.py)
    │   ├── InvalidResourceTypeError
    │   ├── InvalidProtectedResourceError
    │   ├── InvalidPolicyError
    │   ├── UnknownResourceError
    │   ├── UnknownConditionFactoryError
    │   ├── UnknownConditionFunctionError
    │   ├── UnknownPolicySettingError
    │   └── SecurityNotInitializedError
    └── AuthorizationError                 (authorization.py)
        ├── ResourceDeniedError
        └── ConditionEvaluationError
"""

from mp_appsec.kernel.errors.authorization import (
    AuthorizationError,
    ConditionEvaluationError,
    ResourceDeniedError,
)
from mp_appsec.kernel.errors.base import BaseError
from mp_appsec.kernel.errors.configuration import (
    GENERIC_CONFIGURATION_MESSAGE,
    ConfigurationError,
    InvalidPolicyError,
    InvalidProtectedResourceError,
    InvalidResourceTypeError,
    SecurityNotInitializedError,
    UnknownConditionFactoryError,
    UnknownConditionFunctionError,
    UnknownPolicySettingError,
    UnknownResourceError,
)

__all__ = [
    "GENERIC_CONFIGURATION_MESSAGE",
    "AuthorizationError",
    "BaseError",
    "ConditionEvaluationError",
    "ConfigurationError",
    "InvalidPolicyError",
    "InvalidProtectedResourceError",
    "InvalidResourceTypeError",
    "ResourceDeniedError",
    "SecurityNotInitializedError",
    "UnknownConditionFactoryError",
    "UnknownConditionFunctionError",
    "UnknownPolicySettingError",
    "UnknownResourceError",
]
