"""Kernel security: resource types, dictionary entries, policies, conditions, roles."""
from mp_appsec.kernel.security.conditions import ConditionFactory, ConditionFunction, split_condition
from mp_appsec.kernel.security.policy import Policy, PolicyResourceGrant, PolicySetting
from mp_appsec.kernel.security.principal import (
    Role,
    RolePolicy,
    RoleSettingSelection,
    SettingSelection,
    User,
    selection_label,
)
from mp_appsec.kernel.security.protected_resource import ProtectedResource
from mp_appsec.kernel.security.resource_type import (
    ApplyFunction,
    Environment,
    ResourceType,
    Setting,
    frozen_mapping,
    parse_environments,
)
from mp_appsec.kernel.security.stores import RoleStore, UserStore

__all__ = [
    "ApplyFunction",
    "ConditionFactory",
    "ConditionFunction",
    "Environment",
    "Policy",
    "PolicyResourceGrant",
    "PolicySetting",
    "ProtectedResource",
    "ResourceType",
    "Role",
    "RolePolicy",
    "RoleSettingSelection",
    "RoleStore",
    "Setting",
    "SettingSelection",
    "User",
    "UserStore",
    "frozen_mapping",
    "parse_environments",
    "selection_label",
    "split_condition",
]
