"""Resolution: per-user compilation, setting resolution and enforcement."""
from mp_appsec.application.resolution.compiler import (
    CompiledResource,
    CompiledUserPolicy,
    ContributedSetting,
    build_resource_setting,
    compile_user_policy,
)
from mp_appsec.application.resolution.conditions import ConditionCheck, resolve_condition
from mp_appsec.application.resolution.enforcement import ApplyResult, apply_setting, enforce
from mp_appsec.application.resolution.resolver import compute_resource_setting, resolve
from mp_appsec.application.resolution.role_policies import (
    ResolvedRolePolicy,
    RolePolicies,
    collect_role_policy_settings,
    filter_role_policies,
    resolve_role_policies,
)

__all__ = [
    "ApplyResult",
    "CompiledResource",
    "CompiledUserPolicy",
    "ConditionCheck",
    "ContributedSetting",
    "ResolvedRolePolicy",
    "RolePolicies",
    "apply_setting",
    "build_resource_setting",
    "collect_role_policy_settings",
    "compile_user_policy",
    "compute_resource_setting",
    "enforce",
    "filter_role_policies",
    "resolve",
    "resolve_condition",
    "resolve_role_policies",
]
