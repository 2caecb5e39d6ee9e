"""Definition: policy catalogue validation.

Checks, for each policy:

- no duplicated policy name
- settings are present and each carries a unique label
- conditions have the ``factory.function`` shape
- every granted resource exists in the dictionary and is granted a setting
  its type allows
- a declared default setting names one of the policy settings

A setting that lists no protected resource is fine: it selects the default
behaviour of every resource.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from mp_appsec.kernel.errors import BaseError, InvalidPolicyError
from mp_appsec.kernel.security import (
    Policy,
    PolicyResourceGrant,
    PolicySetting,
    ProtectedResource,
    ResourceType,
    split_condition,
)
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)


def validate_policies(
    policies: Iterable[Policy],
    dictionary: Mapping[str, ProtectedResource],
    resource_types: Mapping[str, ResourceType],
) -> dict[str, Policy]:
    catalogue: dict[str, Policy] = {}
    for policy in policies:
        try:
            _check_policy(policy, dictionary, resource_types, catalogue)
        except BaseError as exc:
            raise exc.add_context(f"invalid policy [{policy.name}]")
        catalogue[policy.name] = policy
    return catalogue


def _check_policy(
    policy: Policy,
    dictionary: Mapping[str, ProtectedResource],
    resource_types: Mapping[str, ResourceType],
    catalogue: Mapping[str, Policy],
) -> None:
    if not policy.name:
        raise InvalidPolicyError("Name is required")
    logger.debug("security.policy.add", policy=policy.name)
    if policy.settings is None:
        raise InvalidPolicyError("Settings is required")
    if policy.name in catalogue:
        raise InvalidPolicyError(f"Duplicated policy [{policy.name}]")

    labels: set[str] = set()
    for policy_setting in policy.settings:
        try:
            _check_policy_setting(policy_setting, dictionary, resource_types)
            if policy_setting.setting in labels:
                raise InvalidPolicyError(f"Duplicated setting [{policy_setting.setting}]")
        except BaseError as exc:
            raise exc.add_context(f"invalid policy setting [{policy_setting.setting}]")
        labels.add(policy_setting.setting)

    if policy.default_setting and policy.default_setting not in labels:
        raise InvalidPolicyError(f"defaultSetting [{policy.default_setting}] is incorrect")


def _check_policy_setting(
    policy_setting: PolicySetting,
    dictionary: Mapping[str, ProtectedResource],
    resource_types: Mapping[str, ResourceType],
) -> None:
    if not policy_setting.setting:
        raise InvalidPolicyError("setting is required in policy settings")
    if policy_setting.condition is not None and split_condition(policy_setting.condition) is None:
        raise InvalidPolicyError(
            f"condition [{policy_setting.condition}] must be formatted as factory.function"
        )
    for grant in policy_setting.protected_resources:
        try:
            _check_grant(grant, dictionary, resource_types)
        except BaseError as exc:
            raise exc.add_context(f"invalid protected resource [{grant.resource}]")


def _check_grant(
    grant: PolicyResourceGrant,
    dictionary: Mapping[str, ProtectedResource],
    resource_types: Mapping[str, ResourceType],
) -> None:
    resource = dictionary.get(grant.resource)
    if resource is None:
        raise InvalidPolicyError(f"Resource [{grant.resource}] is not defined in the dictionary")
    if not grant.setting:
        raise InvalidPolicyError("Setting is required")
    resource_type = resource_types[resource.type]
    if resource_type.find_setting(grant.setting) is None:
        raise InvalidPolicyError(
            f"Resource [{grant.resource}] uses an undefined setting [{grant.setting}]. "
            f"Allowed values by its type [{resource_type.name}] are {resource_type.setting_values}"
        )


__all__ = ["validate_policies"]
