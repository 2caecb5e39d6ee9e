"""Resolution: compile a user's active policies against a snapshot.

The result maps every protected resource to the settings that the user's
policies may contribute to it.  Contributions keep policy order, then
setting order, then grant order; resolution relies on that order to break
priority ties.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any

from mp_appsec.application.definition import DefinitionSnapshot
from mp_appsec.application.resolution.conditions import ConditionCheck, resolve_condition
from mp_appsec.application.resolution.role_policies import ResolvedRolePolicy
from mp_appsec.kernel.errors import BaseError, ConfigurationError, UnknownResourceError
from mp_appsec.kernel.security import (
    Environment,
    Policy,
    PolicyResourceGrant,
    PolicySetting,
    ProtectedResource,
    ResourceType,
    Setting,
    frozen_mapping,
)


@dataclasses.dataclass(frozen=True)
class ContributedSetting:
    """One policy grant projected onto a protected resource."""

    policy: Policy
    policy_setting: PolicySetting
    grant: PolicyResourceGrant
    setting: Setting
    check_if_enabled: ConditionCheck = dataclasses.field(compare=False, repr=False)

    @property
    def params(self) -> Mapping[str, Any]:
        return self.setting.params


@dataclasses.dataclass(frozen=True)
class CompiledResource:
    """A protected resource with its type and every contributed setting."""

    resource: ProtectedResource
    resource_type: ResourceType
    default_setting: Setting
    settings: tuple[ContributedSetting, ...] = ()

    @property
    def name(self) -> str:
        return self.resource.name

    @property
    def locator(self) -> str:
        return self.resource.locator

    @property
    def target(self) -> str | None:
        return self.resource_type.target


class CompiledUserPolicy:
    """Per-user view of the protected resources.

    Built by :func:`compile_user_policy`; read-only once built.
    """

    def __init__(self, snapshot: DefinitionSnapshot, resources: Iterable[CompiledResource]) -> None:
        self._snapshot = snapshot
        self._resources = frozen_mapping({r.name: r for r in resources})
        self._by_locator = frozen_mapping({r.locator: r for r in self._resources.values()})

    @property
    def snapshot(self) -> DefinitionSnapshot:
        return self._snapshot

    @property
    def resources(self) -> Mapping[str, CompiledResource]:
        return self._resources

    def get_protected_resource_by_locator(self, locator: str) -> CompiledResource:
        compiled = self._by_locator.get(locator)
        if compiled is None:
            raise UnknownResourceError(locator)
        return compiled

    def get_protected_resources_by_target(self, target: str) -> list[CompiledResource]:
        return [r for r in self._resources.values() if r.target == target]

    def __len__(self) -> int:
        return len(self._resources)

    def __repr__(self) -> str:
        return f"CompiledUserPolicy(version={self._snapshot.version}, resources={len(self._resources)})"


def build_resource_setting(
    resource_type: ResourceType,
    value: str,
    params: Mapping[str, Any] | None,
) -> Setting:
    """Type setting *value* extended with *params*; value and priority stay the type's."""
    setting = resource_type.find_setting(value)
    if setting is None:
        raise ConfigurationError(f"Setting [{value}] is unknown to type [{resource_type.name}]")
    return setting.merged_with(params)


def compile_user_policy(
    snapshot: DefinitionSnapshot,
    role_policies: Iterable[ResolvedRolePolicy],
    environment: Environment | str | None = None,
) -> CompiledUserPolicy:
    """Project every grant of the selected policy settings onto its resource.

    With *environment*, only resources whose type declares it are compiled
    and grants on other resources are skipped.  The snapshot is not modified.
    """
    contributions: dict[str, list[ContributedSetting]] = {}
    resources: dict[str, tuple[ProtectedResource, ResourceType]] = {}
    for resource in snapshot.dictionary.values():
        resource_type = snapshot.resource_type_of(resource)
        if environment is not None and not resource_type.supports(environment):
            continue
        resources[resource.name] = (resource, resource_type)
        contributions[resource.name] = []

    for resolved in role_policies:
        for policy_setting in resolved.settings:
            check = resolve_condition(resolved.policy, policy_setting, snapshot)
            for grant in policy_setting.protected_resources:
                try:
                    _add_contribution(
                        grant,
                        resolved.policy,
                        policy_setting,
                        check,
                        snapshot,
                        resources,
                        contributions,
                        skip_foreign=environment is not None,
                    )
                except BaseError as exc:
                    raise exc.add_context(
                        f"Issue with policy [{resolved.policy.name}] setting [{policy_setting.setting}]"
                    )

    return CompiledUserPolicy(
        snapshot,
        (
            CompiledResource(
                resource=resource,
                resource_type=resource_type,
                default_setting=build_resource_setting(
                    resource_type, resource.default_setting, resource.params
                ),
                settings=tuple(contributions[name]),
            )
            for name, (resource, resource_type) in resources.items()
        ),
    )


def _add_contribution(
    grant: PolicyResourceGrant,
    policy: Policy,
    policy_setting: PolicySetting,
    check: ConditionCheck,
    snapshot: DefinitionSnapshot,
    resources: Mapping[str, tuple[ProtectedResource, ResourceType]],
    contributions: dict[str, list[ContributedSetting]],
    skip_foreign: bool,
) -> None:
    entry = resources.get(grant.resource)
    if entry is None:
        if skip_foreign and grant.resource in snapshot.dictionary:
            return
        raise UnknownResourceError(
            grant.resource,
            f"Resource [{grant.resource}] does not exist in dictionary",
        )
    _, resource_type = entry
    contributions[grant.resource].append(
        ContributedSetting(
            policy=policy,
            policy_setting=policy_setting,
            grant=grant,
            setting=build_resource_setting(resource_type, grant.setting, grant.params),
            check_if_enabled=check,
        )
    )


__all__ = [
    "CompiledResource",
    "CompiledUserPolicy",
    "ContributedSetting",
    "build_resource_setting",
    "compile_user_policy",
]
