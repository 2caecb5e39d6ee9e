"""Resolution: turn a role into the policy settings it activates."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Sequence

from mp_appsec.application.definition import DefinitionSnapshot, filter_policy_setting
from mp_appsec.kernel.errors import UnknownPolicySettingError
from mp_appsec.kernel.security import (
    Environment,
    Policy,
    PolicySetting,
    Role,
    RoleSettingSelection,
    SettingSelection,
    selection_label,
)


@dataclasses.dataclass(frozen=True)
class ResolvedRolePolicy:
    """A policy together with the options selected for the user."""

    policy: Policy
    settings: tuple[PolicySetting, ...]

    @property
    def name(self) -> str:
        return self.policy.name

    def to_dict(self) -> dict:
        return {"name": self.policy.name, "settings": [s.to_dict() for s in self.settings]}


@dataclasses.dataclass(frozen=True)
class RolePolicies:
    """Every policy a role activates, in snapshot policy order."""

    description: str = ""
    policies: tuple[ResolvedRolePolicy, ...] = ()

    def __iter__(self) -> Iterator[ResolvedRolePolicy]:
        return iter(self.policies)

    def __len__(self) -> int:
        return len(self.policies)

    def to_list(self) -> list[dict]:
        return [p.to_dict() for p in self.policies]


def collect_role_policy_settings(
    selections: Sequence[SettingSelection],
    policy: Policy,
) -> tuple[PolicySetting, ...]:
    """Map selected labels to the policy's settings.

    A selection carrying params yields a copy of the setting with those params.
    """
    collected = []
    for selection in selections:
        policy_setting = policy.find_setting(selection_label(selection))
        if policy_setting is None:
            raise UnknownPolicySettingError(policy.name, selection_label(selection))
        if isinstance(selection, RoleSettingSelection) and selection.params:
            policy_setting = policy_setting.with_params(selection.params)
        collected.append(policy_setting)
    return tuple(collected)


def resolve_role_policies(snapshot: DefinitionSnapshot, role: Role) -> RolePolicies:
    """Select, for each snapshot policy, the settings that apply under *role*.

    The role's own selection wins; otherwise the policy default setting is
    used; a policy with neither contributes nothing and its resources keep
    their dictionary default.
    """
    resolved = []
    for policy in snapshot.policies.values():
        role_policy = role.find_policy(policy.name)
        settings: tuple[PolicySetting, ...] = ()
        if role_policy is not None and role_policy.settings:
            settings = collect_role_policy_settings(role_policy.settings, policy)
        elif policy.default_setting:
            settings = collect_role_policy_settings([policy.default_setting], policy)
        if settings:
            resolved.append(ResolvedRolePolicy(policy=policy, settings=settings))
    return RolePolicies(description=role.description, policies=tuple(resolved))


def filter_role_policies(
    snapshot: DefinitionSnapshot,
    role_policies: Iterable[ResolvedRolePolicy],
    environment: Environment | str,
) -> list[ResolvedRolePolicy]:
    """Keep only what concerns *environment*; empty settings and policies are dropped."""
    filtered = []
    for resolved in role_policies:
        settings = []
        for policy_setting in resolved.settings:
            kept = filter_policy_setting(snapshot, policy_setting, environment)
            if kept is not None:
                settings.append(kept)
        if settings:
            filtered.append(ResolvedRolePolicy(policy=resolved.policy, settings=tuple(settings)))
    return filtered


__all__ = [
    "ResolvedRolePolicy",
    "RolePolicies",
    "collect_role_policy_settings",
    "filter_role_policies",
    "resolve_role_policies",
]
