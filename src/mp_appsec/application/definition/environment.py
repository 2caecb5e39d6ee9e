"""Definition: environment-scoped views of a snapshot.

Remote observers (e.g. a browser client) only receive the resource types,
dictionary entries and policy grants that concern their environment, so
server-side resources are never disclosed to them.
"""
from __future__ import annotations

import dataclasses

from mp_appsec.application.definition.snapshot import DefinitionSnapshot
from mp_appsec.kernel.security import Environment, Policy, PolicySetting


def resource_supports(snapshot: DefinitionSnapshot, resource_name: str, environment: Environment | str) -> bool:
    """Whether the type of dictionary entry *resource_name* declares *environment*."""
    resource = snapshot.find_protected_resource_by_name(resource_name)
    if resource is None:
        return False
    return snapshot.resource_type_of(resource).supports(environment)


def filter_policy_setting(
    snapshot: DefinitionSnapshot,
    policy_setting: PolicySetting,
    environment: Environment | str,
) -> PolicySetting | None:
    """Keep the grants of *policy_setting* on resources of *environment*.

    Returns ``None`` when no grant remains.
    """
    grants = tuple(
        g for g in policy_setting.protected_resources
        if resource_supports(snapshot, g.resource, environment)
    )
    if not grants:
        return None
    if len(grants) == len(policy_setting.protected_resources):
        return policy_setting
    return dataclasses.replace(policy_setting, protected_resources=grants)


def filter_policy(snapshot: DefinitionSnapshot, policy: Policy, environment: Environment | str) -> Policy | None:
    settings = []
    for policy_setting in policy.settings or ():
        kept = filter_policy_setting(snapshot, policy_setting, environment)
        if kept is not None:
            settings.append(kept)
    if not settings:
        return None
    labels = {s.setting for s in settings}
    default = policy.default_setting if policy.default_setting in labels else None
    return dataclasses.replace(policy, settings=tuple(settings), default_setting=default)


def filter_snapshot(snapshot: DefinitionSnapshot, environment: Environment | str) -> DefinitionSnapshot:
    """Snapshot restricted to *environment*; keeps the source version.

    Types declared for both environments appear in both views.
    """
    resource_types = {
        name: t for name, t in snapshot.resource_types.items() if t.supports(environment)
    }
    dictionary = {
        name: r for name, r in snapshot.dictionary.items() if r.type in resource_types
    }
    policies = {}
    for name, policy in snapshot.policies.items():
        kept = filter_policy(snapshot, policy, environment)
        if kept is not None:
            policies[name] = kept
    return DefinitionSnapshot(
        resource_types=resource_types,
        dictionary=dictionary,
        policies=policies,
        condition_factories=snapshot.condition_factories,
        version=snapshot.version,
        loaded_at=snapshot.loaded_at,
    )


__all__ = ["filter_policy", "filter_policy_setting", "filter_snapshot", "resource_supports"]
