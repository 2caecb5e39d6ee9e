"""Kernel security: Policy, PolicySetting, PolicyResourceGrant.

A :class:`Policy` is a named bundle of options (:class:`PolicySetting`).  A
role picks one or more options of each policy; every option lists the
protected resources it grants a setting to.

Example::

    Policy(
        name="Account Policy",
        description="Account Security Policy",
        settings=(
            PolicySetting(
                setting="read",
                protected_resources=(
                    PolicyResourceGrant(resource="Account menu", setting="show"),
                    PolicyResourceGrant(resource="Account Screen Form", setting="readOnly"),
                ),
            ),
        ),
    )
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from mp_appsec.kernel.security.resource_type import frozen_mapping


@dataclasses.dataclass(frozen=True)
class PolicyResourceGrant:
    """Grants *setting* (a value of the resource's type) to *resource*."""

    resource: str
    setting: str
    params: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", frozen_mapping(self.params))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PolicyResourceGrant":
        return cls(
            resource=data.get("resource"),
            setting=data.get("setting"),
            params=data.get("params") or {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"resource": self.resource, "setting": self.setting, "params": dict(self.params)}


@dataclasses.dataclass(frozen=True)
class PolicySetting:
    """One selectable option of a policy.

    ``setting`` is a label local to the policy, not a resource type value.
    ``condition`` optionally gates the option with a ``"factory.function"``
    predicate that receives ``params`` and the request context.
    """

    setting: str
    notes: str = ""
    condition: str | None = None
    params: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    protected_resources: tuple[PolicyResourceGrant, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", frozen_mapping(self.params))
        object.__setattr__(self, "protected_resources", tuple(self.protected_resources or ()))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PolicySetting":
        return cls(
            setting=data.get("setting"),
            notes=data.get("notes") or "",
            condition=data.get("condition"),
            params=data.get("params") or {},
            protected_resources=tuple(
                PolicyResourceGrant.from_mapping(g)
                for g in data.get("protectedResources", data.get("protected_resources")) or ()
            ),
        )

    def with_params(self, params: Mapping[str, Any]) -> "PolicySetting":
        """Copy of this option carrying role-supplied *params* instead of its own."""
        return dataclasses.replace(self, params=params)

    def to_dict(self) -> dict[str, Any]:
        return {
            "setting": self.setting,
            "notes": self.notes,
            "condition": self.condition,
            "params": dict(self.params),
            "protectedResources": [g.to_dict() for g in self.protected_resources],
        }


@dataclasses.dataclass(frozen=True)
class Policy:
    """Named bundle of :class:`PolicySetting` options, assignable to roles."""

    name: str
    description: str = ""
    default_setting: str | None = None
    settings: tuple[PolicySetting, ...] | None = ()

    def __post_init__(self) -> None:
        if self.settings is not None:
            object.__setattr__(self, "settings", tuple(self.settings))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Policy":
        raw_settings = data.get("settings")
        return cls(
            name=data.get("name"),
            description=data.get("description") or "",
            default_setting=data.get("defaultSetting", data.get("default_setting")),
            settings=(
                None
                if raw_settings is None
                else tuple(PolicySetting.from_mapping(s) for s in raw_settings)
            ),
        )

    def find_setting(self, label: str) -> PolicySetting | None:
        for setting in self.settings or ():
            if setting.setting == label:
                return setting
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "defaultSetting": self.default_setting,
            "settings": [s.to_dict() for s in self.settings or ()],
        }


__all__ = ["Policy", "PolicyResourceGrant", "PolicySetting"]
