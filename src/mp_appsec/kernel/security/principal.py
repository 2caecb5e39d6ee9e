"""Kernel security: User, Role, RolePolicy, RoleSettingSelection."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Union

from mp_appsec.kernel.security.resource_type import frozen_mapping


@dataclasses.dataclass(frozen=True)
class User:
    """Authenticated user as seen by the security service.

    Users without a ``permission_role_code`` and tenant administrators are
    not placed under any policy.
    """
    id: str
    tenant_id: str | None = None
    display: str = ""
    permission_role_code: str | None = None
    is_tenant_admin: bool = False

    @property
    def is_unrestricted(self) -> bool:
        return not self.permission_role_code or self.is_tenant_admin

    def __str__(self) -> str:
        return self.display or self.id


@dataclasses.dataclass(frozen=True)
class RoleSettingSelection:
    """A policy option picked by a role, with parameters for that role."""
    value: str
    params: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", frozen_mapping(self.params))


# A role selects an option either by its bare label or with parameters.
SettingSelection = Union[str, RoleSettingSelection]


def selection_label(selection: SettingSelection) -> str:
    return selection.value if isinstance(selection, RoleSettingSelection) else selection


@dataclasses.dataclass(frozen=True)
class RolePolicy:
    """The options of one policy selected by a role."""
    name: str
    settings: tuple[SettingSelection, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "settings", tuple(self.settings))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RolePolicy":
        settings: list[SettingSelection] = []
        for item in data.get("settings") or ():
            if isinstance(item, Mapping):
                settings.append(RoleSettingSelection(item.get("value"), item.get("params") or {}))
            else:
                settings.append(item)
        return cls(name=data.get("name"), settings=tuple(settings))


@dataclasses.dataclass(frozen=True)
class Role:
    """A permission role: which options of which policies apply."""
    description: str = ""
    policies: tuple[RolePolicy, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "policies", tuple(self.policies))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Role":
        return cls(
            description=data.get("description") or "",
            policies=tuple(RolePolicy.from_mapping(p) for p in data.get("policies") or ()),
        )

    def find_policy(self, name: str) -> RolePolicy | None:
        for policy in self.policies:
            if policy.name == name:
                return policy
        return None


__all__ = [
    "Role",
    "RolePolicy",
    "RoleSettingSelection",
    "SettingSelection",
    "User",
    "selection_label",
]
