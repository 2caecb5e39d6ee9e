"""Kernel security: Environment, Setting, ResourceType."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable

ApplyFunction = Callable[["Setting", Mapping[str, Any]], "Any | Awaitable[Any]"]


def frozen_mapping(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return a read-only shallow copy of *value* (``{}`` when ``None``)."""
    return MappingProxyType(dict(value or {}))


class Environment(str, Enum):
    """Tier where a resource type is enforced."""

    CLIENT = "client"
    SERVER = "server"


def parse_environments(value: str | Iterable[str] | None) -> frozenset[str]:
    """Accept ``"client"``, ``"client,server"`` or ``["client", "server"]``.

    Names are not checked here; the resource type validator rejects unknown
    environments with the offending type named.
    """
    if not value:
        return frozenset()
    if isinstance(value, str):
        value = [part.strip() for part in value.split(",") if part.strip()]
    return frozenset(str(getattr(item, "value", item)) for item in value)


@dataclasses.dataclass(frozen=True)
class Setting:
    """A legal value of a resource type.

    ``priority`` orders conflicting grants: the lowest numeric value wins.
    ``params`` holds the static attributes declared on the type, extended
    with grant parameters once compiled for a user.
    """

    value: str
    priority: int
    params: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", frozen_mapping(self.params))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Setting":
        extra = {k: v for k, v in data.items() if k not in ("value", "priority", "params")}
        extra.update(data.get("params") or {})
        return cls(value=data.get("value"), priority=data.get("priority"), params=extra)

    def merged_with(self, params: Mapping[str, Any] | None) -> "Setting":
        """Copy of this setting whose params are extended by *params*.

        ``value`` and ``priority`` always come from the type declaration.
        """
        if not params:
            return self
        return Setting(self.value, self.priority, {**self.params, **params})

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "priority": self.priority, **self.params}


@dataclasses.dataclass(frozen=True)
class ResourceType:
    """Category of protected resource and the settings it accepts.

    ``apply`` is the enforcement implementation and is mandatory for types
    declared in the ``server`` environment.  ``target`` groups resources by
    the mechanism that enforces them (dom, router, api, …) and defaults to
    the type name.
    """

    name: str
    environments: frozenset[str] = frozenset()
    settings: tuple[Setting, ...] = ()
    apply: ApplyFunction | None = dataclasses.field(default=None, compare=False)
    target: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "environments", parse_environments(self.environments))
        object.__setattr__(self, "settings", tuple(self.settings))
        if self.target is None:
            object.__setattr__(self, "target", self.name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ResourceType":
        return cls(
            name=data.get("name"),
            environments=parse_environments(data.get("environments", data.get("env"))),
            settings=tuple(Setting.from_mapping(s) for s in data.get("settings") or ()),
            apply=data.get("apply"),
            target=data.get("target"),
        )

    def find_setting(self, value: str) -> Setting | None:
        for setting in self.settings:
            if setting.value == value:
                return setting
        return None

    @property
    def setting_values(self) -> list[str]:
        return [s.value for s in self.settings]

    def supports(self, environment: Environment | str) -> bool:
        return Environment(environment).value in self.environments

    def to_dict(self) -> dict[str, Any]:
        """Serialisable view; the apply implementation never leaves the process."""
        return {
            "name": self.name,
            "env": sorted(self.environments),
            "target": self.target,
            "settings": [s.to_dict() for s in self.settings],
        }


__all__ = [
    "ApplyFunction",
    "Environment",
    "ResourceType",
    "Setting",
    "frozen_mapping",
    "parse_environments",
]
