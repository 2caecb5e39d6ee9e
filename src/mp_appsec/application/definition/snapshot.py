"""Definition: DefinitionSnapshot, the validated and cross-referenced definition.

A snapshot is created once by the loader and never mutated afterwards; a
reload produces a new snapshot that replaces the previous one wholesale.  It
is therefore safe to share between concurrent resolutions without locking.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from mp_appsec.kernel.errors import (
    ConfigurationError,
    UnknownConditionFactoryError,
    UnknownResourceError,
)
from mp_appsec.kernel.security import (
    ConditionFactory,
    Policy,
    ProtectedResource,
    ResourceType,
    Setting,
    frozen_mapping,
)


@dataclasses.dataclass(frozen=True)
class DefinitionSnapshot:
    """Read-only aggregate of resource types, dictionary, policies and conditions.

    Every mapping is keyed by name and keeps declaration order.  ``version``
    increases with each successful load and may be used by callers as part
    of a compiled-policy cache key.
    """

    resource_types: Mapping[str, ResourceType]
    dictionary: Mapping[str, ProtectedResource]
    policies: Mapping[str, Policy]
    condition_factories: Mapping[str, ConditionFactory]
    version: int = 0
    loaded_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    _by_locator: Mapping[str, ProtectedResource] = dataclasses.field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for name in ("resource_types", "dictionary", "policies", "condition_factories"):
            object.__setattr__(self, name, frozen_mapping(getattr(self, name)))
        object.__setattr__(
            self,
            "_by_locator",
            frozen_mapping({r.locator: r for r in self.dictionary.values()}),
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_resource_type(self, name: str) -> ResourceType:
        resource_type = self.resource_types.get(name)
        if resource_type is None:
            raise ConfigurationError(f"Undefined resource type [{name}].")
        return resource_type

    def find_setting(self, type_name: str, value: str) -> Setting | None:
        return self.find_resource_type(type_name).find_setting(value)

    def find_protected_resource_by_name(self, name: str) -> ProtectedResource | None:
        return self.dictionary.get(name)

    def find_protected_resource_by_locator(self, locator: str) -> ProtectedResource:
        resource = self._by_locator.get(locator)
        if resource is None:
            raise UnknownResourceError(locator)
        return resource

    def resource_type_of(self, resource: ProtectedResource) -> ResourceType:
        return self.find_resource_type(resource.type)

    def find_policy(self, name: str) -> Policy | None:
        return self.policies.get(name)

    def find_condition_factory(self, name: str) -> ConditionFactory:
        factory = self.condition_factories.get(name)
        if factory is None:
            raise UnknownConditionFactoryError(name)
        return factory

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Plain view without apply implementations nor condition functions."""
        return {
            "version": self.version,
            "resourceTypes": [t.to_dict() for t in self.resource_types.values()],
            "dictionary": [r.to_dict() for r in self.dictionary.values()],
            "policies": [p.to_dict() for p in self.policies.values()],
        }


__all__ = ["DefinitionSnapshot"]
