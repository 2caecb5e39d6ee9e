"""Definition: SecurityConfiguration input record."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from mp_appsec.kernel.security import (
    ConditionFactory,
    Policy,
    ProtectedResource,
    ResourceType,
)


@dataclasses.dataclass(frozen=True)
class SecurityConfiguration:
    """Everything the definition loader validates, in declaration order."""

    resource_types: tuple[ResourceType, ...] = ()
    dictionary: tuple[ProtectedResource, ...] = ()
    policies: tuple[Policy, ...] = ()
    condition_factories: tuple[ConditionFactory, ...] = ()

    def __post_init__(self) -> None:
        for name in ("resource_types", "dictionary", "policies", "condition_factories"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SecurityConfiguration":
        """Parse the JSON/YAML shaped configuration.

        Keys follow the wire naming (``resourceTypes``, ``conditionFactories``,
        ``defaultSetting``, ``protectedResources``, ``env``); snake_case
        spellings are accepted too.  Condition factories may be given as
        :class:`ConditionFactory` instances or ``{"factory": name, fn: ...}``
        mappings.
        """
        factories = []
        for item in data.get("conditionFactories", data.get("condition_factories")) or ():
            factories.append(
                item if isinstance(item, ConditionFactory) else ConditionFactory.from_mapping(item)
            )
        return cls(
            resource_types=tuple(
                ResourceType.from_mapping(t)
                for t in data.get("resourceTypes", data.get("resource_types")) or ()
            ),
            dictionary=tuple(ProtectedResource.from_mapping(r) for r in data.get("dictionary") or ()),
            policies=tuple(Policy.from_mapping(p) for p in data.get("policies") or ()),
            condition_factories=tuple(factories),
        )


__all__ = ["SecurityConfiguration"]
