"""Kernel security: ProtectedResource (dictionary entry)."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from mp_appsec.kernel.security.resource_type import frozen_mapping


@dataclasses.dataclass(frozen=True)
class ProtectedResource:
    """A named, locatable entity whose behaviour is gated by a setting.

    ``type`` is the name of a resource type, ``locator`` the key used at
    runtime to find the resource (``"api.account.updateOne"``,
    ``"accountOption"``, …) and ``default_setting`` the value applied when no
    policy of the user touches the resource.
    """

    name: str
    type: str
    locator: str
    default_setting: str
    params: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    id: str = dataclasses.field(default_factory=lambda: str(uuid4()), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", frozen_mapping(self.params))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProtectedResource":
        return cls(
            name=data.get("name"),
            type=data.get("type"),
            locator=data.get("locator"),
            default_setting=data.get("defaultSetting", data.get("default_setting")),
            params=data.get("params") or {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "locator": self.locator,
            "defaultSetting": self.default_setting,
            "params": dict(self.params),
        }


__all__ = ["ProtectedResource"]
