"""Resolution: apply the resolved setting through the resource type implementation."""
from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from typing import Any

from mp_appsec.application.resolution.compiler import CompiledResource, CompiledUserPolicy
from mp_appsec.application.resolution.resolver import compute_resource_setting
from mp_appsec.kernel.errors import ConfigurationError, ResourceDeniedError
from mp_appsec.kernel.security import ResourceType, Setting
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class ApplyResult:
    """Outcome of a successful enforcement.

    ``result`` is ``True`` or the enriched data returned by the apply
    implementation.  ``bypassed`` is set when the user is not under any
    policy, in which case the setting is unknown.
    """

    result: Any
    setting: Setting | None = None
    resource_type: ResourceType | None = None
    locator: str | None = None
    bypassed: bool = False

    def is_setting(self, value: str) -> bool:
        """Whether the applied setting is *value*.

        *value* must be a setting of the resource type, so that code never
        branches on a setting that does not exist.
        """
        if self.bypassed or self.resource_type is None or self.setting is None:
            logger.error("security.is_setting.unsupported", resource=self.locator, setting=value)
            return False
        if self.resource_type.find_setting(value) is None:
            raise ConfigurationError(
                f"Inexisting setting [{value}] was passed to is_setting to check "
                f"protected resource [{self.resource_type.name}]"
            )
        return self.setting.value == value

    def __bool__(self) -> bool:
        return bool(self.result)


async def apply_setting(
    compiled: CompiledResource,
    setting: Setting,
    context: Mapping[str, Any] | None = None,
) -> ApplyResult:
    """Run the resource type's apply implementation with *setting*.

    A falsy result raises :class:`ResourceDeniedError`.
    """
    apply = compiled.resource_type.apply
    if apply is None:
        raise ConfigurationError(
            f"No apply implementation for resource type [{compiled.resource_type.name}]"
        )
    result = apply(setting, context if context is not None else {})
    if inspect.isawaitable(result):
        result = await result
    if not result:
        raise ResourceDeniedError(compiled.locator, resource=compiled.name, setting=setting.value)
    return ApplyResult(
        result=result,
        setting=setting,
        resource_type=compiled.resource_type,
        locator=compiled.locator,
    )


async def enforce(
    compiled: CompiledUserPolicy,
    locator: str,
    context: Mapping[str, Any] | None = None,
) -> ApplyResult:
    """Resolve then apply the resource at *locator*."""
    resource = compiled.get_protected_resource_by_locator(locator)
    setting = await compute_resource_setting(resource, context)
    return await apply_setting(resource, setting, context)


__all__ = ["ApplyResult", "apply_setting", "enforce"]
