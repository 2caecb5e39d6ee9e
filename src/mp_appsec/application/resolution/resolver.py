"""Resolution: compute the effective setting of a protected resource.

A resource may be granted settings by several policies.  The conditions of
those grants are awaited one after the other, in compiled order.  Among the
enabled grants the setting with the lowest priority wins; on equal
priorities the first one enumerated is kept.  When no grant is enabled (or
no policy touches the resource) the dictionary default applies.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mp_appsec.application.resolution.compiler import CompiledResource, CompiledUserPolicy
from mp_appsec.kernel.security import Setting
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)


async def compute_resource_setting(
    compiled: CompiledResource,
    context: Mapping[str, Any] | None = None,
) -> Setting:
    context = context if context is not None else {}
    log = logger.bind(resource=compiled.name)

    if not compiled.settings:
        log.debug("security.resolve.no_policy", setting=compiled.default_setting.value)
        return compiled.default_setting

    final: Setting | None = None
    for contributed in compiled.settings:
        enabled = await contributed.check_if_enabled(context)
        log.debug(
            "security.resolve.policy_enabled" if enabled else "security.resolve.policy_disabled",
            policy=contributed.policy.name,
            policy_setting=contributed.policy_setting.setting,
            setting=contributed.setting.value,
        )
        if not enabled:
            continue
        if final is None or contributed.setting.priority < final.priority:
            final = contributed.setting

    if final is None:
        log.debug("security.resolve.default", setting=compiled.default_setting.value)
        return compiled.default_setting
    log.debug("security.resolve.result", setting=final.value, priority=final.priority)
    return final


async def resolve(
    compiled: CompiledUserPolicy,
    locator: str,
    context: Mapping[str, Any] | None = None,
) -> Setting:
    """Effective setting of the resource at *locator* for this user.

    Raises :class:`~mp_appsec.kernel.errors.UnknownResourceError` for an
    unknown locator and propagates condition failures.
    """
    return await compute_resource_setting(
        compiled.get_protected_resource_by_locator(locator), context
    )


__all__ = ["compute_resource_setting", "resolve"]
