"""Resolution: bind a policy setting's condition to its implementation."""
from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

from mp_appsec.application.definition import DefinitionSnapshot
from mp_appsec.kernel.errors import (
    BaseError,
    ConditionEvaluationError,
    ConfigurationError,
    UnknownConditionFunctionError,
)
from mp_appsec.kernel.security import Policy, PolicySetting, split_condition

ConditionCheck = Callable[[Mapping[str, Any]], Awaitable[bool]]


async def _always_enabled(context: Mapping[str, Any]) -> bool:  # noqa: ARG001
    return True


def resolve_condition(
    policy: Policy,
    policy_setting: PolicySetting,
    snapshot: DefinitionSnapshot,
) -> ConditionCheck:
    """Return ``async check(context) -> bool`` for *policy_setting*.

    Lookups happen here, once, so a missing factory or function fails the
    compilation instead of a later resolution.
    """
    if not policy_setting.condition:
        return _always_enabled

    condition = policy_setting.condition
    try:
        parts = split_condition(condition)
        if parts is None:
            raise ConfigurationError("No security name defined")
        factory_name, function_name = parts
        factory = snapshot.find_condition_factory(factory_name)
        condition_fn = factory.get(function_name)
        if condition_fn is None:
            raise UnknownConditionFunctionError(factory_name, function_name)
    except BaseError as exc:
        raise exc.add_context(
            f"Unknown security condition [{condition}] for policy setting [{policy_setting.setting}]"
        )

    params = policy_setting.params

    async def check(context: Mapping[str, Any]) -> bool:
        try:
            enabled = condition_fn(params, context)
            if inspect.isawaitable(enabled):
                enabled = await enabled
        except Exception as exc:
            raise ConditionEvaluationError(
                condition,
                policy=policy.name,
                setting=policy_setting.setting,
                cause=exc,
            ) from exc
        return bool(enabled)

    return check


__all__ = ["ConditionCheck", "resolve_condition"]
