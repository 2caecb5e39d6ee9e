"""Definition: resource type registry validation."""
from __future__ import annotations

from collections.abc import Iterable

from mp_appsec.kernel.errors import BaseError, ConfigurationError, InvalidResourceTypeError
from mp_appsec.kernel.security import ConditionFactory, Environment, ResourceType
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)

_ENVIRONMENTS = frozenset(e.value for e in Environment)


def validate_resource_types(resource_types: Iterable[ResourceType]) -> dict[str, ResourceType]:
    """Return the registry keyed by type name, in declaration order.

    Raises :class:`InvalidResourceTypeError` for the first offending type.
    """
    registry: dict[str, ResourceType] = {}
    for index, resource_type in enumerate(resource_types):
        try:
            _check_resource_type(resource_type, registry)
        except BaseError as exc:
            raise exc.add_context(
                f"invalid resource type [{resource_type.name or index}]"
            )
        registry[resource_type.name] = resource_type
    return registry


def _check_resource_type(resource_type: ResourceType, registry: dict[str, ResourceType]) -> None:
    if not resource_type.name:
        raise InvalidResourceTypeError("name property is required")
    logger.debug("security.resource_type.add", resource_type=resource_type.name)
    if resource_type.name in registry:
        raise InvalidResourceTypeError("Duplicated resource type")
    if not resource_type.environments:
        raise InvalidResourceTypeError("env property is required")
    unknown = resource_type.environments - _ENVIRONMENTS
    if unknown:
        raise InvalidResourceTypeError(f"Unknown environment(s) {sorted(unknown)}")
    if Environment.SERVER.value in resource_type.environments and not callable(resource_type.apply):
        raise InvalidResourceTypeError(
            "Apply function is required in server protected resource type"
        )
    if not resource_type.settings:
        raise InvalidResourceTypeError("settings property is required")
    seen: set[str] = set()
    for setting in resource_type.settings:
        if not setting.value:
            raise InvalidResourceTypeError("setting value is required")
        if setting.value in seen:
            raise InvalidResourceTypeError(f"Duplicated setting [{setting.value}]")
        if setting.priority is None:
            raise InvalidResourceTypeError(f"priority of setting [{setting.value}] is required")
        if not isinstance(setting.priority, int) or isinstance(setting.priority, bool):
            raise InvalidResourceTypeError(
                f"priority of setting [{setting.value}] must be an integer"
            )
        seen.add(setting.value)


def validate_condition_factories(
    factories: Iterable[ConditionFactory],
) -> dict[str, ConditionFactory]:
    """Return condition factories keyed by name; names must be unique."""
    registry: dict[str, ConditionFactory] = {}
    for factory in factories:
        if not factory.name:
            raise ConfigurationError("condition factory name is required")
        if factory.name in registry:
            raise ConfigurationError(f"Duplicated condition factory [{factory.name}]")
        registry[factory.name] = factory
    return registry


__all__ = ["validate_condition_factories", "validate_resource_types"]
