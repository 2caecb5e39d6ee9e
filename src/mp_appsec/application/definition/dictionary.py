"""Definition: protected resource dictionary validation."""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from mp_appsec.kernel.errors import BaseError, InvalidProtectedResourceError
from mp_appsec.kernel.security import ProtectedResource, ResourceType
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)


def validate_dictionary(
    protected_resources: Iterable[ProtectedResource],
    resource_types: Mapping[str, ResourceType],
) -> dict[str, ProtectedResource]:
    """Return the dictionary keyed by resource name, in declaration order.

    *resource_types* must already be validated.
    """
    dictionary: dict[str, ProtectedResource] = {}
    locators: set[str] = set()
    for resource in protected_resources:
        try:
            _check_protected_resource(resource, resource_types, dictionary, locators)
        except BaseError as exc:
            raise exc.add_context(
                f"invalid protected resource in dictionary [{resource.name}]"
            )
        dictionary[resource.name] = resource
        locators.add(resource.locator)
    return dictionary


def _check_protected_resource(
    resource: ProtectedResource,
    resource_types: Mapping[str, ResourceType],
    dictionary: Mapping[str, ProtectedResource],
    locators: set[str],
) -> None:
    if not resource.name:
        raise InvalidProtectedResourceError("Name is required")
    logger.debug("security.dictionary.add", resource=resource.name)
    if not resource.type:
        raise InvalidProtectedResourceError("type is required")
    if not resource.locator:
        raise InvalidProtectedResourceError("locator is required")
    if not resource.default_setting:
        raise InvalidProtectedResourceError("defaultSetting is required")

    resource_type = resource_types.get(resource.type)
    if resource_type is None:
        raise InvalidProtectedResourceError(f"Provided type [{resource.type}] is unknown")
    if resource_type.find_setting(resource.default_setting) is None:
        raise InvalidProtectedResourceError(
            f"defaultSetting [{resource.default_setting}] is unknown to type [{resource.type}]"
        )
    if resource.name in dictionary:
        raise InvalidProtectedResourceError(f"Duplicated protected resource [{resource.name}]")
    if resource.locator in locators:
        raise InvalidProtectedResourceError(f"Duplicated locator [{resource.locator}]")


__all__ = ["validate_dictionary"]
