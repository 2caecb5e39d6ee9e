"""Definition: DefinitionLoader and ActiveDefinition.

The loader checks the security data integrity in dependency order:

1. resource types (and condition factories),
2. the dictionary, validated against the resource types,
3. the policies, validated against the dictionary and the resource types.

Any failure aborts the whole load.  The detailed error (with its breadcrumbs)
is logged for operators and callers receive one stable
``ConfigurationError("Invalid Application Security Configuration")`` whose
``cause`` is the detailed error.
"""
from __future__ import annotations

import itertools
import threading
from collections.abc import Mapping
from typing import Any

from mp_appsec.application.definition.configuration import SecurityConfiguration
from mp_appsec.application.definition.dictionary import validate_dictionary
from mp_appsec.application.definition.policies import validate_policies
from mp_appsec.application.definition.resource_types import (
    validate_condition_factories,
    validate_resource_types,
)
from mp_appsec.application.definition.snapshot import DefinitionSnapshot
from mp_appsec.kernel.errors import (
    GENERIC_CONFIGURATION_MESSAGE,
    ConfigurationError,
    SecurityNotInitializedError,
)
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)

_versions = itertools.count(1)


class DefinitionLoader:
    """Validate a :class:`SecurityConfiguration` into a :class:`DefinitionSnapshot`."""

    def load(self, config: SecurityConfiguration | Mapping[str, Any]) -> DefinitionSnapshot:
        try:
            logger.info("security.load.checking")
            if not isinstance(config, SecurityConfiguration):
                config = SecurityConfiguration.from_mapping(config)
            resource_types = validate_resource_types(config.resource_types)
            factories = validate_condition_factories(config.condition_factories)
            dictionary = validate_dictionary(config.dictionary, resource_types)
            policies = validate_policies(config.policies, dictionary, resource_types)
        except Exception as exc:
            logger.critical("security.load.failed", error=exc)
            raise ConfigurationError(GENERIC_CONFIGURATION_MESSAGE, cause=exc) from exc

        snapshot = DefinitionSnapshot(
            resource_types=resource_types,
            dictionary=dictionary,
            policies=policies,
            condition_factories=factories,
            version=next(_versions),
        )
        logger.info(
            "security.load.passed",
            version=snapshot.version,
            resource_types=len(resource_types),
            resources=len(dictionary),
            policies=len(policies),
        )
        return snapshot


def load_definition(config: SecurityConfiguration | Mapping[str, Any]) -> DefinitionSnapshot:
    """Shortcut for ``DefinitionLoader().load(config)``."""
    return DefinitionLoader().load(config)


class ActiveDefinition:
    """Holds the snapshot currently in force.

    :meth:`reload` validates first and swaps the reference only on success,
    so a failed reload leaves the previous snapshot visible.  Readers that
    captured a snapshot keep using it; later reads see the new one.
    """

    def __init__(self, loader: DefinitionLoader | None = None) -> None:
        self._loader = loader or DefinitionLoader()
        self._snapshot: DefinitionSnapshot | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> DefinitionSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise SecurityNotInitializedError()
        return snapshot

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def replace(self, snapshot: DefinitionSnapshot) -> DefinitionSnapshot | None:
        """Swap in *snapshot*; return the one it replaced."""
        with self._lock:
            previous, self._snapshot = self._snapshot, snapshot
        return previous

    def reload(self, config: SecurityConfiguration | Mapping[str, Any]) -> DefinitionSnapshot:
        snapshot = self._loader.load(config)
        self.replace(snapshot)
        return snapshot


__all__ = ["ActiveDefinition", "DefinitionLoader", "load_definition"]
