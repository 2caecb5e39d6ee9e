"""Definition: load-time validation of the security definition."""
from mp_appsec.application.definition.configuration import SecurityConfiguration
from mp_appsec.application.definition.dictionary import validate_dictionary
from mp_appsec.application.definition.environment import (
    filter_policy,
    filter_policy_setting,
    filter_snapshot,
    resource_supports,
)
from mp_appsec.application.definition.loader import ActiveDefinition, DefinitionLoader, load_definition
from mp_appsec.application.definition.policies import validate_policies
from mp_appsec.application.definition.resource_types import (
    validate_condition_factories,
    validate_resource_types,
)
from mp_appsec.application.definition.snapshot import DefinitionSnapshot

__all__ = [
    "ActiveDefinition",
    "DefinitionLoader",
    "DefinitionSnapshot",
    "SecurityConfiguration",
    "filter_policy",
    "filter_policy_setting",
    "filter_snapshot",
    "load_definition",
    "resource_supports",
    "validate_condition_factories",
    "validate_dictionary",
    "validate_policies",
    "validate_resource_types",
]
