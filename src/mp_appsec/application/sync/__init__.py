"""Sync: push security definitions and user security data to remote clients."""
from mp_appsec.application.sync.publisher import (
    ALL_POLICIES_CHANNEL,
    SECURITY_CHANNEL,
    SECURITY_CONFIG_DATA,
    SecuritySync,
    format_policy_config,
)
from mp_appsec.application.sync.transport import PublicationHandler, SyncTransport

__all__ = [
    "ALL_POLICIES_CHANNEL",
    "SECURITY_CHANNEL",
    "SECURITY_CONFIG_DATA",
    "PublicationHandler",
    "SecuritySync",
    "SyncTransport",
    "format_policy_config",
]
