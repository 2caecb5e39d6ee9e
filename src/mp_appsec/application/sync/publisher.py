"""Sync: SecuritySync publishes policy definitions and per-user security data."""
from __future__ import annotations

from typing import Any
from uuid import uuid4

from mp_appsec.application.service import SecurityService
from mp_appsec.application.sync.transport import SyncTransport
from mp_appsec.kernel.errors import ConfigurationError
from mp_appsec.kernel.security import Policy, User
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)

ALL_POLICIES_CHANNEL = "all.security-policies.sync"
SECURITY_CHANNEL = "security.sync"
SECURITY_CONFIG_DATA = "SECURITY_CONFIG_DATA"


def format_policy_config(policy: Policy) -> dict[str, Any]:
    """Policies are static configuration; give them an identity so they can be synced."""
    return {
        "id": str(uuid4()),
        "revision": 0,
        "name": policy.name,
        "description": policy.description,
        "settings": [
            {"notes": s.notes, "value": s.setting, "params": dict(s.params)}
            for s in policy.settings or ()
        ],
    }


class SecuritySync:
    """Wire a :class:`SecurityService` to a host :class:`SyncTransport`.

    When a user's role, or a role configuration, is modified the client must
    be notified to apply the new policy settings: call
    :meth:`notify_security_update`.
    """

    def __init__(self, service: SecurityService, transport: SyncTransport) -> None:
        self._service = service
        self._transport = transport

    def publish(self) -> None:
        self._transport.publish(ALL_POLICIES_CHANNEL, self.fetch_all_policy_definitions, "NONE")
        self._transport.publish(
            SECURITY_CHANNEL,
            self.security_config,
            SECURITY_CONFIG_DATA,
            self.sync_options(),
        )

    async def fetch_all_policy_definitions(
        self,
        tenant_id: str | None = None,  # noqa: ARG002
        user: User | None = None,      # noqa: ARG002
        params: dict[str, Any] | None = None,  # noqa: ARG002
    ) -> list[dict[str, Any]]:
        snapshot = self._service.get_system_security_configuration()
        return sorted(
            (format_policy_config(p) for p in snapshot.policies.values()),
            key=lambda p: p["name"],
        )

    async def security_config(
        self,
        tenant_id: str | None,  # noqa: ARG002
        user: User,
        params: dict[str, Any] | None = None,  # noqa: ARG002
    ) -> dict[str, Any]:
        """Client security data of the subscribing user, reloaded from the user store."""
        user_store = self._service.user_store
        if user_store is None:
            raise ConfigurationError("A user store is required to sync security data")
        fresh = await user_store.find_user_by_tenant_id_and_id(user.tenant_id, user.id)
        return await self._service.collect_client_user_policy(fresh)

    @staticmethod
    def sync_options() -> dict[str, Any]:
        def init(tenant_id: str | None, user: User, params: dict[str, Any]) -> None:  # noqa: ARG001
            # the client does not send its user id
            params["userId"] = user.id

        return {"init": init}

    async def notify_security_update(self, user: User) -> None:
        logger.debug("security.sync.notify", user=str(user))
        payload = await self._service.collect_client_user_policy(user)
        await self._transport.notify_update(user.tenant_id, SECURITY_CONFIG_DATA, payload)


__all__ = [
    "ALL_POLICIES_CHANNEL",
    "SECURITY_CHANNEL",
    "SECURITY_CONFIG_DATA",
    "SecuritySync",
    "format_policy_config",
]
