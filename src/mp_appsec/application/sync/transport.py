"""Sync: SyncTransport port.

The host owns the publish/subscribe transport that pushes data to remote
clients; the engine only announces its channels and pushes updates through
this port.
"""
from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

PublicationHandler = Callable[[Any, Any, dict[str, Any]], Awaitable[Any]]


class SyncTransport(abc.ABC):
    """Port: publish channels and notify subscribers of a tenant."""

    @abc.abstractmethod
    def publish(
        self,
        channel: str,
        handler: PublicationHandler,
        mode: str,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Expose *channel*; *handler* ``(tenant_id, user, params)`` fetches its data."""

    @abc.abstractmethod
    async def notify_update(self, tenant_id: str | None, channel: str, payload: Any) -> None:
        """Push *payload* to the subscribers of *channel* in *tenant_id*."""


__all__ = ["PublicationHandler", "SyncTransport"]
