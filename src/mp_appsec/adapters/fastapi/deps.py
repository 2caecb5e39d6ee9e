"""FastAPI adapter: route dependency enforcing a server protected resource."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Awaitable, Callable

from fastapi import Depends

from mp_appsec.application import SecurityService
from mp_appsec.application.resolution import ApplyResult
from mp_appsec.kernel.security import User


async def _no_context() -> dict[str, Any]:
    return {}


def require_resource_policy(
    service: SecurityService,
    locator: str,
    user_dependency: Callable[..., User | None | Awaitable[User | None]],
    context_dependency: Callable[..., Mapping[str, Any] | Awaitable[Mapping[str, Any]]] | None = None,
) -> Callable[..., Awaitable[ApplyResult]]:
    """Build a dependency applying *locator* for the current user.

    Usage::

        guard = require_resource_policy(service, "api.account.updateOne", current_user)

        @app.put("/accounts/{account_id}")
        async def update(account_id: str, policy: ApplyResult = Depends(guard)):
            ...

    A denial raises :class:`~mp_appsec.kernel.errors.ResourceDeniedError`;
    register :class:`SecurityExceptionMapper` to turn it into a 403.
    """

    async def dependency(
        user: User | None = Depends(user_dependency),
        context: Mapping[str, Any] = Depends(context_dependency or _no_context),
    ) -> ApplyResult:
        return await service.apply_resource_policy(user, locator, context)

    return dependency


__all__ = ["require_resource_policy"]
