"""Kernel security: RoleStore and UserStore ports.

Implementations live in the host application.  Use the in-memory doubles in
:mod:`mp_appsec.testing.fakes` in unit tests.
"""

from __future__ import annotations

import abc

from mp_appsec.kernel.security.principal import Role, User


class RoleStore(abc.ABC):
    """Port: where permission roles are kept."""

    @abc.abstractmethod
    async def find_role_by_user(self, user: User) -> Role | None:
        """Return the role assigned to *user*, or ``None`` when unassigned."""

    @abc.abstractmethod
    async def find_role(self, name: str) -> Role | None:
        """Return the role registered under *name*."""


class UserStore(abc.ABC):
    """Port: user / tenant persistence."""

    @abc.abstractmethod
    async def find_user_by_tenant_id_and_id(self, tenant_id: str | None, user_id: str) -> User:
        """Reload a user; used before pushing fresh security data to a client."""


__all__ = ["RoleStore", "UserStore"]
