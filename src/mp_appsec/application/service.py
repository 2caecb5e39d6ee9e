"""Application: SecurityService, the host-facing façade of the engine.

Typical server usage::

    service = SecurityService(role_store, default_role="viewer", user_store=users)
    service.load(security_configuration)

    result = await service.apply_resource_policy(
        user, "api.account.updateOne", {"account": account, "user": user}
    )
    if result.is_setting("edit"):
        ...

``apply_resource_policy`` finds the setting the server protected resource
should have under the policies of *user*, then applies that setting through
the implementation declared on the resource type.  A denial raises
:class:`~mp_appsec.kernel.errors.ResourceDeniedError`.
"""
from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from mp_appsec.application.definition import (
    ActiveDefinition,
    DefinitionLoader,
    DefinitionSnapshot,
    SecurityConfiguration,
)
from mp_appsec.application.resolution import (
    ApplyResult,
    CompiledUserPolicy,
    RolePolicies,
    compile_user_policy,
    enforce,
    filter_role_policies,
    resolve_role_policies,
)
from mp_appsec.config.settings import SecuritySettings
from mp_appsec.kernel.errors import BaseError, ConfigurationError, ResourceDeniedError
from mp_appsec.kernel.security import Environment, Role, RoleStore, User, UserStore
from mp_appsec.observability.logging import (
    AccessAuditLogger,
    AuditOutcome,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)

ADMIN_DESCRIPTION = "Admin - Full access"


class SecurityService:
    """Loads the security definition and answers per-user questions about it."""

    def __init__(
        self,
        role_store: RoleStore,
        *,
        default_role: str | None = None,
        user_store: UserStore | None = None,
        audit: AccessAuditLogger | None = None,
        definition: ActiveDefinition | None = None,
    ) -> None:
        self._role_store = role_store
        self._default_role = default_role
        self._user_store = user_store
        self._audit = audit or AccessAuditLogger()
        self._definition = definition or ActiveDefinition(DefinitionLoader())

    @classmethod
    def from_settings(
        cls,
        settings: SecuritySettings,
        role_store: RoleStore,
        user_store: UserStore | None = None,
        *,
        configure_logs: bool = True,
    ) -> "SecurityService":
        """Build a service from process settings.

        With *configure_logs*, structlog is set up from ``log_level`` and
        ``log_json`` first.
        """
        if configure_logs:
            configure_logging(settings.log_level, json=settings.log_json)
        return cls(
            role_store,
            default_role=settings.default_role,
            user_store=user_store,
            audit=AccessAuditLogger(service=settings.service_name),
        )

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    def load(self, config: SecurityConfiguration | Mapping[str, Any]) -> DefinitionSnapshot:
        """Validate *config* and make it the active definition.

        On failure the previously loaded definition stays active.
        """
        if not self._default_role:
            raise ConfigurationError("No default role provided to initialize system security")
        return self._definition.reload(config)

    def get_system_security_configuration(self) -> DefinitionSnapshot:
        return self._definition.current

    @property
    def user_store(self) -> UserStore | None:
        return self._user_store

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def find_role(self, user: User) -> Role:
        role = await self._role_store.find_role_by_user(user)
        if role is None:
            logger.info("security.role.default", user=str(user), default_role=self._default_role)
            role = await self._role_store.find_role(self._default_role)
            if role is None:
                raise ConfigurationError(f"Default role [{self._default_role}] does not exist")
        return role

    async def find_user_policy_data(
        self,
        user: User,
        snapshot: DefinitionSnapshot | None = None,
    ) -> RolePolicies:
        """Policies and selected settings under the role of *user*."""
        if user.is_unrestricted:
            logger.warning("security.deactivated", user=str(user))
            return RolePolicies(description=ADMIN_DESCRIPTION)
        snapshot = snapshot or self._definition.current
        try:
            role = await self.find_role(user)
            return resolve_role_policies(snapshot, role)
        except BaseError as exc:
            logger.error("security.policy.invalid", user=str(user), error=exc)
            raise exc.add_context(f"Invalid security policy for user {user}")

    # ------------------------------------------------------------------
    # Per-user security data
    # ------------------------------------------------------------------

    def generate_user_security_data_by_environment(
        self,
        user: User,
        role_policies: RolePolicies,
        environment: Environment | str,
        snapshot: DefinitionSnapshot | None = None,
    ) -> dict[str, Any]:
        """Security data of *user* restricted to *environment*."""
        environment = Environment(environment)
        if user.is_unrestricted:
            return {"env": environment.value, "user": user, "description": ADMIN_DESCRIPTION}
        snapshot = snapshot or self._definition.current
        resource_types = [t for t in snapshot.resource_types.values() if t.supports(environment)]
        type_names = {t.name for t in resource_types}
        return {
            "env": environment.value,
            "user": user,
            "description": role_policies.description,
            "policies": [
                p.to_dict() for p in filter_role_policies(snapshot, role_policies, environment)
            ],
            "dictionary": [
                r.to_dict() for r in snapshot.dictionary.values() if r.type in type_names
            ],
            "resource_types": [t.to_dict() for t in resource_types],
        }

    @staticmethod
    def format_user_security_data(security_data: Mapping[str, Any]) -> dict[str, Any]:
        """Shape security data for syncing to other tiers or storing in a session."""
        user = security_data["user"]
        formatted = {
            "id": 1,
            "revision": int(time.time() * 1000),
            "timestamp": {},
            "user_id": user.id,
            "display": user.display,
            "policies": security_data.get("policies"),
            "dictionary": security_data.get("dictionary"),
            "resource_types": security_data.get("resource_types"),
        }
        logger.info(
            "security.user_data",
            user=str(user),
            env=str(security_data.get("env", "")).upper(),
            description=security_data.get("description"),
            role=user.permission_role_code or "Role has not been defined",
        )
        logger.debug("security.user_data.policies", policies=formatted["policies"] or "No security enforced.")
        return formatted

    async def collect_client_user_policy(self, user: User) -> dict[str, Any]:
        """Client security data of *user*.

        Resources absent from the policies take their dictionary default on
        the client.
        """
        snapshot = self._definition.current
        role_policies = await self.find_user_policy_data(user, snapshot)
        return self.format_user_security_data(
            self.generate_user_security_data_by_environment(
                user, role_policies, Environment.CLIENT, snapshot
            )
        )

    async def collect_server_user_policy(self, user: User) -> CompiledUserPolicy:
        """Server resources of *user* compiled against the active definition."""
        snapshot = self._definition.current
        role_policies = await self.find_user_policy_data(user, snapshot)
        compiled = compile_user_policy(snapshot, role_policies, Environment.SERVER)
        logger.debug(
            "security.user_policy.compiled",
            user=str(user),
            description=role_policies.description,
            resources=len(compiled.resources),
        )
        return compiled

    # ------------------------------------------------------------------
    # Enforcement
    # ------------------------------------------------------------------

    async def apply_resource_policy(
        self,
        user: User | None,
        locator: str,
        context: Mapping[str, Any] | None = None,
    ) -> ApplyResult:
        """Apply the user policy to the server resource at *locator*.

        Users not under a policy are always allowed.
        """
        if user is None or user.is_unrestricted:
            self._audit.log_decision(user, locator, AuditOutcome.BYPASSED)
            return ApplyResult(result=True, locator=locator, bypassed=True)

        try:
            compiled = await self.collect_server_user_policy(user)
            result = await enforce(compiled, locator, context)
        except ResourceDeniedError as exc:
            logger.warning("security.resource.denied", user=str(user), resource=exc.resource)
            self._audit.log_decision(user, locator, AuditOutcome.DENIED, setting=exc.setting)
            raise
        except BaseError as exc:
            self._audit.log_decision(user, locator, AuditOutcome.ERROR, error=exc.code)
            raise
        self._audit.log_decision(
            user, locator, AuditOutcome.ALLOWED, setting=result.setting.value if result.setting else None
        )
        return result


__all__ = ["ADMIN_DESCRIPTION", "SecurityService"]
