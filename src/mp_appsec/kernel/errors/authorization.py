"""Authorization errors: outcomes of resolution and enforcement."""

from __future__ import annotations

from typing import Any

from mp_appsec.kernel.errors.base import BaseError


class AuthorizationError(BaseError):
    """Raised while resolving or enforcing a protected resource."""

    default_code = "authorization_error"


class ResourceDeniedError(AuthorizationError):
    """The resource type's apply implementation refused access.

    This is a routine outcome, not a system fault: callers typically redirect
    or render an alternate UI.
    """

    default_code = "resource_denied"

    def __init__(
        self,
        locator: str,
        *,
        resource: str | None = None,
        setting: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Protected resource [{resource or locator}] is denied",
            detail={"locator": locator, "resource": resource, "setting": setting},
            **kwargs,
        )
        self.locator = locator
        self.resource = resource
        self.setting = setting


class ConditionEvaluationError(AuthorizationError):
    """A host-supplied condition predicate raised while being evaluated."""

    default_code = "condition_evaluation_failed"

    def __init__(
        self,
        condition: str,
        *,
        policy: str,
        setting: str,
        cause: BaseException,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Condition [{condition}] failed for policy [{policy}] setting [{setting}]"
            " - make sure the context params are passed when applying the resource",
            detail={"condition": condition, "policy": policy, "setting": setting},
            cause=cause,
            **kwargs,
        )
        self.condition = condition
        self.policy = policy
        self.setting = setting


__all__ = ["AuthorizationError", "ConditionEvaluationError", "ResourceDeniedError"]
