"""Observability: AccessAuditLogger.

A dedicated structured-log sink for enforcement decisions on server
protected resources.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from mp_appsec.observability.logging.processors import get_logger


class AuditOutcome(str, Enum):
    """Standardised audit outcomes."""

    ALLOWED = "allowed"
    DENIED = "denied"
    BYPASSED = "bypassed"
    ERROR = "error"


class AccessAuditLogger:
    """Emit one audit entry per enforcement decision.

    All entries are emitted at ``WARNING`` level so they pass through even
    restrictive log-level filters.

    Parameters
    ----------
    service:
        Logical service name injected into every audit entry.
    logger:
        Underlying structlog logger.  Defaults to one named ``audit``.
    """

    def __init__(self, service: str = "unknown", logger: Any = None) -> None:
        self._service = service
        self._log = logger if logger is not None else get_logger("audit")

    def log_decision(
        self,
        user: Any,
        locator: str,
        outcome: AuditOutcome | str,
        setting: str | None = None,
        **extra: Any,
    ) -> None:
        """Record the outcome of applying *locator* for *user*.

        ``user.id`` is used when present, otherwise ``str(user)``.
        """
        principal_id = getattr(user, "id", None) or str(user)
        self._log.warning(
            "audit.access",
            service=self._service,
            principal_id=principal_id,
            resource=locator,
            setting=setting,
            outcome=outcome.value if isinstance(outcome, AuditOutcome) else str(outcome),
            timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            **extra,
        )


__all__ = ["AccessAuditLogger", "AuditOutcome"]
