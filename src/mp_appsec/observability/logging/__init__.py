"""Observability: structured logging helpers."""
from mp_appsec.observability.logging.audit import AccessAuditLogger, AuditOutcome
from mp_appsec.observability.logging.factory import configure_logging
from mp_appsec.observability.logging.processors import get_logger, render_security_error

__all__ = [
    "AccessAuditLogger",
    "AuditOutcome",
    "configure_logging",
    "get_logger",
    "render_security_error",
]
