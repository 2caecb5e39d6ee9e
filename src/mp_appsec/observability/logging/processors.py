"""Observability: get_logger helper and the error-rendering processor."""
from __future__ import annotations

from typing import Any

import structlog

from mp_appsec.kernel.errors.base import BaseError


def render_security_error(
    logger: Any,           # noqa: ARG001
    method_name: str,      # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor expanding ``error=<BaseError>`` into its fields.

    The detailed chain (message, breadcrumbs, cause) is meant for operators;
    it is never part of the error surfaced to callers of ``load``.
    """
    error = event_dict.get("error")
    if isinstance(error, BaseError):
        event_dict["error"] = error.describe()
        event_dict["error_code"] = error.code
        if error.cause is not None:
            event_dict["error_cause"] = (
                error.cause.describe() if isinstance(error.cause, BaseError) else repr(error.cause)
            )
    return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["get_logger", "render_security_error"]
