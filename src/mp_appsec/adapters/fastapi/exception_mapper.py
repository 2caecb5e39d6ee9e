"""FastAPI adapter: SecurityExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mp_appsec.kernel.errors import (
    AuthorizationError,
    BaseError,
    ConditionEvaluationError,
    ConfigurationError,
    ResourceDeniedError,
)
from mp_appsec.observability.logging import get_logger

logger = get_logger(__name__)


class SecurityExceptionMapper:
    """Register mp_appsec error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "resource_denied", "message": "...", "detail": {...}}

    Mappings
    --------
    ``ResourceDeniedError``       → 403
    ``ConditionEvaluationError``  → 500
    ``ConfigurationError``        → 500
    ``AuthorizationError``        → 500

    A denial is the routine outcome; every other error denotes a
    misconfiguration and only its code reaches the client.
    """

    def __init__(self) -> None:
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[BaseError], int]] = [
            (ResourceDeniedError, 403),
            (ConditionEvaluationError, 500),
            (ConfigurationError, 500),
            (AuthorizationError, 500),
        ]

    def status_for(self, exc: BaseError) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: FastAPI) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))

    def _make_handler(self, status: int) -> Callable[[Request, Any], JSONResponse]:
        def handler(request: Request, exc: Any) -> JSONResponse:
            if status == 403:
                body = exc.to_dict()
            else:
                logger.error("security.http.error", path=request.url.path, error=exc)
                body = {"code": exc.code, "message": "Internal server error"}
            return JSONResponse(status_code=status, content=body)

        return handler


__all__ = ["SecurityExceptionMapper"]
