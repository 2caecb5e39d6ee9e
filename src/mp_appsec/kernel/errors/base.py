"""Root error class for the mp-appsec error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.

    While an error unwinds through the loader or the compiler, each layer
    appends a breadcrumb naming the entity it was processing (see
    :meth:`add_context`).  Breadcrumbs are kept innermost-first.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.context: list[str] = []
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def add_context(self, breadcrumb: str) -> "BaseError":
        """Record the entity being processed when the error passed through."""
        self.context.append(breadcrumb)
        return self

    def describe(self) -> str:
        """Message followed by its breadcrumbs, for operator logs."""
        if not self.context:
            return self.message
        return f"{self.message} - " + " - ".join(self.context)

    def __str__(self) -> str:
        """Return a JSON-serialisable single-line string representation."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging / HTTP responses)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.context:
            payload["context"] = list(self.context)
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
