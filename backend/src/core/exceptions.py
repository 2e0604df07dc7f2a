from typing import Any

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UpstreamServiceError(HTTPException):
    """Generic 500 for failures whose details must stay server-side."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# ── Domain errors ────────────────────────────────────────────────────────────
# Raised by services and integrations, translated to HTTP errors by the routes.


class ProxyError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


class ValidationError(ProxyError):
    """Caller supplied missing or malformed input."""


class AuthenticationError(ProxyError):
    """Supplier credentials are missing or were rejected."""


class SupplierError(ProxyError):
    """Transport or application-level error from the diamond supplier."""


class CheckoutError(ProxyError):
    """Transport error or malformed response from the store."""
