"""Error taxonomy for the Datashift client.

Every failure a caller can see is a DatashiftError tagged with an
ErrorKind. The subclasses below are one level deep and only pin the kind,
so handlers can either ``except NotFoundError`` or match on ``err.kind``.
"""

from __future__ import annotations

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    API = "api"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    TIMEOUT = "timeout"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    CANCELLED = "cancelled"


class DatashiftError(Exception):
    """Base error for all Datashift client failures."""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.data = data

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, status={self.status!r}, "
            f"code={self.code!r})"
        )


class AuthenticationError(DatashiftError):
    """Invalid, expired or revoked API key."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, 401, "AUTHENTICATION_ERROR")


class NotFoundError(DatashiftError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: str | None = None):
        message = f"{resource} '{resource_id}' not found" if resource_id else f"{resource} not found"
        super().__init__(message, 404, "NOT_FOUND")
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(DatashiftError):
    """Request rejected by the API; ``errors`` maps field names to messages."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        errors: dict[str, list[str]] | None = None,
        status: int | None = 400,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, status, code, errors)
        self.errors = errors


class RateLimitError(DatashiftError):
    kind = ErrorKind.RATE_LIMIT

    def __init__(self, retry_after: float | None = None):
        super().__init__("Rate limit exceeded", 429, "RATE_LIMITED")
        self.retry_after = retry_after


class ServerError(DatashiftError):
    kind = ErrorKind.SERVER

    def __init__(self, message: str = "Internal server error", status: int = 500):
        super().__init__(message, status, "SERVER_ERROR")


class TimeoutError(DatashiftError):
    """An operation (such as waiting for a review) ran past its deadline.

    Not a protocol status: ``status`` is always None.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "Operation timed out"):
        super().__init__(message, None, "TIMEOUT")


class NetworkError(DatashiftError):
    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network error: Unable to reach Datashift API"):
        super().__init__(message, None, "NETWORK_ERROR")


class ConfigurationError(DatashiftError):
    """Raised at client construction, before any network activity."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str):
        super().__init__(message, None, "CONFIGURATION_ERROR")


class WaitCancelledError(DatashiftError):
    kind = ErrorKind.CANCELLED

    def __init__(self, message: str = "Wait cancelled"):
        super().__init__(message, None, "CANCELLED")
