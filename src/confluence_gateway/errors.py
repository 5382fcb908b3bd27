"""Typed exception hierarchy for Confluence gateway failures.

Every failure that leaves the gateway is one of the classes defined here.
All of them inherit from ConfluenceError so callers can catch the whole
taxonomy in one place, and each class carries a FailureKind so callers can
branch on the kind without knowing which wire version produced it.
"""

from enum import Enum
from typing import Any, Optional


class FailureKind(str, Enum):
    """Closed set of failure kinds surfaced by the gateway."""
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    HTTP = "http"
    NETWORK = "network"
    VALIDATION = "validation"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"


class GatewayError(Exception):
    """Base exception for all confluence-gateway errors.

    Use this to catch any application-level error from the gateway.
    """
    pass


class ConfluenceError(GatewayError):
    """Base exception for all failures mapped from a Confluence exchange.

    Attributes:
        message: Human readable, credential-free description
        status_code: HTTP status that produced the failure, if any
        wire_version: Wire version ("v1" or "v2") that produced it, if known
        cause: Underlying exception, if any
        response: Parsed (or raw) response body kept for diagnostics
        endpoint: Endpoint the failing request was sent to, if known
    """

    kind: FailureKind = FailureKind.UNKNOWN

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        wire_version: Optional[str] = None,
        cause: Optional[BaseException] = None,
        response: Any = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.wire_version = wire_version
        self.cause = cause
        self.response = response
        self.endpoint = endpoint

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"message={self.message!r}, status_code={self.status_code!r}, "
            f"wire_version={self.wire_version!r})"
        )


class ConfigurationError(ConfluenceError):
    """Raised when the gateway configuration is missing or invalid."""

    kind = FailureKind.CONFIGURATION

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.config_key = config_key


class AuthenticationError(ConfluenceError):
    """Raised when Confluence rejects the credentials (HTTP 401)."""

    kind = FailureKind.AUTHENTICATION


class PermissionDeniedError(ConfluenceError):
    """Raised when the account lacks permission for the resource (HTTP 403)."""

    kind = FailureKind.PERMISSION


class NotFoundError(ConfluenceError):
    """Raised when the requested resource does not exist (HTTP 404)."""

    kind = FailureKind.NOT_FOUND


class RateLimitedError(ConfluenceError):
    """Raised when Confluence throttles the account (HTTP 429).

    The gateway never retries; the caller decides whether to try again.
    """

    kind = FailureKind.RATE_LIMITED


class ServiceUnavailableError(ConfluenceError):
    """Raised on Confluence server-side failures (HTTP 500/502/503/504)."""

    kind = FailureKind.SERVICE_UNAVAILABLE


class HttpError(ConfluenceError):
    """Raised for any other non-2xx status. Always carries the status code."""

    kind = FailureKind.HTTP

    def __init__(self, message: str, status_code: int, **kwargs):
        super().__init__(message, status_code=status_code, **kwargs)


class NetworkError(ConfluenceError):
    """Raised when the exchange fails below HTTP (timeout, DNS, refused, reset).

    Attributes:
        reason: One of "timeout", "connection_refused", "dns", "reset", "generic"
    """

    kind = FailureKind.NETWORK

    def __init__(self, message: str, reason: str = "generic", **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason


class ValidationError(ConfluenceError):
    """Raised when caller input cannot be turned into a request."""

    kind = FailureKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class MalformedResponseError(ConfluenceError):
    """Raised when a successful response carries a body that is not JSON."""

    kind = FailureKind.MALFORMED_RESPONSE


class UnknownError(ConfluenceError):
    """Raised when a failure cannot be classified any further."""

    kind = FailureKind.UNKNOWN
