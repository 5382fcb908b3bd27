"""Translation of HTTP statuses and transport exceptions into gateway errors.

map_client_error() is the single entry point used by the wire clients. It
applies the rules in a fixed precedence: gateway errors pass through, then
HTTP status, then configuration context, then transport-failure patterns,
and finally a generic HTTP 500 wrapper. Messages are run through
sanitize_credentials() so tokens never reach the caller.
"""

import logging
import re
from typing import Any, Iterable, Optional

from requests.exceptions import ConnectionError, Timeout

from .errors import (
    AuthenticationError,
    ConfigurationError,
    ConfluenceError,
    HttpError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitedError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

REDACTED = '***REDACTED***'

SERVICE_UNAVAILABLE_STATUSES = (500, 502, 503, 504)

# (reason, patterns) checked in order against the lower-cased message
_NETWORK_PATTERNS = (
    ('timeout', ('etimedout', 'timeout', 'timed out')),
    ('connection_refused', ('econnrefused', 'connection refused')),
    ('dns', ('enotfound', 'name or service not known',
             'nodename nor servname', 'name resolution')),
    ('reset', ('econnreset', 'connection reset', 'socket hang up',
               'connection aborted')),
)


def sanitize_credentials(text: str, secrets: Iterable[Optional[str]] = ()) -> str:
    """Mask credentials in error messages and log text.

    Masks the given secrets verbatim, then anything that looks like an
    Authorization header, Basic/Bearer credential, password or token pair,
    or user:password pair in a URL.

    Args:
        text: The error message or log text to sanitize
        secrets: Known secret values (e.g., the access token) to mask

    Returns:
        str: Sanitized text with credentials masked

    Example:
        >>> sanitize_credentials("token=abc123 rejected")
        'token=***REDACTED*** rejected'
    """
    if not text:
        return text

    sanitized = text

    for secret in secrets:
        if secret:
            sanitized = sanitized.replace(secret, REDACTED)

    # user:pass@host in URLs
    sanitized = re.sub(r'://([\w.-]+):([^@/\s]+)@', r'://***:***@', sanitized)

    sanitized = re.sub(
        r'Authorization["\']?\s*[:=]\s*[^\n\r,}]+',
        f'Authorization: {REDACTED}',
        sanitized,
        flags=re.IGNORECASE,
    )

    sanitized = re.sub(
        r'\b(Basic|Bearer)\s+[A-Za-z0-9+/=._-]{8,}',
        rf'\1 {REDACTED}',
        sanitized,
        flags=re.IGNORECASE,
    )

    sanitized = re.sub(
        r'\b(password|api_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&,}]+)',
        rf'\1={REDACTED}',
        sanitized,
        flags=re.IGNORECASE,
    )

    return sanitized


def message_prefix(wire_version: Optional[str] = None, operation: Optional[str] = None) -> str:
    """Context prefix for mapped messages, e.g. "[v2] getPage: "."""
    prefix = f"[{wire_version}] " if wire_version else ""
    if operation:
        prefix += f"{operation}: "
    return prefix


def map_http_status(
    status_code: int,
    response: Any = None,
    endpoint: Optional[str] = None,
    wire_version: Optional[str] = None,
    detail: Optional[str] = None,
    operation: Optional[str] = None,
) -> ConfluenceError:
    """Map a non-2xx HTTP status to the matching gateway error.

    Args:
        status_code: The HTTP status code
        response: Response body kept on the error for diagnostics
        endpoint: Endpoint the request went to (referenced in 404 messages)
        wire_version: Wire version that produced the response
        detail: Optional server-supplied message appended for generic errors
        operation: Logical operation name, added to the message prefix

    Returns:
        ConfluenceError: The mapped error (never raised here)
    """
    prefix = message_prefix(wire_version, operation)
    common = dict(
        status_code=status_code,
        wire_version=wire_version,
        response=response,
        endpoint=endpoint,
    )

    if status_code == 401:
        return AuthenticationError(
            f"{prefix}Authentication failed. Please check your credentials.",
            **common,
        )
    if status_code == 403:
        return PermissionDeniedError(
            f"{prefix}Access forbidden. Insufficient permissions.",
            **common,
        )
    if status_code == 404:
        return NotFoundError(
            f"{prefix}Resource not found: {endpoint or 'unknown endpoint'}",
            **common,
        )
    if status_code == 429:
        return RateLimitedError(
            f"{prefix}Rate limit exceeded. Please try again later.",
            **common,
        )
    if status_code in SERVICE_UNAVAILABLE_STATUSES:
        return ServiceUnavailableError(
            f"{prefix}Confluence service unavailable ({status_code})",
            **common,
        )

    message = f"{prefix}HTTP error {status_code}"
    if detail:
        message += f": {detail}"
    common.pop('status_code')
    return HttpError(message, status_code, **common)


def network_reason(error: Any) -> Optional[str]:
    """Classify a transport failure, or return None if it is not one.

    requests' Timeout and ConnectionError are always transport failures;
    other exceptions and plain message strings are classified by their text.
    """
    message = str(error).lower()
    for reason, patterns in _NETWORK_PATTERNS:
        if any(pattern in message for pattern in patterns):
            return reason

    if isinstance(error, Timeout):
        return 'timeout'
    if isinstance(error, ConnectionError):
        return 'generic'
    if 'network' in message or 'socket' in message:
        return 'generic'
    return None


def map_network_error(
    error: Any,
    endpoint: Optional[str] = None,
    wire_version: Optional[str] = None,
    reason: Optional[str] = None,
    operation: Optional[str] = None,
) -> NetworkError:
    """Map a transport-level exception (or its message) to NetworkError."""
    reason = reason or network_reason(error) or 'generic'
    target = endpoint or 'unknown'

    if reason == 'timeout':
        message = f"Request timeout for endpoint: {target}"
    elif reason == 'connection_refused':
        message = f"Connection refused to endpoint: {target}"
    elif reason == 'dns':
        message = f"DNS resolution failed for endpoint: {target}"
    elif reason == 'reset':
        message = f"Connection reset by endpoint: {target}"
    else:
        message = f"Network error: {error}"

    return NetworkError(
        f"{message_prefix(wire_version, operation)}{message}",
        reason=reason,
        wire_version=wire_version,
        cause=error if isinstance(error, BaseException) else None,
        endpoint=endpoint,
    )


def map_config_error(error: Any, config_key: Optional[str] = None) -> ConfigurationError:
    """Wrap a configuration problem in ConfigurationError."""
    if isinstance(error, BaseException):
        return ConfigurationError(
            f"Configuration error: {error}",
            config_key=config_key,
            cause=error,
        )
    return ConfigurationError("Unknown configuration error", config_key=config_key)


def map_client_error(
    error: Any,
    status_code: Optional[int] = None,
    response: Any = None,
    endpoint: Optional[str] = None,
    config_key: Optional[str] = None,
    wire_version: Optional[str] = None,
    secrets: Iterable[Optional[str]] = (),
    operation: Optional[str] = None,
) -> ConfluenceError:
    """Map any failure to exactly one gateway error.

    Rules are applied in this order:
        1. A ConfluenceError is returned unchanged
        2. An HTTP status maps via map_http_status()
        3. A configuration key maps to ConfigurationError
        4. A transport failure (exception or message) maps to NetworkError
        5. Anything else becomes HttpError(500) carrying the original message

    Args:
        error: The exception, message string or other object describing the failure
        status_code: HTTP status, if the failure came from a response
        response: Response body for diagnostics
        endpoint: Endpoint the request was sent to
        config_key: Configuration field the failure relates to
        wire_version: Wire version that produced the failure
        secrets: Secret values to mask in the resulting message
        operation: Logical operation name, added to the message prefix

    Returns:
        ConfluenceError: The mapped error, ready to raise
    """
    secrets = tuple(secrets)

    if isinstance(error, ConfluenceError):
        return error

    if status_code:
        detail = sanitize_credentials(str(error), secrets) if error else None
        return map_http_status(
            status_code,
            response=response,
            endpoint=endpoint,
            wire_version=wire_version,
            detail=detail,
            operation=operation,
        )

    if config_key:
        return map_config_error(error, config_key)

    if isinstance(error, (BaseException, str)):
        reason = network_reason(error)
        if reason:
            mapped = map_network_error(error, endpoint, wire_version, reason, operation)
            mapped.message = sanitize_credentials(mapped.message, secrets)
            mapped.args = (mapped.message,)
            return mapped

    if isinstance(error, BaseException):
        text = str(error) or type(error).__name__
    elif isinstance(error, str) and error:
        text = error
    else:
        logger.debug(f"Unclassifiable failure object: {type(error).__name__}")
        text = "Unknown error"

    message = message_prefix(wire_version, operation) + sanitize_credentials(text, secrets)
    return HttpError(
        message,
        500,
        wire_version=wire_version,
        cause=error if isinstance(error, BaseException) else None,
        response=error if response is None and not isinstance(error, BaseException) else response,
        endpoint=endpoint,
    )
