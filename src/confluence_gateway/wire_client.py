"""HTTP clients for the two Confluence REST API generations.

BaseWireClient holds everything the two generations share: basic-auth
header construction, URL resolution, the single requests exchange, body
parsing and translation of failures through the error mapper. The two
concrete clients only differ in their base path and version label:

    LegacyWireClient  -> {host}/wiki/rest/api   (CQL search)
    ModernWireClient  -> {host}/wiki/api/v2     (spaces, pages, comments)

No retries are performed; each send() is exactly one exchange.
"""

import base64
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from .config import GatewayConfig
from .error_mapper import map_client_error, message_prefix, sanitize_credentials
from .errors import ConfluenceError, MalformedResponseError
from .models import RequestSpec, WireVersion

logger = logging.getLogger(__name__)

# Seconds before an exchange is abandoned
DEFAULT_TIMEOUT = 30

BODY_METHODS = ('POST', 'PUT')
EMPTY_STATUSES = (202, 204)


class BaseWireClient(ABC):
    """Shared behaviour of the legacy and modern wire clients.

    Authentication headers are computed once from the config and merged
    into every request; headers given on a RequestSpec win on collision.

    Example:
        >>> client = ModernWireClient(config)
        >>> client.send(RequestSpec(method="GET", path="spaces"))
    """

    def __init__(self, config: GatewayConfig, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the client.

        Args:
            config: Gateway configuration (host, token, account)
            timeout: Per-exchange timeout in seconds
        """
        self._config = config
        self._timeout = timeout
        self._headers = self._create_auth_headers()
        self._base_url = f"{self.web_base_url()}/{self.api_path}"

    @property
    @abstractmethod
    def api_path(self) -> str:
        """Path of this generation's API below the /wiki base."""

    @abstractmethod
    def version(self) -> WireVersion:
        """The wire version this client speaks."""

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def base_url(self) -> str:
        """Base URL that relative request paths are resolved against."""
        return self._base_url

    def web_base_url(self) -> str:
        """Human-facing base URL ({host}/wiki) for building UI links.

        A host that already ends in /wiki is not doubled.
        """
        host = self._config.host_url.strip().rstrip('/')
        return host if host.endswith('/wiki') else f"{host}/wiki"

    def send(self, request: RequestSpec, operation: Optional[str] = None) -> Any:
        """Perform one exchange and return the parsed JSON body.

        Args:
            request: The request to send
            operation: Logical operation name used in failure messages

        Returns:
            Parsed JSON body, or {} for 202/204 and empty bodies

        Raises:
            ConfluenceError: Any failure, already mapped to the taxonomy
        """
        url = self._resolve_url(request.path)
        method = request.method.upper()
        headers = {**self._headers, **(request.headers or {})}
        body = None
        if request.body is not None and method in BODY_METHODS:
            body = json.dumps(request.body)

        logger.debug(f"Making {method} request to {self.version().value} API: {url}")

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                params=request.params or None,
                data=body,
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            error = self._translate_error(e, url, operation)
            logger.error(f"{self.version().value} API request failed: {error.message}")
            raise error from e

        if not 200 <= response.status_code < 300:
            error = self._translate_status(response, url, operation)
            logger.error(
                f"{self.version().value} API request failed: {method} {url} "
                f"-> {response.status_code}"
            )
            raise error

        return self._parse_body(response, url, operation)

    def _create_auth_headers(self) -> Dict[str, str]:
        raw = f"{self._config.account_id}:{self._config.access_token}"
        encoded = base64.b64encode(raw.encode('utf-8')).decode('ascii')
        return {
            'Authorization': f"Basic {encoded}",
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        }

    def _resolve_url(self, path: str) -> str:
        if path.startswith(('http://', 'https://')):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def _secrets(self):
        return (
            self._config.access_token,
            self._headers['Authorization'].split(' ', 1)[1],
        )

    def _translate_error(
        self, exception: Exception, endpoint: str, operation: Optional[str] = None
    ) -> ConfluenceError:
        """Map a transport exception raised by requests."""
        return map_client_error(
            exception,
            endpoint=endpoint,
            wire_version=self.version().value,
            secrets=self._secrets(),
            operation=operation,
        )

    def _translate_status(
        self, response: requests.Response, endpoint: str, operation: Optional[str] = None
    ) -> ConfluenceError:
        """Map a non-2xx response, keeping its body for diagnostics."""
        details: Any = None
        message: Optional[str] = None

        text = response.text
        if text:
            try:
                details = response.json()
            except ValueError:
                details = sanitize_credentials(text, self._secrets())
            else:
                message = _extract_message(details)

        return map_client_error(
            message,
            status_code=response.status_code,
            response=details,
            endpoint=endpoint,
            wire_version=self.version().value,
            secrets=self._secrets(),
            operation=operation,
        )

    def _parse_body(
        self, response: requests.Response, endpoint: str, operation: Optional[str] = None
    ) -> Any:
        if response.status_code in EMPTY_STATUSES:
            return {}

        text = response.text
        if not text or not text.strip():
            return {}

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{self.version().value} API returned a non-JSON body from {endpoint}")
            raise MalformedResponseError(
                f"{message_prefix(self.version().value, operation)}"
                f"Failed to parse response as JSON from {endpoint}",
                status_code=response.status_code,
                wire_version=self.version().value,
                cause=e,
                response=text,
                endpoint=endpoint,
            ) from e


class LegacyWireClient(BaseWireClient):
    """Client for the legacy REST API (/wiki/rest/api), used for CQL search."""

    api_path = 'rest/api'

    def version(self) -> WireVersion:
        return WireVersion.LEGACY


class ModernWireClient(BaseWireClient):
    """Client for REST API v2 (/wiki/api/v2), used for structural operations."""

    api_path = 'api/v2'

    def version(self) -> WireVersion:
        return WireVersion.MODERN


def _extract_message(details: Any) -> Optional[str]:
    """Pull a human readable message out of a Confluence error body."""
    if not isinstance(details, dict):
        return None

    for key in ('message', 'detail', 'error'):
        value = details.get(key)
        if isinstance(value, str) and value:
            return value

    errors = details.get('errors')
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        title = errors[0].get('title') or errors[0].get('detail')
        if isinstance(title, str):
            return title
    return None
