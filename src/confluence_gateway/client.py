"""Facade over the Confluence wire clients.

ConfluenceGateway exposes one method per logical operation. Each call
routes the operation to a wire version, builds the request, performs a
single exchange through a freshly created wire client and normalises the
result. Failures surface unchanged from the error mapper; nothing is
retried and no state is kept between calls.
"""

import logging
import re
from typing import Any, Dict, Optional

from .client_factory import WireClientFactory
from .config import GatewayConfig
from .error_mapper import message_prefix
from .errors import MalformedResponseError, ValidationError
from .models import (
    CommentList,
    CommentOptions,
    Operation,
    PageOptions,
    RequestSpec,
    SearchOptions,
    SearchResults,
    SpaceList,
    SpaceListOptions,
)
from .operation_router import OperationRouter
from .pagination import normalize_pagination
from .request_builder import (
    build_comment_params,
    build_create_page_body,
    build_create_space_body,
    build_page_params,
    build_search_params,
    build_space_params,
    build_update_page_body,
    build_update_space_body,
)
from .wire_client import BaseWireClient

logger = logging.getLogger(__name__)

_NUMERIC_ID = re.compile(r'^\d+$')


class ConfluenceGateway:
    """Logical Confluence operations on top of the legacy and v2 REST APIs.

    The configuration is validated when the gateway is built, so a bad
    config fails before any request is attempted.

    Example:
        >>> gateway = ConfluenceGateway(GatewayConfig.from_env())
        >>> found = gateway.search('title ~ "Plan"', SearchOptions(space_key="ENG"))
        >>> found.pagination.has_more
        False
    """

    def __init__(
        self,
        config: GatewayConfig,
        router: Optional[OperationRouter] = None,
        factory: Optional[WireClientFactory] = None,
    ):
        """Initialize the gateway.

        Args:
            config: Connection settings
            router: Operation router; a new default router when omitted
            factory: Wire client factory; built from config when omitted

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config.assert_valid()
        self._config = config
        self._router = router if router is not None else OperationRouter()
        self._factory = factory if factory is not None else WireClientFactory(config)

    @property
    def router(self) -> OperationRouter:
        return self._router

    def search(self, query: Optional[str], options: Optional[SearchOptions] = None) -> SearchResults:
        """Search content with CQL.

        Args:
            query: Raw CQL; empty means "everything"
            options: Space/type filters, ordering and pagination

        Returns:
            SearchResults with results, pagination, total size and duration
        """
        params = build_search_params(query, options)
        response = self._send(
            Operation.SEARCH,
            RequestSpec(method='GET', path='search', params=params),
        )
        return SearchResults(
            results=response.get('results', []),
            pagination=normalize_pagination(response),
            total_size=response.get('totalSize'),
            search_duration=response.get('searchDuration'),
        )

    def get_spaces(self, options: Optional[SpaceListOptions] = None) -> SpaceList:
        """List spaces visible to the account."""
        response = self._send(
            Operation.GET_SPACES,
            RequestSpec(method='GET', path='spaces', params=build_space_params(options)),
        )
        return SpaceList(
            spaces=response.get('results', []),
            pagination=normalize_pagination(response),
        )

    def get_space(self, space_id: str) -> Dict[str, Any]:
        """Fetch one space by its numeric ID."""
        space_id = _require_id(space_id, 'space_id')
        return self._send(
            Operation.GET_SPACE,
            RequestSpec(method='GET', path=f'spaces/{space_id}'),
        )

    def create_space(
        self,
        key: str,
        name: str,
        description: Optional[str] = None,
        space_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a space and return it as Confluence reports it."""
        _require_text(key, 'key')
        _require_text(name, 'name')
        body = build_create_space_body(key, name, description, space_type)
        return self._send(
            Operation.CREATE_SPACE,
            RequestSpec(method='POST', path='spaces', body=body),
        )

    def update_space(
        self,
        space_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Rename a space and/or replace its description."""
        space_id = _require_id(space_id, 'space_id')
        body = build_update_space_body(name, description)
        return self._send(
            Operation.UPDATE_SPACE,
            RequestSpec(method='PUT', path=f'spaces/{space_id}', body=body),
        )

    def get_page(self, page_id: str, options: Optional[PageOptions] = None) -> Dict[str, Any]:
        """Fetch one page, with storage-format content unless disabled."""
        page_id = _require_id(page_id, 'page_id')
        return self._send(
            Operation.GET_PAGE,
            RequestSpec(method='GET', path=f'pages/{page_id}', params=build_page_params(options)),
        )

    def create_page(
        self,
        space_id: str,
        title: str,
        content: str,
        parent_id: Optional[str] = None,
        status: str = 'current',
    ) -> Dict[str, Any]:
        """Create a page from storage-format (XHTML) content.

        Args:
            space_id: Numeric ID of the target space
            title: Page title
            content: Page body in storage format
            parent_id: Optional parent page ID
            status: "current" (published) or "draft"

        Returns:
            The created page as returned by Confluence
        """
        space_id = _require_id(space_id, 'space_id')
        _require_text(title, 'title')
        if parent_id is not None:
            parent_id = _require_id(parent_id, 'parent_id')

        body = build_create_page_body(space_id, title, content, parent_id, status)
        return self._send(
            Operation.CREATE_PAGE,
            RequestSpec(method='POST', path='pages', body=body),
        )

    def update_page(
        self,
        page_id: str,
        current_version: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
        status: Optional[str] = None,
        version_message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Update a page, bumping its version to current_version + 1.

        Args:
            page_id: The page to update
            current_version: Version number the caller last saw; a stale
                value is reported by Confluence as HTTP 409 (HttpError)
            title: New title, if changing
            content: New storage-format body, if changing
            status: New status, if changing
            version_message: Optional version comment

        Returns:
            The updated page as returned by Confluence
        """
        page_id = _require_id(page_id, 'page_id')
        if isinstance(current_version, bool) or not isinstance(current_version, int) \
                or current_version < 1:
            raise ValidationError(
                f"current_version must be a positive integer, got {current_version!r}",
                field='current_version',
            )

        body = build_update_page_body(
            page_id,
            current_version,
            title=title,
            content=content,
            status=status,
            version_message=version_message,
        )
        return self._send(
            Operation.UPDATE_PAGE,
            RequestSpec(method='PUT', path=f'pages/{page_id}', body=body),
        )

    def delete_page(self, page_id: str) -> None:
        """Move a page to the trash."""
        page_id = _require_id(page_id, 'page_id')
        self._send(
            Operation.DELETE_PAGE,
            RequestSpec(method='DELETE', path=f'pages/{page_id}'),
        )

    def get_page_comments(self, page_id: str, options: Optional[CommentOptions] = None) -> CommentList:
        """List footer comments on a page."""
        page_id = _require_id(page_id, 'page_id')
        response = self._send(
            Operation.GET_PAGE_COMMENTS,
            RequestSpec(
                method='GET',
                path=f'pages/{page_id}/comments',
                params=build_comment_params(options),
            ),
        )
        return CommentList(
            comments=response.get('results', []),
            pagination=normalize_pagination(response),
        )

    def web_base_url(self) -> str:
        """Base URL for links shown to people ({host}/wiki)."""
        return self._factory.create_modern().web_base_url()

    def routing_info(self) -> Dict[str, Any]:
        """Describe the current routing, for debugging and diagnostics."""
        return {
            'operation_distribution': self._router.distribution(),
            'v1_operations': self._router.operations_for('v1'),
            'v2_operations': self._router.operations_for('v2'),
        }

    def _client_for(self, operation: Operation) -> BaseWireClient:
        version = self._router.version_for(operation)
        logger.debug(f"Routing {operation.value} to {version.value} API")
        return self._factory.create(version)

    def _send(self, operation: Operation, request: RequestSpec) -> Dict[str, Any]:
        client = self._client_for(operation)
        result = client.send(request, operation=operation.value)
        if result is None:
            return {}
        if not isinstance(result, dict):
            version = client.version().value
            raise MalformedResponseError(
                f"{message_prefix(version, operation.value)}"
                f"Expected a JSON object, got {type(result).__name__}",
                wire_version=version,
                response=result,
            )
        return result


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value


def _require_id(value: Any, field: str) -> str:
    """Validate a Confluence ID; IDs are numeric, which also keeps paths clean."""
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    _require_text(value, field)
    value = value.strip()
    if not _NUMERIC_ID.match(value):
        raise ValidationError(
            f"Invalid {field} format: '{value}'. IDs must contain only numeric characters.",
            field=field,
        )
    return value

