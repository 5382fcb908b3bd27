"""Confluence gateway: one set of logical operations over two REST APIs.

This package routes each logical operation (search, pages, spaces,
comments) to the Confluence REST API generation that supports it, builds
the version-specific request, normalises pagination and maps every
failure into one typed exception hierarchy.
"""

from .client import ConfluenceGateway
from .client_factory import WireClientFactory
from .config import ConfigValidationResult, GatewayConfig
from .cql_builder import CqlQueryBuilder, build_cql
from .errors import (
    AuthenticationError,
    ConfigurationError,
    ConfluenceError,
    FailureKind,
    GatewayError,
    HttpError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitedError,
    ServiceUnavailableError,
    UnknownError,
    ValidationError,
)
from .models import (
    CommentList,
    CommentOptions,
    Operation,
    PageOptions,
    PaginationInfo,
    RequestSpec,
    SearchOptions,
    SearchResults,
    SpaceList,
    SpaceListOptions,
    WireVersion,
)
from .operation_router import OperationRouter, create_default_router
from .pagination import normalize_pagination
from .wire_client import BaseWireClient, LegacyWireClient, ModernWireClient

__all__ = [
    "ConfluenceGateway",
    "GatewayConfig",
    "ConfigValidationResult",
    "WireClientFactory",
    "BaseWireClient",
    "LegacyWireClient",
    "ModernWireClient",
    "OperationRouter",
    "create_default_router",
    "CqlQueryBuilder",
    "build_cql",
    "normalize_pagination",
    "Operation",
    "WireVersion",
    "RequestSpec",
    "PaginationInfo",
    "SearchOptions",
    "PageOptions",
    "CommentOptions",
    "SpaceListOptions",
    "SearchResults",
    "SpaceList",
    "CommentList",
    "FailureKind",
    "GatewayError",
    "ConfluenceError",
    "ConfigurationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitedError",
    "ServiceUnavailableError",
    "HttpError",
    "NetworkError",
    "ValidationError",
    "MalformedResponseError",
    "UnknownError",
]
