"""Data models for the Confluence gateway.

This module defines the value types shared by the router, the request
builders, the wire clients and the facade. All models use dataclasses for
clean, type-safe data structures; enums are str-valued so they compare
equal to the literal names used on the wire.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class WireVersion(str, Enum):
    """The two incompatible Confluence REST API generations.

    LEGACY is the /wiki/rest/api surface (the only one that speaks CQL),
    MODERN is the /wiki/api/v2 surface used for structural operations.
    """
    LEGACY = "v1"
    MODERN = "v2"


class Operation(str, Enum):
    """Logical operations exposed by the gateway."""
    SEARCH = "search"
    GET_SPACES = "getSpaces"
    GET_PAGE = "getPage"
    CREATE_PAGE = "createPage"
    UPDATE_PAGE = "updatePage"
    GET_PAGE_COMMENTS = "getPageComments"
    DELETE_PAGE = "deletePage"
    GET_SPACE = "getSpace"
    CREATE_SPACE = "createSpace"
    UPDATE_SPACE = "updateSpace"


@dataclass
class RequestSpec:
    """Version-agnostic description of one HTTP exchange.

    Attributes:
        method: HTTP method ("GET", "POST", "PUT", "DELETE")
        path: Path relative to the wire client's base URL, or an absolute URL
        headers: Header overrides; these win over the client's auth headers
        params: Query string parameters
        body: JSON-serialisable body (only sent for POST and PUT)
    """
    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    body: Optional[Any] = None


@dataclass(frozen=True)
class PaginationInfo:
    """Pagination metadata normalised across both wire versions.

    size is copied verbatim and may exceed limit; no bounds are enforced.
    """
    limit: Optional[int]
    start: Optional[int]
    size: Optional[int]
    has_more: bool


@dataclass
class SearchOptions:
    """Options for a CQL search.

    Attributes:
        space_key: Restrict results to one space (e.g., "DEV")
        content_type: Restrict results to a content type ("page", "blogpost")
        limit: Page size (default 25 when unset or zero)
        start: Offset of the first result (default 0)
        order_by: One of "relevance", "created", "modified", "title"
    """
    space_key: Optional[str] = None
    content_type: Optional[str] = None
    limit: Optional[int] = None
    start: Optional[int] = None
    order_by: Optional[str] = None


@dataclass
class PageOptions:
    """Options for fetching a single page."""
    include_content: bool = True
    expand: Optional[List[str]] = None


@dataclass
class CommentOptions:
    """Options for listing a page's comments; order_by is "created" or "updated"."""
    limit: Optional[int] = None
    start: Optional[int] = None
    order_by: Optional[str] = None


@dataclass
class SpaceListOptions:
    """Options for listing spaces; space_type is "global" or "personal"."""
    space_type: Optional[str] = None
    limit: Optional[int] = None
    start: Optional[int] = None


@dataclass
class SpaceList:
    """Result of get_spaces."""
    spaces: List[Dict[str, Any]]
    pagination: PaginationInfo


@dataclass
class CommentList:
    """Result of get_page_comments."""
    comments: List[Dict[str, Any]]
    pagination: PaginationInfo


@dataclass
class SearchResults:
    """Result of search.

    Attributes:
        results: Raw search result entries from the legacy API
        pagination: Normalised pagination metadata
        total_size: Total number of matches reported by Confluence
        search_duration: Server-side search time in milliseconds
    """
    results: List[Dict[str, Any]]
    pagination: PaginationInfo
    total_size: Optional[int] = None
    search_duration: Optional[int] = None
