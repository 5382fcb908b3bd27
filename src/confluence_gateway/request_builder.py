"""Request parameter and body builders for each operation family.

Every function here is pure and total: it never raises and returns the
same output for the same input, so the facade can build requests without
any error handling of its own.
"""

from typing import Any, Dict, Optional

from .cql_builder import build_cql
from .models import CommentOptions, PageOptions, SearchOptions, SpaceListOptions
from .pagination import pagination_params

# The comments endpoint names "updated" modified-date; CQL calls it lastModified
COMMENT_SORT_KEYS = {
    'created': 'created-date',
    'updated': 'modified-date',
}

STORAGE_REPRESENTATION = 'storage'


def build_page_params(options: Optional[PageOptions] = None) -> Dict[str, Any]:
    """Query parameters for GET pages/{id}.

    Requests storage-format content unless include_content is False and
    adds a comma-joined expand list when one is given.
    """
    options = options or PageOptions()
    params: Dict[str, Any] = {}

    if options.include_content is not False:
        params['body-format'] = STORAGE_REPRESENTATION

    if options.expand:
        params['expand'] = ','.join(options.expand)

    return params


def build_search_params(query: Optional[str], options: Optional[SearchOptions] = None) -> Dict[str, Any]:
    """Query parameters for GET search: {cql, limit, start}."""
    options = options or SearchOptions()
    return {
        'cql': build_cql(query, options),
        **pagination_params(options.limit, options.start),
    }


def build_comment_params(options: Optional[CommentOptions] = None) -> Dict[str, Any]:
    """Query parameters for GET pages/{id}/comments."""
    options = options or CommentOptions()
    params: Dict[str, Any] = dict(pagination_params(options.limit, options.start))

    if options.order_by:
        params['sort'] = COMMENT_SORT_KEYS.get(options.order_by, 'modified-date')

    return params


def build_space_params(options: Optional[SpaceListOptions] = None) -> Dict[str, Any]:
    """Query parameters for GET spaces; the type filter passes through unchanged."""
    options = options or SpaceListOptions()
    params: Dict[str, Any] = dict(pagination_params(options.limit, options.start))

    if options.space_type:
        params['type'] = options.space_type

    return params


def build_create_page_body(
    space_id: str,
    title: str,
    content: str,
    parent_id: Optional[str] = None,
    status: str = 'current',
    representation: str = STORAGE_REPRESENTATION,
) -> Dict[str, Any]:
    """Body for POST pages."""
    body: Dict[str, Any] = {
        'spaceId': space_id,
        'title': title,
        'body': {
            'storage': {
                'value': content,
                'representation': representation,
            },
        },
        'status': status,
    }
    if parent_id:
        body['parentId'] = parent_id
    return body


def build_update_page_body(
    page_id: str,
    current_version: int,
    title: Optional[str] = None,
    content: Optional[str] = None,
    status: Optional[str] = None,
    version_message: Optional[str] = None,
    representation: str = STORAGE_REPRESENTATION,
) -> Dict[str, Any]:
    """Body for PUT pages/{id}.

    Carries the next version number (current_version + 1) and only the
    fields that are being changed.

    Args:
        page_id: The page being updated
        current_version: Version number the caller last saw
        title: New title, if changing
        content: New storage-format body, if changing
        status: New status, if changing
        version_message: Optional version comment
        representation: Body representation (default "storage")

    Returns:
        Dict ready to be sent as the JSON body
    """
    version: Dict[str, Any] = {'number': current_version + 1}
    if version_message:
        version['message'] = version_message

    body: Dict[str, Any] = {'id': page_id, 'version': version}

    if title is not None:
        body['title'] = title
    if content is not None:
        body['body'] = {
            'storage': {
                'value': content,
                'representation': representation,
            },
        }
    if status is not None:
        body['status'] = status

    return body


def build_create_space_body(
    key: str,
    name: str,
    description: Optional[str] = None,
    space_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Body for POST spaces."""
    body: Dict[str, Any] = {'key': key, 'name': name}
    if description:
        body['description'] = _plain_description(description)
    if space_type:
        body['type'] = space_type
    return body


def build_update_space_body(
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """Body for PUT spaces/{id}; only changed fields are included."""
    body: Dict[str, Any] = {}
    if name:
        body['name'] = name
    if description is not None:
        body['description'] = _plain_description(description)
    return body


def _plain_description(text: str) -> Dict[str, Any]:
    return {'plain': {'value': text, 'representation': 'plain'}}
