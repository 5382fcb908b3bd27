"""Normalisation of Confluence pagination envelopes.

Both wire versions describe a page of results with start, limit, size and
a links object whose "next" entry is present while more results exist.
The platform names that object "_links"; "links" is accepted as well.
"""

from typing import Any, Dict, Mapping, Optional

from .models import PaginationInfo

DEFAULT_LIMIT = 25
DEFAULT_START = 0


def normalize_pagination(envelope: Mapping[str, Any]) -> PaginationInfo:
    """Turn a raw legacy or modern envelope into PaginationInfo.

    start, limit and size are copied verbatim (size may exceed limit);
    has_more is True only when links.next is present and truthy.
    """
    links = envelope.get('_links')
    if links is None:
        links = envelope.get('links')

    has_more = bool(links.get('next')) if isinstance(links, Mapping) else False

    return PaginationInfo(
        limit=envelope.get('limit'),
        start=envelope.get('start'),
        size=envelope.get('size'),
        has_more=has_more,
    )


def pagination_params(limit: Optional[int] = None, start: Optional[int] = None) -> Dict[str, int]:
    """Query parameters for a paginated request.

    Unset or zero values fall back to limit 25 and start 0; only an
    explicit positive value overrides a default.
    """
    return {
        'limit': limit if limit and limit > 0 else DEFAULT_LIMIT,
        'start': start if start and start > 0 else DEFAULT_START,
    }
