"""CQL query builder for the legacy search API.

The caller's query is trusted as CQL: it is trimmed and passed through
without parsing. Filters are appended in a fixed order (space, type,
ordering). Filter values are wrapped in double quotes but not escaped, so
they must not contain quote characters.
"""

from typing import Optional

from .models import SearchOptions

WILDCARD_QUERY = 'text ~ *'

# relevance is Confluence's default sort and never emits a clause
ORDER_BY_FIELDS = {
    'created': 'created',
    'modified': 'lastModified',
    'title': 'title',
}


class CqlQueryBuilder:
    """Builds one CQL string from a raw query and optional filters.

    Example:
        >>> CqlQueryBuilder('title ~ "Plan"', SearchOptions(space_key="ENG")).build()
        'title ~ "Plan" AND space.key = "ENG"'
    """

    def __init__(self, query: Optional[str], options: Optional[SearchOptions] = None):
        self.query = query or ''
        self.options = options or SearchOptions()

    def build(self) -> str:
        """Build the complete CQL query string."""
        cql = self.query.strip()
        if not cql:
            cql = WILDCARD_QUERY

        if self.options.space_key:
            cql += f' AND space.key = "{self.options.space_key}"'

        if self.options.content_type:
            cql += f' AND type = "{self.options.content_type}"'

        order_by = self.options.order_by
        if order_by and order_by != 'relevance':
            cql += f' ORDER BY {_order_field(order_by)}'

        return cql


def build_cql(query: Optional[str], options: Optional[SearchOptions] = None) -> str:
    """Convenience wrapper: CqlQueryBuilder(query, options).build()."""
    return CqlQueryBuilder(query, options).build()


def _order_field(order_by: str) -> str:
    # Unrecognised values sort by creation date
    return ORDER_BY_FIELDS.get(order_by, 'created')
