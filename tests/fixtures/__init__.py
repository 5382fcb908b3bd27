"""Test fixtures for Confluence gateway tests.

This module provides:
- A valid test configuration builder
- Real requests.Response objects with canned bodies
- Sample legacy and v2 API envelopes
"""

from .confluence_responses import (
    TEST_HOST,
    TEST_TOKEN,
    TEST_ACCOUNT,
    make_config,
    make_response,
    SEARCH_RESPONSE,
    SPACES_RESPONSE,
    COMMENTS_RESPONSE,
    PAGE_RESPONSE,
)

__all__ = [
    "TEST_HOST",
    "TEST_TOKEN",
    "TEST_ACCOUNT",
    "make_config",
    "make_response",
    "SEARCH_RESPONSE",
    "SPACES_RESPONSE",
    "COMMENTS_RESPONSE",
    "PAGE_RESPONSE",
]
