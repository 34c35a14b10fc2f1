"""E2E test fixtures package."""

from tests.e2e.fixtures.test_data import (
    BARE_PAGE_HTML,
    CANDIDATE_NAME,
    DETAILS_PAGE_HTML,
    JOB_MATCH_PATTERN,
    SEARCH_TERM,
)

__all__ = [
    "BARE_PAGE_HTML",
    "CANDIDATE_NAME",
    "DETAILS_PAGE_HTML",
    "JOB_MATCH_PATTERN",
    "SEARCH_TERM",
]
