"""Careers E2E exception hierarchy.

Hard UI checks fail through Playwright's ``expect`` and soft checks through
``ScenarioReport.soft_check``; the classes here cover the suite's own errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from careers_e2e.pages.base_page import SessionHealth


class CareersE2EError(Exception):
    """Base exception for all suite errors."""

    pass


class ConfigurationError(CareersE2EError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("Missing required env var: TESTRAIL_HOST")
    """

    pass


class SessionHealthError(CareersE2EError, AssertionError):
    """Raised in strict health mode when a session recorded silent errors.

    Subclasses AssertionError so pytest reports it as a test failure.

    Attributes:
        health: The session health snapshot that failed the check.
    """

    def __init__(self, health: SessionHealth) -> None:
        self.health = health
        super().__init__(
            f"Session recorded {len(health.console_errors)} console error(s) "
            f"and {len(health.failed_requests)} failed request(s)"
        )
