"""
Page Objects

Page Object Model (POM) for the careers portal.

Usage:
    from careers_e2e.pages import CareersPage

    careers = CareersPage(page, report=scenario_report)
    careers.open_app()
    careers.handle_cookies()

Pattern:
    - BasePage bundles generic capabilities, page objects hold one
    - Locators come from careers_e2e.constants
    - Hard checks through Playwright expect, soft checks through ScenarioReport
"""

from careers_e2e.pages.base_page import (
    BasePage,
    ClickOutcome,
    HealthMonitor,
    SessionHealth,
    is_noise,
)
from careers_e2e.pages.careers_page import CareersPage, MagicResult

__all__ = [
    "BasePage",
    "CareersPage",
    "ClickOutcome",
    "HealthMonitor",
    "MagicResult",
    "SessionHealth",
    "is_noise",
]
