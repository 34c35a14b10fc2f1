"""Playwright E2E fixtures for the careers portal.

This module provides fixtures for:
- Browser context setup with the device profile of each browser project
- A reachability pre-flight that skips live tests when the portal is down
- The CareersPage page object bound to the test's ScenarioReport

Usage:
    @pytest.mark.e2e
    def test_search(careers_page, scenario_report):
        careers_page.open_app()
"""

import os
from collections.abc import Generator
from typing import Any

import httpx
import pytest
from playwright.sync_api import Page, Playwright

from careers_e2e.config.logging import configure_logging
from careers_e2e.config.settings import get_settings
from careers_e2e.pages import CareersPage
from careers_e2e.reporting import ScenarioReport
from careers_e2e.runner.config import DEFAULT_PROJECTS

# =============================================================================
# Configuration
# =============================================================================

# Timeouts (in milliseconds)
DEFAULT_TIMEOUT = 15_000
NAVIGATION_TIMEOUT = 30_000

DEVICES = {project.name: project.device for project in DEFAULT_PROJECTS}


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    configure_logging(get_settings())


# =============================================================================
# pytest-playwright Configuration
# =============================================================================


@pytest.fixture(scope="session")
def browser_context_args(
    browser_context_args: dict[str, Any],
    playwright: Playwright,
    browser_name: str,
) -> dict[str, Any]:
    """Apply the desktop device profile that matches the browser engine."""
    device = dict(playwright.devices[DEVICES.get(browser_name, "Desktop Chrome")])
    # Device descriptors carry the engine, which new_context does not accept
    device.pop("default_browser_type", None)
    return {
        **browser_context_args,
        **device,
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args: dict[str, Any]) -> dict[str, Any]:
    """Configure browser launch arguments."""
    return {
        **browser_type_launch_args,
        "slow_mo": int(os.environ.get("SLOW_MO", "0")),
    }


# =============================================================================
# Careers Portal Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def portal_url() -> str:
    """Base URL of the portal, skipping live tests when it cannot be reached."""
    url = get_settings().base_url
    try:
        with httpx.Client(timeout=10.0, follow_redirects=True) as client:
            response = client.get(url)
    except httpx.HTTPError as e:
        pytest.skip(f"Careers portal not reachable at {url}: {e}")
    if response.status_code >= 500:
        pytest.skip(f"Careers portal unhealthy at {url}: HTTP {response.status_code}")
    return url


@pytest.fixture
def careers_page(
    page: Page,
    portal_url: str,
    scenario_report: ScenarioReport,
) -> Generator[CareersPage, None, None]:
    """CareersPage with health monitoring for the whole test."""
    page.set_default_timeout(DEFAULT_TIMEOUT)
    page.set_default_navigation_timeout(NAVIGATION_TIMEOUT)

    careers = CareersPage(page, report=scenario_report)
    yield careers
    careers.close()


@pytest.fixture
def offline_careers_page(
    page: Page,
    scenario_report: ScenarioReport,
) -> Generator[CareersPage, None, None]:
    """CareersPage for tests that render their own HTML with ``page.set_content``."""
    page.set_default_timeout(DEFAULT_TIMEOUT)

    careers = CareersPage(page, report=scenario_report)
    yield careers
    careers.close()
