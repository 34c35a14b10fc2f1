"""Shared pytest fixtures for the careers E2E suite.

This module provides fixtures for:
- Test environment variables (.env first, then defaults)
- A fresh ScenarioReport per test, folded into the pytest report
- Mocked Playwright pages for unit tests

Usage:
    @pytest.mark.unit
    def test_something(mock_page, unit_settings):
        base = BasePage(mock_page, settings=unit_settings)
"""

import os
from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import MagicMock

import pytest

from careers_e2e.config.settings import Settings, get_settings
from careers_e2e.reporting import ScenarioReport, apply_to_test_report

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Loads .env file first, then sets defaults for any missing variables.
    """
    from dotenv import load_dotenv

    original_env = os.environ.copy()

    # Won't override existing env vars
    load_dotenv()

    os.environ.setdefault("LOG_LEVEL", "INFO")

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def unit_settings() -> Settings:
    """Settings with defaults only, independent of .env and CI variables."""
    return Settings(_env_file=None, ci=False, base_url="https://careers.example.com/")  # type: ignore[call-arg]


# =============================================================================
# Scenario Reporting
# =============================================================================


@pytest.fixture
def scenario_report(request: pytest.FixtureRequest) -> ScenarioReport:
    """Per-test collector for steps, soft checks and attachments."""
    report = ScenarioReport(test_id=request.node.nodeid)
    request.node.scenario_report = report
    return report


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]) -> Generator[None, Any, None]:
    """Fold the test's ScenarioReport into its pytest report."""
    outcome = yield
    report = outcome.get_result()

    scenario_report = getattr(item, "scenario_report", None)
    if scenario_report is None:
        return

    # Annotations from the testrail marker go to junit properties too
    if report.when == "call":
        marker = item.get_closest_marker("testrail")
        if marker is not None:
            for case_id in marker.kwargs.get("ids", ()):
                if not any(a.description == case_id for a in scenario_report.annotations):
                    scenario_report.annotate("testrail", case_id)

    html_plugin = item.config.pluginmanager.getplugin("html")
    apply_to_test_report(report, scenario_report, html_plugin)


# =============================================================================
# Mocked Playwright Page (Unit Tests)
# =============================================================================


class FakeEventPage:
    """Records ``page.on`` listeners so tests can emit events."""

    def __init__(self, page: MagicMock) -> None:
        self.listeners: dict[str, list[Callable[[Any], None]]] = {}
        page.on.side_effect = self._on
        page.remove_listener.side_effect = self._remove

    def _on(self, event: str, handler: Callable[[Any], None]) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def _remove(self, event: str, handler: Callable[[Any], None]) -> None:
        self.listeners.get(event, []).remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in list(self.listeners.get(event, [])):
            handler(payload)

    def count(self, event: str) -> int:
        return len(self.listeners.get(event, []))


@pytest.fixture
def mock_page() -> MagicMock:
    """Mock Playwright page.

    ``mock_page.events`` emits console/requestfailed events to registered listeners.
    """
    page = MagicMock()
    page.events = FakeEventPage(page)
    page.screenshot.return_value = b"\x89PNG fake"
    page.evaluate.return_value = {"heading": True, "button": True}
    return page


@pytest.fixture
def console_message() -> Callable[[str, str], MagicMock]:
    """Build a console message with the given type and text."""

    def _make(type_: str, text: str) -> MagicMock:
        message = MagicMock()
        message.type = type_
        message.text = text
        return message

    return _make


@pytest.fixture
def failed_request() -> Callable[..., MagicMock]:
    """Build a failed request for a URL."""

    def _make(url: str, method: str = "GET", failure: str = "net::ERR_FAILED") -> MagicMock:
        request = MagicMock()
        request.url = url
        request.method = method
        request.failure = failure
        return request

    return _make


# =============================================================================
# Markers for Test Selection
# =============================================================================

# Usage:
# pytest                 # unit tests (e2e deselected by default)
# pytest -m e2e          # only E2E tests
# careers-e2e run        # E2E suite with the runner configuration
