"""Generic browser-session capabilities shared by page objects.

This module provides:
- SessionHealth model for console errors and failed requests
- HealthMonitor subscription that feeds a SessionHealth from page events
- ClickOutcome result of the tolerant optional click
- BasePage bundle (navigation, optional click, health reporting)

Page objects hold a BasePage instead of extending it.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

import structlog
from playwright.sync_api import ConsoleMessage, Locator, Page, Request
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from pydantic import BaseModel, Field, computed_field

from careers_e2e.config.settings import Settings, get_settings
from careers_e2e.constants.locators import NOISE_URL_MARKERS

log = structlog.get_logger(__name__)

IMMEDIATE_CLICK_TIMEOUT_MS = 1000

WaitCondition = Literal["domcontentloaded", "networkidle"]


class SessionHealth(BaseModel):
    """Silent-error evidence collected for one browser session."""

    console_errors: list[str] = Field(default_factory=list)
    failed_requests: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_clean(self) -> bool:
        """True when no console error and no failed request was recorded."""
        return not self.console_errors and not self.failed_requests


class ClickOutcome(Enum):
    """Result of an optional click."""

    CLICKED = "clicked"
    NOT_FOUND = "not_found"
    ERROR_IGNORED = "error_ignored"


def is_noise(url: str) -> bool:
    """Return True if a failed request to url is analytics/tracker noise."""
    return any(marker in url for marker in NOISE_URL_MARKERS)


class HealthMonitor:
    """Subscription to a page's console and request-failure events.

    Records are append-only while subscribed. ``stop()`` detaches the
    listeners so a reused page does not accumulate handlers.

    Example:
        with HealthMonitor(page) as monitor:
            page.goto(url)
        assert monitor.snapshot().is_clean
    """

    def __init__(self, page: Page) -> None:
        self.page = page
        self._health = SessionHealth()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> HealthMonitor:
        """Register listeners. Calling start twice is a no-op."""
        if not self._active:
            self.page.on("console", self._on_console)
            self.page.on("requestfailed", self._on_request_failed)
            self._active = True
        return self

    def stop(self) -> None:
        """Remove listeners. Recorded evidence is kept."""
        if self._active:
            self.page.remove_listener("console", self._on_console)
            self.page.remove_listener("requestfailed", self._on_request_failed)
            self._active = False

    def snapshot(self) -> SessionHealth:
        """Return a copy of the evidence recorded so far."""
        return self._health.model_copy(deep=True)

    def _on_console(self, message: ConsoleMessage) -> None:
        if message.type != "error":
            return
        log.warning("console_error_detected", text=message.text)
        self._health.console_errors.append(message.text)

    def _on_request_failed(self, request: Request) -> None:
        if is_noise(request.url):
            log.debug("network_failure_ignored", url=request.url)
            return
        log.warning(
            "network_failure_detected",
            method=request.method,
            url=request.url,
            error=request.failure,
        )
        self._health.failed_requests.append(f"{request.method} {request.url}")

    def __enter__(self) -> HealthMonitor:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class BasePage:
    """Capability bundle over one Playwright page.

    Attributes:
        page: The Playwright page this bundle drives.
        settings: Suite settings (timeouts, health mode).
        monitor: Health subscription, started on construction unless disabled.
    """

    def __init__(
        self,
        page: Page,
        settings: Settings | None = None,
        monitor: bool = True,
    ) -> None:
        self.page = page
        self.settings = settings or get_settings()
        self.monitor = HealthMonitor(page)
        if monitor:
            self.monitor.start()

    def navigate_to(self, url: str, wait_until: WaitCondition = "domcontentloaded") -> None:
        """Go to url and wait for the given load state.

        Navigation errors propagate to the caller.
        """
        log.info("navigating", url=url, wait_until=wait_until)
        self.page.goto(url, wait_until=wait_until)

    def click_if_visible(self, locator: Locator, timeout_ms: int | None = None) -> ClickOutcome:
        """Click an element that may legitimately be absent (consent banners, popups).

        Never raises; the outcome says which branch was taken.

        Args:
            locator: Locator for the optional element. Only the first match is used.
            timeout_ms: Visibility wait. Defaults to ``optional_click_timeout_ms``.
                Zero or less checks visibility once without waiting.

        Returns:
            CLICKED, NOT_FOUND if it did not become visible in time,
            ERROR_IGNORED if anything else went wrong.
        """
        if timeout_ms is None:
            timeout_ms = self.settings.optional_click_timeout_ms
        target = locator.first
        # Playwright reads timeout=0 as "wait forever"
        immediate = timeout_ms <= 0
        try:
            if immediate:
                visible = target.is_visible()
            else:
                target.wait_for(state="visible", timeout=timeout_ms)
                visible = True
        except PlaywrightTimeoutError:
            visible = False
        except Exception as e:
            log.warning("optional_click_error_ignored", error=str(e))
            return ClickOutcome.ERROR_IGNORED
        if not visible:
            log.info("optional_element_not_visible", timeout_ms=timeout_ms)
            return ClickOutcome.NOT_FOUND

        try:
            target.click(timeout=IMMEDIATE_CLICK_TIMEOUT_MS if immediate else timeout_ms)
        except Exception as e:
            log.warning("optional_click_error_ignored", error=str(e))
            return ClickOutcome.ERROR_IGNORED

        log.info("optional_element_clicked")
        return ClickOutcome.CLICKED

    def get_health_metrics(self) -> SessionHealth:
        """Return the session health snapshot."""
        return self.monitor.snapshot()

    def close(self) -> None:
        """Release the health subscription."""
        self.monitor.stop()
