"""Page object for the osapiens careers portal.

Workflows are meant to run in order (open, consent, listings, search,
select, validate); each one expects the DOM state its predecessor left.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

import structlog
from playwright.sync_api import Locator, Page, expect

from careers_e2e.config.settings import Settings, get_settings
from careers_e2e.constants.locators import CAREERS_LOCATORS
from careers_e2e.core.exceptions import SessionHealthError
from careers_e2e.pages.base_page import BasePage, ClickOutcome, SessionHealth
from careers_e2e.reporting.report import ScenarioReport

log = structlog.get_logger(__name__)

# Recolors the first h1/h2, appends a match note and relabels the first
# apply-like control. Missing targets are skipped.
_CANDIDATE_MAGIC_JS = """
({ name, style }) => {
  const result = { heading: false, button: false };

  const header = document.querySelector('h1, h2');
  if (header instanceof HTMLElement) {
    header.style.transition = 'all 0.5s';
    header.style.color = style.headerColor;
    header.appendChild(document.createElement('br'));
    const note = document.createElement('span');
    note.style.fontSize = '0.6em';
    note.style.color = style.matchColor;
    note.textContent = `(✨ Best Match: ${name})`;
    header.appendChild(note);
    result.heading = true;
  }

  const pattern = new RegExp(style.buttonPattern, 'i');
  const applyBtn = Array.from(document.querySelectorAll('a, button'))
    .find((el) => el instanceof HTMLElement && pattern.test(el.innerText));
  if (applyBtn instanceof HTMLElement) {
    applyBtn.innerText = `Hire ${name.split(' ')[0]} Immediately`;
    applyBtn.style.backgroundColor = style.buttonHireBg;
    applyBtn.style.border = '2px solid #fff';
    applyBtn.style.transform = 'scale(1.1)';
    result.button = true;
  }

  return result;
}
"""


@dataclass(frozen=True)
class MagicResult:
    """Which parts of the personalization overlay were applied."""

    heading_updated: bool
    button_updated: bool


class CareersPage:
    """Careers portal workflows.

    Attributes:
        base: Shared browser capabilities (navigation, optional click, health).
        report: Collector for soft checks and attachments of the running test.
        base_url: Portal URL, BASE_URL or the production default.
    """

    def __init__(
        self,
        page: Page,
        report: ScenarioReport | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.base = BasePage(page, settings=self.settings)
        if report is None:
            # soft checks and attachments stay on this object; nothing reports them
            log.warning("scenario_report_detached", page_object=type(self).__name__)
            report = ScenarioReport()
        self.report = report
        self.base_url = self.settings.base_url

        elements = CAREERS_LOCATORS.elements
        self.cookie_button: Locator = elements.cookie_banner.resolve(page)
        self.view_jobs_button: Locator = elements.view_jobs_btn.resolve(page)
        self.search_input: Locator = elements.search_input.resolve(page)

    @property
    def page(self) -> Page:
        return self.base.page

    def open_app(self) -> None:
        self.base.navigate_to(self.base_url)

    def handle_cookies(self) -> ClickOutcome:
        """Dismiss the consent banner if it shows up. Never fails the test."""
        log.info("cookie_banner_check")
        return self.base.click_if_visible(self.cookie_button)

    def access_job_listings(self) -> None:
        view_jobs = self.view_jobs_button.first
        expect(view_jobs, "View Jobs button should be visible").to_be_visible()
        view_jobs.click()
        expect(self.search_input, "Search bar should appear").to_be_visible()

    def search_for_role(self, term: str) -> float:
        """Search for term and soft-check the search duration.

        Returns:
            Elapsed milliseconds from filling the box to network idle.
        """
        started = time.perf_counter()

        self.search_input.fill(term)
        self.search_input.press("Enter")
        self.page.wait_for_load_state("networkidle")

        duration_ms = (time.perf_counter() - started) * 1000
        log.info("search_performance", term=term, duration_ms=round(duration_ms))

        self.report.soft_check(
            duration_ms < self.settings.search_sla_ms,
            "Performance Warning: Search took too long",
            duration_ms=round(duration_ms),
            threshold_ms=self.settings.search_sla_ms,
        )
        return duration_ms

    def verify_and_click_listing(self, pattern: re.Pattern[str] | str) -> str:
        """Open the first listing whose accessible name matches pattern.

        Returns:
            The listing's visible text.
        """
        matching_job = CAREERS_LOCATORS.elements.job_grid_cell.resolve(self.page, pattern).first
        expect(matching_job, f"Should find job matching {_describe(pattern)}").to_be_visible()

        title = matching_job.inner_text()
        log.info("listing_match_found", title=title)

        matching_job.click()
        return title

    def validate_job_details(self, pattern: re.Pattern[str] | str) -> None:
        header = CAREERS_LOCATORS.elements.job_heading.resolve(self.page, pattern).first
        expect(header, f"Job heading matching {_describe(pattern)} should be visible").to_be_visible()

        # Crude check that the details page is not empty
        body_text = self.page.locator("body").text_content() or ""
        self.report.soft_check(
            len(body_text) > self.settings.min_body_text_length,
            "Job details page looks empty",
            body_length=len(body_text),
            min_length=self.settings.min_body_text_length,
        )
        log.info("job_details_verified")

    def inject_candidate_magic(self, candidate_name: str) -> MagicResult:
        """Personalize the details page for a candidate and attach a screenshot.

        Cosmetic only; has no effect on the site's behavior.
        """
        log.info("candidate_magic_started", candidate=candidate_name)
        styles = CAREERS_LOCATORS.magic_styles

        applied = self.page.evaluate(
            _CANDIDATE_MAGIC_JS,
            {
                "name": candidate_name,
                "style": {
                    "headerColor": styles.header_color,
                    "matchColor": styles.match_color,
                    "buttonHireBg": styles.button_hire_bg,
                    "buttonPattern": styles.button_pattern.pattern,
                },
            },
        ) or {}
        result = MagicResult(
            heading_updated=bool(applied.get("heading")),
            button_updated=bool(applied.get("button")),
        )
        log.info(
            "candidate_magic_applied",
            heading_updated=result.heading_updated,
            button_updated=result.button_updated,
        )

        self.page.wait_for_timeout(self.settings.magic_settle_ms)
        self.report.attach("Candidate Magic", self.page.screenshot(), "image/png")
        return result

    def assert_healthy_session(self) -> SessionHealth:
        """Report silent errors collected during the session.

        In observational mode this only logs. In strict mode a dirty session
        raises SessionHealthError.
        """
        health = self.base.get_health_metrics()

        if health.is_clean:
            log.info("session_health_clean")
            return health

        log.warning(
            "session_health_warning",
            console_errors=health.console_errors,
            failed_requests=health.failed_requests,
            mode=self.settings.health_mode,
        )
        if self.settings.health_mode == "strict":
            raise SessionHealthError(health)
        return health

    def close(self) -> None:
        self.base.close()


def _describe(pattern: re.Pattern[str] | str) -> str:
    if isinstance(pattern, str):
        return repr(pattern)
    flags = "i" if pattern.flags & re.IGNORECASE else ""
    return f"/{pattern.pattern}/{flags}"
