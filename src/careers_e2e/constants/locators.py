"""Locator catalog for the careers portal.

Elements are described by ARIA role plus an accessible-name rule and resolved
through ``page.get_by_role``. Entries are immutable and defined once at import.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from playwright.sync_api import Locator, Page

# Failed requests to these hosts are analytics noise, not session errors
NOISE_URL_MARKERS: tuple[str, ...] = ("google-analytics", "tracker")


@dataclass(frozen=True)
class RoleLocator:
    """Role-based element descriptor.

    Attributes:
        role: ARIA role passed to ``get_by_role``.
        name: Accessible-name rule. None for elements whose name is supplied
            by the page object at lookup time.
    """

    role: str
    name: re.Pattern[str] | str | None = None

    def resolve(self, page: Page, name: re.Pattern[str] | str | None = None) -> Locator:
        """Build a Playwright locator, optionally overriding the name rule."""
        name = name if name is not None else self.name
        if name is None:
            return page.get_by_role(self.role)  # type: ignore[arg-type]
        return page.get_by_role(self.role, name=name)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Urls:
    base_prod: str = "https://careers.osapiens.com/"


@dataclass(frozen=True)
class Elements:
    cookie_banner: RoleLocator = field(
        default_factory=lambda: RoleLocator(
            "button", re.compile(r"reject all|alle ablehnen|accept|kabul", re.IGNORECASE)
        )
    )
    view_jobs_btn: RoleLocator = field(
        default_factory=lambda: RoleLocator(
            "link", re.compile(r"view jobs|offene stellen", re.IGNORECASE)
        )
    )
    search_input: RoleLocator = field(
        default_factory=lambda: RoleLocator("textbox", re.compile(r"search", re.IGNORECASE))
    )
    # Names for these two come from the scenario's matching pattern
    job_grid_cell: RoleLocator = field(default_factory=lambda: RoleLocator("gridcell"))
    job_heading: RoleLocator = field(default_factory=lambda: RoleLocator("heading"))


@dataclass(frozen=True)
class MagicStyles:
    """Colors and patterns used by the candidate personalization overlay."""

    header_color: str = "#2563eb"
    match_color: str = "#e11d48"
    button_hire_bg: str = "#16a34a"
    button_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(r"apply|bewerben", re.IGNORECASE)
    )


@dataclass(frozen=True)
class CareersLocators:
    urls: Urls = field(default_factory=Urls)
    elements: Elements = field(default_factory=Elements)
    magic_styles: MagicStyles = field(default_factory=MagicStyles)


CAREERS_LOCATORS = CareersLocators()
