"""Static constants: locators, URLs and presentation values."""

from careers_e2e.constants.locators import CAREERS_LOCATORS, NOISE_URL_MARKERS, RoleLocator

__all__ = ["CAREERS_LOCATORS", "NOISE_URL_MARKERS", "RoleLocator"]
