"""Configuration module."""

from careers_e2e.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
