"""Careers portal end-to-end suite: page objects, runner config and reporting."""

__version__ = "1.0.0"
