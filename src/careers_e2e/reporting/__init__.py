"""Scenario reporting: steps, soft checks, attachments and annotations."""

from careers_e2e.reporting.report import (
    Annotation,
    Attachment,
    ScenarioReport,
    SoftFailure,
    StepRecord,
    StepStatus,
)
from careers_e2e.reporting.pytest_report import apply_to_test_report

__all__ = [
    "Annotation",
    "Attachment",
    "ScenarioReport",
    "SoftFailure",
    "StepRecord",
    "StepStatus",
    "apply_to_test_report",
]
