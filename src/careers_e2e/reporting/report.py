"""Per-test report collector.

One ScenarioReport lives for one test. Page objects push soft-check failures
and attachments into it; the pytest hook in ``tests/conftest.py`` folds it
into the pytest report when the test finishes.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

log = structlog.get_logger(__name__)


class StepStatus(Enum):
    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class StepRecord:
    title: str
    status: StepStatus
    duration_ms: float


@dataclass(frozen=True)
class SoftFailure:
    """A recorded non-fatal check failure."""

    message: str
    step: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        where = f"[{self.step}] " if self.step else ""
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{where}{self.message}" + (f" ({details})" if details else "")


@dataclass(frozen=True)
class Attachment:
    name: str
    body: bytes
    content_type: str


@dataclass(frozen=True)
class Annotation:
    type: str
    description: str


class ScenarioReport:
    """Collects step results, soft failures, attachments and annotations."""

    def __init__(self, test_id: str | None = None) -> None:
        self.test_id = test_id
        self.steps: list[StepRecord] = []
        self.soft_failures: list[SoftFailure] = []
        self.attachments: list[Attachment] = []
        self.annotations: list[Annotation] = []
        self._current_step: str | None = None

    @property
    def has_soft_failures(self) -> bool:
        return bool(self.soft_failures)

    @contextmanager
    def step(self, title: str) -> Iterator[None]:
        """Group actions under a named step.

        Exceptions propagate after the step is recorded as failed.
        """
        parent = self._current_step
        self._current_step = title
        started = time.perf_counter()
        log.info("step_started", step=title, test_id=self.test_id)
        try:
            yield
        except BaseException:
            duration_ms = (time.perf_counter() - started) * 1000
            self.steps.append(StepRecord(title, StepStatus.FAILED, duration_ms))
            log.error("step_failed", step=title, duration_ms=round(duration_ms))
            raise
        else:
            duration_ms = (time.perf_counter() - started) * 1000
            self.steps.append(StepRecord(title, StepStatus.PASSED, duration_ms))
            log.info("step_passed", step=title, duration_ms=round(duration_ms))
        finally:
            self._current_step = parent

    def soft_check(self, condition: bool, message: str, **context: Any) -> bool:
        """Record a failure without stopping the test.

        Returns:
            The condition, so callers can branch on it.
        """
        if not condition:
            failure = SoftFailure(message=message, step=self._current_step, context=context)
            self.soft_failures.append(failure)
            log.warning("soft_check_failed", failure=failure.describe())
        return condition

    def attach(self, name: str, body: bytes, content_type: str = "image/png") -> None:
        self.attachments.append(Attachment(name=name, body=body, content_type=content_type))
        log.info("attachment_added", name=name, content_type=content_type, size=len(body))

    def annotate(self, type: str, description: str) -> None:
        self.annotations.append(Annotation(type=type, description=description))

    def soft_failure_summary(self) -> str:
        lines = [f"{len(self.soft_failures)} soft check(s) failed:"]
        lines.extend(f"  - {failure.describe()}" for failure in self.soft_failures)
        return "\n".join(lines)
