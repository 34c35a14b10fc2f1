"""Fold a ScenarioReport into pytest's TestReport."""

from __future__ import annotations

import base64
from typing import Any

import pytest

from careers_e2e.reporting.report import ScenarioReport


def apply_to_test_report(
    test_report: pytest.TestReport,
    scenario_report: ScenarioReport,
    html_plugin: Any | None = None,
) -> None:
    """Apply soft failures, attachments and annotations to a ``call`` phase report.

    A passing call with soft failures is turned into a failure carrying the
    summary. Attachments are added as pytest-html extras when the plugin is
    active. Annotations become ``user_properties`` (junit xml properties).
    """
    if test_report.when != "call":
        return

    if scenario_report.has_soft_failures and test_report.passed:
        test_report.outcome = "failed"
        test_report.longrepr = scenario_report.soft_failure_summary()
    elif scenario_report.has_soft_failures:
        test_report.sections.append(
            ("soft checks", scenario_report.soft_failure_summary())
        )

    for annotation in scenario_report.annotations:
        test_report.user_properties.append((annotation.type, annotation.description))

    if html_plugin is None:
        return
    extras = getattr(test_report, "extras", [])
    for attachment in scenario_report.attachments:
        content = base64.b64encode(attachment.body).decode("ascii")
        if attachment.content_type == "image/png":
            extras.append(html_plugin.extras.png(content, name=attachment.name))
        else:
            extras.append(html_plugin.extras.text(attachment.body.decode("utf-8", "replace"),
                                                  name=attachment.name))
    test_report.extras = extras
