"""Declarative runner configuration.

``build_runner_config`` reads Settings once and produces an immutable
RunnerConfig; ``to_pytest_args`` renders it for pytest and its plugins
(pytest-xdist, pytest-rerunfailures, pytest-playwright, pytest-html,
pytest-testrail).
"""

from __future__ import annotations

import configparser
from datetime import date
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from careers_e2e.config.settings import Settings
from careers_e2e.core.exceptions import ConfigurationError

log = structlog.get_logger(__name__)

CI_RETRIES = 2
CI_WORKERS = 1

TESTRAIL_ENV_VARS: dict[str, str] = {
    "testrail_host": "TESTRAIL_HOST",
    "testrail_username": "TESTRAIL_USERNAME",
    "testrail_api_key": "TESTRAIL_API_KEY",
    "testrail_project_id": "TESTRAIL_PROJECT_ID",
    "testrail_suite_id": "TESTRAIL_SUITE_ID",
}


class BrowserProject(BaseModel):
    """One browser engine target with its emulated device profile."""

    model_config = ConfigDict(frozen=True)

    name: Literal["chromium", "firefox", "webkit"]
    device: str


DEFAULT_PROJECTS: tuple[BrowserProject, ...] = (
    BrowserProject(name="chromium", device="Desktop Chrome"),
    BrowserProject(name="firefox", device="Desktop Firefox"),
    BrowserProject(name="webkit", device="Desktop Safari"),
)


class ReporterSpec(BaseModel):
    """A result-reporting destination and its options."""

    model_config = ConfigDict(frozen=True)

    name: Literal["list", "html", "testrail"]
    options: dict[str, Any] = Field(default_factory=dict)


class RunnerConfig(BaseModel):
    """Suite execution policy, read once at suite start."""

    model_config = ConfigDict(frozen=True)

    test_dir: str = "tests"
    fully_parallel: bool = True
    retries: int = Field(default=0, ge=0)
    workers: int | None = Field(default=None, ge=1, description="None lets xdist decide")
    trace: Literal["on", "off", "retain-on-failure"] = "retain-on-failure"
    base_url: str
    projects: tuple[BrowserProject, ...] = DEFAULT_PROJECTS
    reporters: tuple[ReporterSpec, ...]

    def reporter(self, name: str) -> ReporterSpec | None:
        return next((r for r in self.reporters if r.name == name), None)

    def device_for(self, browser_name: str) -> str | None:
        return next((p.device for p in self.projects if p.name == browser_name), None)

    def to_pytest_args(self, testrail_config: str | Path | None = None) -> list[str]:
        """Render the configuration as pytest command-line arguments.

        Args:
            testrail_config: Path written by ``write_testrail_config``. Required
                when the TestRail reporter is enabled; credentials are read
                from it so they never appear on the command line.
        """
        args = [self.test_dir, "-m", "e2e"]

        if self.fully_parallel:
            args += ["-n", str(self.workers) if self.workers else "auto", "--dist", "load"]
        if self.retries:
            args += ["--reruns", str(self.retries)]

        for project in self.projects:
            args += ["--browser", project.name]
        args += ["--tracing", self.trace, "--base-url", self.base_url]

        for reporter in self.reporters:
            args += _reporter_args(reporter, testrail_config)
        return args

    def describe(self) -> dict[str, Any]:
        """JSON-safe view with secrets masked."""
        data = self.model_dump(mode="json")
        for reporter in data["reporters"]:
            if "api_key" in reporter["options"]:
                reporter["options"]["api_key"] = "**********"
        return data


def _reporter_args(reporter: ReporterSpec, testrail_config: str | Path | None) -> list[str]:
    opts = reporter.options
    if reporter.name == "list":
        return ["-v"]
    if reporter.name == "html":
        return [f"--html={opts['path']}", "--self-contained-html"]
    # testrail
    if testrail_config is None:
        raise ConfigurationError(
            "TestRail reporting requires a config file from write_testrail_config"
        )
    args = [
        "--testrail",
        f"--tr-config={testrail_config}",
        f"--tr-project-id={opts['project_id']}",
        f"--tr-suite-id={opts['suite_id']}",
        f"--tr-testrun-name={opts['run_name']}",
    ]
    if not opts.get("include_all_cases", True):
        args.append("--tr-skip-missing")
    return args


def write_testrail_config(config: RunnerConfig, directory: str | Path) -> Path | None:
    """Write the pytest-testrail credentials file into ``directory``.

    Returns None when the TestRail reporter is not enabled. The file is
    readable by the owner only.
    """
    reporter = config.reporter("testrail")
    if reporter is None:
        return None
    opts = reporter.options
    parser = configparser.ConfigParser(interpolation=None)
    parser["API"] = {
        "url": str(opts["host"]),
        "email": str(opts["username"]),
        "password": str(opts["api_key"]),
    }
    parser["TESTRUN"] = {
        "project_id": str(opts["project_id"]),
        "suite_id": str(opts["suite_id"]),
    }
    path = Path(directory) / "testrail.cfg"
    path.touch(mode=0o600)
    with path.open("w", encoding="utf-8") as fh:
        parser.write(fh)
    log.debug("testrail_config_written", path=str(path))
    return path


def _is_blank(value: Any) -> bool:
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    return value is None or (isinstance(value, str) and not value.strip())


def _testrail_options(settings: Settings, today: date) -> dict[str, Any]:
    missing = [
        env for field, env in TESTRAIL_ENV_VARS.items() if _is_blank(getattr(settings, field))
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required env var(s) for TestRail reporting: {', '.join(missing)}"
        )
    assert settings.testrail_api_key is not None
    return {
        "host": settings.testrail_host,
        "username": settings.testrail_username,
        "api_key": settings.testrail_api_key.get_secret_value(),
        "project_id": settings.testrail_project_id,
        "suite_id": settings.testrail_suite_id,
        "create_test_run": True,
        "run_name": f"Scheduled Run - {today.isoformat()}",
        "include_all_cases": True,
    }


def build_runner_config(settings: Settings, today: date | None = None) -> RunnerConfig:
    """Build the runner configuration for the current environment.

    Args:
        settings: Suite settings; ``ci`` drives retries, workers and TestRail.
        today: Date used in the TestRail run name. Defaults to today.

    Raises:
        ConfigurationError: CI is set but a TestRail variable is missing.
    """
    reporters = [
        ReporterSpec(name="list"),
        ReporterSpec(name="html", options={"path": str(Path(settings.report_dir) / "index.html")}),
    ]
    if settings.ci:
        reporters.append(
            ReporterSpec(name="testrail", options=_testrail_options(settings, today or date.today()))
        )

    config = RunnerConfig(
        retries=CI_RETRIES if settings.ci else 0,
        workers=CI_WORKERS if settings.ci else None,
        base_url=settings.base_url,
        reporters=tuple(reporters),
    )
    log.debug(
        "runner_config_built",
        ci=settings.ci,
        retries=config.retries,
        workers=config.workers,
        reporters=[r.name for r in config.reporters],
    )
    return config
