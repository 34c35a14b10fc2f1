"""Runner configuration: parallelism, retries, browsers and reporters."""

from careers_e2e.runner.config import (
    BrowserProject,
    ReporterSpec,
    RunnerConfig,
    build_runner_config,
    write_testrail_config,
)

__all__ = [
    "BrowserProject",
    "ReporterSpec",
    "RunnerConfig",
    "build_runner_config",
    "write_testrail_config",
]
