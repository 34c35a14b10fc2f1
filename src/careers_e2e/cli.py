"""Command-line entry point.

Usage:
    careers-e2e run                  # full suite with the resolved runner config
    careers-e2e run --headed -- -k C2342
    careers-e2e show-config          # print the runner config as JSON
"""

from __future__ import annotations

import argparse
import json
import sys
import tempfile

import pytest
import structlog
from pydantic import ValidationError

from careers_e2e.config.logging import configure_logging
from careers_e2e.config.settings import get_settings
from careers_e2e.core.exceptions import ConfigurationError
from careers_e2e.runner.config import build_runner_config, write_testrail_config

log = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="careers-e2e",
        description="Careers portal end-to-end suite",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run the e2e suite")
    run.add_argument("--headed", action="store_true", help="Show the browser windows")
    run.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra pytest arguments")

    sub.add_parser("show-config", help="Print the resolved runner configuration")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
        configure_logging(settings)
        config = build_runner_config(settings)
    except (ConfigurationError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.command == "show-config":
        print(json.dumps(config.describe(), indent=2))
        return 0

    extra = [a for a in args.pytest_args if a != "--"]
    with tempfile.TemporaryDirectory(prefix="careers-e2e-") as tmp:
        pytest_args = config.to_pytest_args(testrail_config=write_testrail_config(config, tmp))
        if args.headed:
            pytest_args.append("--headed")
        pytest_args += extra

        log.info(
            "suite_starting", ci=settings.ci, retries=config.retries, workers=config.workers
        )
        return int(pytest.main(pytest_args))


if __name__ == "__main__":
    sys.exit(main())
