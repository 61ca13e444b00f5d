#!/usr/bin/env python3
"""
JobTrack E2E runner

Runs the scenario suite once per browser/device project, with the
capture, retry and reporting policy taken from settings (environment or
.env) and overridable on the command line.

Usage:
    jobtrack-e2e run
    jobtrack-e2e run tests/e2e/test_auth.py --project firefox --project "Mobile Safari"
    jobtrack-e2e check
    jobtrack-e2e bootstrap

Exit codes:
    0 - Every project passed (or services are ready)
    1 - A project failed, or a service never became ready
"""

from __future__ import annotations

import argparse
import os
import re
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from jobtrack_e2e.bootstrap import run_global_setup, wait_for_backend, wait_for_frontend
from jobtrack_e2e.config import Settings, configure_logging
from jobtrack_e2e.config.settings import CapturePolicy
from jobtrack_e2e.constants.projects import PROJECTS, BrowserProject
from jobtrack_e2e.core.exceptions import BootstrapError

log = structlog.get_logger(__name__)

DEFAULT_PATHS = ("tests/e2e",)

# pytest-playwright accepts a narrower vocabulary per artifact kind
_TRACE_VIDEO_POLICIES = {
    "on": "on",
    "off": "off",
    "retain-on-failure": "retain-on-failure",
    "only-on-failure": "retain-on-failure",
}
_SCREENSHOT_POLICIES = {
    "on": "on",
    "off": "off",
    "retain-on-failure": "only-on-failure",
    "only-on-failure": "only-on-failure",
}


def project_slug(name: str) -> str:
    """Filesystem-safe folder name for a project, e.g. "Mobile Safari" -> "mobile-safari"."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def build_pytest_args(
    settings: Settings,
    project: BrowserProject,
    paths: Sequence[str] = DEFAULT_PATHS,
    keyword: str | None = None,
    markers: str | None = None,
) -> list[str]:
    """Command-line arguments for one pytest run of ``project``."""
    slug = project_slug(project.name)
    report_dir = Path(settings.report_dir) / slug

    args = [*paths, "--browser", project.browser]
    if project.device:
        args += ["--device", project.device]
    if project.channel:
        args += ["--browser-channel", project.channel]

    args += [
        "--base-url",
        settings.base_url,
        "--output",
        str(Path(settings.output_dir) / slug),
        "--tracing",
        _capture(settings.trace, _TRACE_VIDEO_POLICIES),
        "--video",
        _capture(settings.video, _TRACE_VIDEO_POLICIES),
        "--screenshot",
        _capture(settings.screenshot, _SCREENSHOT_POLICIES),
        "--timeout",
        str(settings.test_timeout // 1000),
        "--html",
        str(report_dir / "index.html"),
        "--self-contained-html",
        "--json-report",
        "--json-report-file",
        str(report_dir / "results.json"),
    ]
    if settings.headed:
        args.append("--headed")
    if settings.slow_mo:
        args += ["--slowmo", str(settings.slow_mo)]
    if settings.workers:
        args += ["-n", str(settings.workers)]
    if settings.retries:
        args += ["--reruns", str(settings.retries)]
    if keyword:
        args += ["-k", keyword]
    if markers:
        args += ["-m", markers]
    return args


def _capture(policy: CapturePolicy, vocabulary: dict[str, str]) -> str:
    return vocabulary[policy]


def env_overrides(args: argparse.Namespace) -> dict[str, str]:
    """Environment variables for the command-line overrides.

    They are exported to the pytest subprocess so fixtures read the same
    settings as the runner.
    """
    overrides: dict[str, str] = {}
    if getattr(args, "base_url", None):
        overrides["BASE_URL"] = args.base_url
    if getattr(args, "workers", None) is not None:
        overrides["WORKERS"] = str(args.workers)
    if getattr(args, "retries", None) is not None:
        overrides["RETRIES"] = str(args.retries)
    if getattr(args, "headed", False):
        overrides["HEADED"] = "true"
    if getattr(args, "report_dir", None):
        overrides["REPORT_DIR"] = args.report_dir
    return overrides


def settings_from_args(args: argparse.Namespace) -> Settings:
    values: dict[str, object] = {
        name.lower(): value for name, value in env_overrides(args).items()
    }
    if getattr(args, "project", None):
        values["projects"] = args.project
    return Settings(**values)


def _run(args: argparse.Namespace, settings: Settings) -> int:
    env = {**os.environ, **env_overrides(args)}

    failed: list[str] = []
    for name in settings.projects:
        project = PROJECTS[name]
        pytest_args = build_pytest_args(
            settings, project, args.paths or DEFAULT_PATHS, args.keyword, args.markers
        )
        with structlog.contextvars.bound_contextvars(project=name):
            log.info("project_started", args=" ".join(pytest_args))
            result = subprocess.run([sys.executable, "-m", "pytest", *pytest_args], env=env)
            log.info("project_finished", exit_code=result.returncode)
        if result.returncode != 0:
            failed.append(name)

    if failed:
        log.error("run_failed", failed_projects=failed)
        return 1
    log.info("run_passed", projects=settings.projects)
    return 0


def _check(args: argparse.Namespace, settings: Settings) -> int:
    try:
        wait_for_frontend(settings)
        wait_for_backend(settings)
    except BootstrapError as e:
        log.error("services_not_ready", service=e.service, error=str(e))
        return 1
    log.info("services_ready", base_url=settings.base_url, api_url=settings.api_url)
    return 0


def _bootstrap(args: argparse.Namespace, settings: Settings) -> int:
    try:
        outcome = run_global_setup(settings)
    except BootstrapError as e:
        log.error("bootstrap_failed", service=e.service, error=str(e))
        return 1
    log.info("bootstrap_done", outcome=outcome.value)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobtrack-e2e",
        description="JobTrack4U end-to-end browser suite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Whole suite on the default project (chromium)
  jobtrack-e2e run

  # One file on two projects, 4 workers
  jobtrack-e2e run tests/e2e/test_jobs.py --project firefox --project webkit --workers 4

  # Only wait for the frontend and backend to answer
  jobtrack-e2e check
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run the scenario suite")
    run.add_argument("paths", nargs="*", help="Test files or directories (default: tests/e2e)")
    run.add_argument(
        "--project",
        action="append",
        choices=sorted(PROJECTS),
        help="Browser/device project; repeat for several (default: from settings)",
    )
    run.add_argument("--workers", type=int, help="Parallel workers (pytest-xdist)")
    run.add_argument("--retries", type=int, help="Reruns for failed tests")
    run.add_argument("--headed", action="store_true", help="Show the browser window")
    run.add_argument("--report-dir", help="Folder for HTML/JSON reports")
    run.add_argument("-k", dest="keyword", help="Only run tests matching the expression")
    run.add_argument("-m", dest="markers", help="Only run tests matching the marker expression")
    run.set_defaults(handler=_run)

    check = subparsers.add_parser("check", help="Wait for frontend and backend readiness")
    check.set_defaults(handler=_check)

    bootstrap = subparsers.add_parser("bootstrap", help="Wait for services and seed the test user")
    bootstrap.add_argument("--headed", action="store_true", help="Show the seeding browser")
    bootstrap.set_defaults(handler=_bootstrap)

    for sub in (run, check, bootstrap):
        sub.add_argument("--base-url", help="Frontend base URL (default: from settings)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
