"""Playwright E2E fixtures for the JobTrack4U web application.

This module provides fixtures for:
- Settings shared with the runner (``--base-url`` wins over the environment)
- Browser context and timeout configuration
- A session-wide readiness check and seeded test user
- Page objects bound to the per-test page, logged out or logged in

The scenarios need the frontend and backend running. When either is
unreachable every scenario is skipped, or the whole run stops when
``REQUIRE_APPLICATION=true``.

Usage:
    @pytest.mark.e2e
    def test_jobs_listing(logged_in: JobTrackPages):
        logged_in.navigation.go_to_all_jobs()
        assert logged_in.jobs.is_on_jobs_page()
"""

from collections.abc import Generator
from typing import Any

import pytest
import structlog
from playwright.sync_api import Browser, Page, expect

from jobtrack_e2e.bootstrap import (
    SeedOutcome,
    run_global_teardown,
    seed_test_user,
    wait_for_backend,
    wait_for_frontend,
)
from jobtrack_e2e.config.settings import Settings, get_settings
from jobtrack_e2e.core.exceptions import BootstrapError
from jobtrack_e2e.pages import JobTrackPages

log = structlog.get_logger(__name__)


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(scope="session")
def settings(pytestconfig: pytest.Config) -> Settings:
    """Suite settings; a ``--base-url`` given to pytest overrides BASE_URL."""
    settings = get_settings()
    cli_base_url = pytestconfig.getoption("base_url", default=None)
    if cli_base_url and cli_base_url.rstrip("/") != settings.base_url:
        settings = settings.model_copy(update={"base_url": cli_base_url.rstrip("/")})
    return settings


@pytest.fixture(scope="session")
def base_url(settings: Settings) -> str:
    return settings.base_url


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Configure browser context for JobTrack4U testing."""
    return {
        **browser_context_args,
        "base_url": settings.base_url,
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="session", autouse=True)
def assertion_timeout(settings: Settings) -> None:
    expect.set_options(timeout=settings.expect_timeout)


# =============================================================================
# Application readiness
# =============================================================================


@pytest.fixture(scope="session")
def services_ready(settings: Settings) -> None:
    """Skip the scenarios (or stop the run) before any browser starts."""
    try:
        wait_for_frontend(settings)
        wait_for_backend(settings)
    except BootstrapError as e:
        if settings.require_application:
            pytest.exit(f"JobTrack4U is not reachable: {e}", returncode=1)
        pytest.skip(f"JobTrack4U is not reachable: {e}")


@pytest.fixture(scope="session")
def application(
    services_ready: None, settings: Settings, browser: Browser
) -> Generator[SeedOutcome, None, None]:
    """Make sure the seeded user exists.

    Runs once per session (once per worker under xdist).
    """
    context = browser.new_context(base_url=settings.base_url)
    try:
        seeding_page = context.new_page()
        pages = JobTrackPages.from_page(seeding_page, settings)
        outcome = seed_test_user(pages.auth, settings.test_user_credentials)
    finally:
        context.close()

    yield outcome

    run_global_teardown(settings)


# =============================================================================
# Page objects
# =============================================================================


@pytest.fixture
def pages(application: SeedOutcome, page: Page, settings: Settings) -> JobTrackPages:
    """Page objects for a fresh, logged-out browser context.

    Usage:
        def test_redirect(pages):
            pages.actions.navigate("/")
    """
    page.set_default_timeout(settings.action_timeout)
    page.set_default_navigation_timeout(settings.navigation_timeout)
    return JobTrackPages.from_page(page, settings)


@pytest.fixture
def logged_in(pages: JobTrackPages) -> JobTrackPages:
    """Page objects after logging in as the seeded test user."""
    pages.auth.perform_login()
    log.debug("logged_in", url=pages.actions.url)
    return pages
