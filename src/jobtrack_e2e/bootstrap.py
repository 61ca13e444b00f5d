"""Environment bootstrap for a scenario run.

Before any scenario executes, both services must answer and the seeded
test user must exist:

1. Poll the frontend until it serves pages.
2. Poll the backend auth endpoint until it answers 200 or 401.
3. Register the seeded user through the UI ("already exists" is fine).

Service readiness failures are fatal for the whole run (``BootstrapError``).

Usage:
    from jobtrack_e2e.bootstrap import run_global_setup

    run_global_setup()  # uses get_settings()
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

import httpx
import structlog
from playwright.sync_api import sync_playwright
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from jobtrack_e2e.config.settings import Settings, get_settings
from jobtrack_e2e.constants.timeouts import AUTH_REDIRECT_TIMEOUT_MS, SETTLE_TIMEOUT_MS
from jobtrack_e2e.core.exceptions import BootstrapError
from jobtrack_e2e.models import Credentials
from jobtrack_e2e.pages import JobTrackPages
from jobtrack_e2e.pages.auth import AuthPage

log = structlog.get_logger(__name__)

# Backend answers the current-user probe with 401 when nobody is logged in
BACKEND_READY_STATUSES = frozenset({200, 401})


class SeedOutcome(str, Enum):
    """How seeding the test user ended."""

    CREATED = "created"
    ALREADY_EXISTS = "already-exists"
    ALREADY_LOGGED_IN = "already-logged-in"
    UNCONFIRMED = "unconfirmed"


def _frontend_ready(response: httpx.Response) -> bool:
    return response.status_code < 500


def _backend_ready(response: httpx.Response) -> bool:
    return response.status_code in BACKEND_READY_STATUSES


def _poll(
    service: str,
    url: str,
    ready: Callable[[httpx.Response], bool],
    settings: Settings,
) -> httpx.Response:
    """GET ``url`` until ``ready(response)`` or the attempts run out."""

    def log_attempt(retry_state: RetryCallState) -> None:
        remaining = settings.bootstrap_attempts - retry_state.attempt_number
        outcome = retry_state.outcome
        if outcome is None:
            return
        if outcome.failed:
            detail = repr(outcome.exception())
        else:
            detail = f"HTTP {outcome.result().status_code}"
        log.info("service_waiting", service=service, remaining=remaining, detail=detail)

    retrying = Retrying(
        stop=stop_after_attempt(settings.bootstrap_attempts),
        wait=wait_fixed(settings.bootstrap_interval),
        retry=(
            retry_if_exception_type(httpx.TransportError)
            | retry_if_result(lambda response: not ready(response))
        ),
        before_sleep=log_attempt,
    )

    with httpx.Client(timeout=settings.bootstrap_request_timeout) as client:
        try:
            response = retrying(client.get, url)
        except RetryError as e:
            last = e.last_attempt
            if last.failed:
                reason = f"unreachable ({last.exception()!r})"
            else:
                reason = f"not ready (HTTP {last.result().status_code})"
            log.error("service_not_ready", service=service, url=url, reason=reason)
            raise BootstrapError(
                service, url, f"{reason} after {settings.bootstrap_attempts} attempts"
            ) from e

    log.info(f"{service}_ready", url=url, status=response.status_code)
    return response


def wait_for_frontend(settings: Settings | None = None) -> httpx.Response:
    """Block until the frontend serves pages.

    Raises:
        BootstrapError: If it never does within the configured attempts.
    """
    settings = settings or get_settings()
    return _poll("frontend", settings.base_url, _frontend_ready, settings)


def wait_for_backend(settings: Settings | None = None) -> httpx.Response:
    """Block until the backend health path answers 200 or 401.

    Raises:
        BootstrapError: If it never does within the configured attempts.
    """
    settings = settings or get_settings()
    return _poll("backend", settings.backend_health_url, _backend_ready, settings)


def seed_test_user(auth: AuthPage, credentials: Credentials) -> SeedOutcome:
    """Register ``credentials`` through the UI.

    An existing account shows an alert and stays on the auth route; that
    counts as success, as does a browser that is already logged in.
    """
    actions = auth.actions
    auth.navigate_to_auth()
    if actions.settle(auth.is_on_dashboard, timeout=SETTLE_TIMEOUT_MS):
        log.info("test_user_seeded", outcome=SeedOutcome.ALREADY_LOGGED_IN.value)
        return SeedOutcome.ALREADY_LOGGED_IN

    auth.register(credentials)
    actions.settle(
        lambda: auth.is_on_dashboard() or auth.is_alert_visible(),
        timeout=AUTH_REDIRECT_TIMEOUT_MS,
    )

    if auth.is_on_dashboard():
        outcome = SeedOutcome.CREATED
    elif auth.is_alert_visible():
        outcome = SeedOutcome.ALREADY_EXISTS
    else:
        outcome = SeedOutcome.UNCONFIRMED

    if outcome is SeedOutcome.UNCONFIRMED:
        log.warning("test_user_seed_unconfirmed", email=credentials.email, url=actions.url)
    else:
        log.info("test_user_seeded", email=credentials.email, outcome=outcome.value)
    return outcome


def run_global_setup(settings: Settings | None = None) -> SeedOutcome:
    """Wait for both services, then seed the test user in a throwaway browser."""
    settings = settings or get_settings()
    log.info("global_setup_started", base_url=settings.base_url, api_url=settings.api_url)

    wait_for_frontend(settings)
    wait_for_backend(settings)

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=not settings.headed)
        try:
            page = browser.new_page()
            pages = JobTrackPages.from_page(page, settings)
            outcome = seed_test_user(pages.auth, settings.test_user_credentials)
        finally:
            browser.close()

    log.info("global_setup_completed", outcome=outcome.value)
    return outcome


def run_global_teardown(settings: Settings | None = None) -> None:
    """Test data is kept after a run so failures can be inspected."""
    settings = settings or get_settings()
    log.info("global_teardown", kept_data=True, base_url=settings.base_url)
