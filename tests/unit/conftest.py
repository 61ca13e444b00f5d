"""Unit test fixtures: a fake page wired into every page object.

Waits run with small budgets so failing settles cost milliseconds.
"""

from __future__ import annotations

import pytest

from jobtrack_e2e.models import Credentials
from jobtrack_e2e.pages import JobTrackPages
from jobtrack_e2e.pages.activities import ActivitiesPage
from jobtrack_e2e.pages.add_job import AddJobPage
from jobtrack_e2e.pages.auth import AuthPage
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.dashboard import DashboardPage
from jobtrack_e2e.pages.jobs import JobsPage
from jobtrack_e2e.pages.navigation import NavigationComponent
from jobtrack_e2e.pages.timeline import TimelinePage
from tests.support.fake_page import BASE_URL, FakePage

AUTH_ROUTES = ("/landing", "/register")


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def actions(fake_page: FakePage) -> PageActions:
    return PageActions(
        fake_page,  # type: ignore[arg-type]
        base_url=BASE_URL,
        action_timeout=150,
        settle_timeout=60,
        poll_interval=5,
        rerender_timeout=60,
    )


@pytest.fixture
def pages(actions: PageActions) -> JobTrackPages:
    """Every page object sharing the fake-backed actions."""
    seeded = Credentials(email="seeded@jobtrack.com", password="seeded-pass", name="Seeded")
    return JobTrackPages(
        actions=actions,
        auth=AuthPage(actions, AUTH_ROUTES, default_credentials=seeded),
        dashboard=DashboardPage(actions),
        navigation=NavigationComponent(actions, AUTH_ROUTES),
        jobs=JobsPage(actions),
        add_job=AddJobPage(actions),
        activities=ActivitiesPage(actions),
        timeline=TimelinePage(actions),
    )
