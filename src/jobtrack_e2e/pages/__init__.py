"""
Page Objects

Page Object Model (POM) for the JobTrack4U web application.
Each page object wraps one screen's selectors and workflows and is built
around a shared ``PageActions`` instead of inheriting from a base page.

Usage:
    from jobtrack_e2e.pages import JobTrackPages

    pages = JobTrackPages.from_page(page, settings)
    pages.auth.perform_login()
    pages.jobs.navigate_to_jobs()
    assert pages.jobs.is_on_jobs_page()
"""

from __future__ import annotations

from dataclasses import dataclass

from playwright.sync_api import Page

from jobtrack_e2e.config.settings import Settings, get_settings
from jobtrack_e2e.pages.activities import ActivitiesPage
from jobtrack_e2e.pages.add_job import AddJobPage
from jobtrack_e2e.pages.auth import AuthMode, AuthPage
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.dashboard import DashboardPage
from jobtrack_e2e.pages.jobs import JobCardField, JobsPage
from jobtrack_e2e.pages.locators import LocatorMap, Selector
from jobtrack_e2e.pages.navigation import Destination, NavigationComponent
from jobtrack_e2e.pages.timeline import TimelineMode, TimelinePage


@dataclass(frozen=True)
class JobTrackPages:
    """All page objects of one browser page, sharing one ``PageActions``."""

    actions: PageActions
    auth: AuthPage
    dashboard: DashboardPage
    navigation: NavigationComponent
    jobs: JobsPage
    add_job: AddJobPage
    activities: ActivitiesPage
    timeline: TimelinePage

    @classmethod
    def from_page(cls, page: Page, settings: Settings | None = None) -> JobTrackPages:
        settings = settings or get_settings()
        actions = PageActions(
            page,
            base_url=settings.base_url,
            action_timeout=settings.action_timeout,
            settle_timeout=settings.settle_timeout,
            poll_interval=settings.poll_interval,
            rerender_timeout=settings.rerender_timeout,
        )
        return cls(
            actions=actions,
            auth=AuthPage(
                actions,
                settings.auth_routes,
                default_credentials=settings.test_user_credentials,
            ),
            dashboard=DashboardPage(actions),
            navigation=NavigationComponent(actions, settings.auth_routes),
            jobs=JobsPage(actions),
            add_job=AddJobPage(actions),
            activities=ActivitiesPage(actions),
            timeline=TimelinePage(actions),
        )


__all__ = [
    "ActivitiesPage",
    "AddJobPage",
    "AuthMode",
    "AuthPage",
    "DashboardPage",
    "Destination",
    "JobCardField",
    "JobTrackPages",
    "JobsPage",
    "LocatorMap",
    "NavigationComponent",
    "PageActions",
    "Selector",
    "TimelineMode",
    "TimelinePage",
]
