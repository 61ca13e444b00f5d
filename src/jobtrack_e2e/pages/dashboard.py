"""Stats dashboard, the landing route after login."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from jobtrack_e2e.constants.routes import Route
from jobtrack_e2e.constants.timeouts import ELEMENT_TIMEOUT_MS
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap


class DashboardLocator(Enum):
    PAGE_TITLE = auto()
    DASHBOARD_CONTENT = auto()
    STATS_CONTAINER = auto()
    STAT_CARDS = auto()
    PENDING_JOBS = auto()
    INTERVIEW_JOBS = auto()
    DECLINED_JOBS = auto()
    WELCOME_MESSAGE = auto()


LOCATORS = LocatorMap(
    DashboardLocator,
    {
        DashboardLocator.PAGE_TITLE: ("h1", "h2", "h3"),
        DashboardLocator.DASHBOARD_CONTENT: ('[data-testid="dashboard"]', ".dashboard"),
        DashboardLocator.STATS_CONTAINER: ('[class*="stats"]', ".stat-card", ".statistic"),
        DashboardLocator.STAT_CARDS: ".stat-card",
        DashboardLocator.PENDING_JOBS: "text=/pending/i",
        DashboardLocator.INTERVIEW_JOBS: "text=/interview/i",
        DashboardLocator.DECLINED_JOBS: "text=/declined/i",
        DashboardLocator.WELCOME_MESSAGE: "text=/Stats|Dashboard|Welcome/i",
    },
)


@dataclass(frozen=True)
class DashboardStatistics:
    has_stats: bool = False
    stat_card_count: int = 0
    has_pending_jobs: bool = False
    has_interview_jobs: bool = False
    has_declined_jobs: bool = False


@dataclass(frozen=True)
class DashboardVerification:
    is_on_correct_url: bool
    has_page_title: bool
    has_dashboard_content: bool
    has_stats: bool
    has_welcome_message: bool


class DashboardPage:
    LOCATORS = LOCATORS

    def __init__(self, actions: PageActions) -> None:
        self.actions = actions

    def navigate_to_dashboard(self) -> None:
        self.actions.navigate(Route.DASHBOARD.value)
        self.actions.wait_for_url(Route.DASHBOARD.value)

    def is_on_dashboard(self) -> bool:
        return self.actions.is_on(Route.DASHBOARD.value)

    def is_dashboard_content_visible(self) -> bool:
        return self.actions.is_visible(
            LOCATORS[DashboardLocator.DASHBOARD_CONTENT]
        ) or self.actions.is_visible(LOCATORS[DashboardLocator.PAGE_TITLE])

    def are_stats_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[DashboardLocator.STATS_CONTAINER])

    def get_page_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[DashboardLocator.PAGE_TITLE])

    def is_welcome_message_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[DashboardLocator.WELCOME_MESSAGE])

    def get_statistics(self) -> DashboardStatistics:
        if not self.are_stats_visible():
            return DashboardStatistics()
        return DashboardStatistics(
            has_stats=True,
            stat_card_count=self.actions.get_element_count(LOCATORS[DashboardLocator.STAT_CARDS]),
            has_pending_jobs=self.actions.is_visible(LOCATORS[DashboardLocator.PENDING_JOBS]),
            has_interview_jobs=self.actions.is_visible(LOCATORS[DashboardLocator.INTERVIEW_JOBS]),
            has_declined_jobs=self.actions.is_visible(LOCATORS[DashboardLocator.DECLINED_JOBS]),
        )

    def wait_for_dashboard_load(self) -> None:
        """Wait for the route, then for dashboard content or at least a heading."""
        self.actions.wait_for_url(Route.DASHBOARD.value)
        self.actions.wait_until(
            self.is_dashboard_content_visible,
            timeout=ELEMENT_TIMEOUT_MS,
            description="dashboard content or page title",
        )

    def verify_dashboard_loaded(self) -> DashboardVerification:
        return DashboardVerification(
            is_on_correct_url=self.is_on_dashboard(),
            has_page_title=self.actions.is_visible(LOCATORS[DashboardLocator.PAGE_TITLE]),
            has_dashboard_content=self.is_dashboard_content_visible(),
            has_stats=self.are_stats_visible(),
            has_welcome_message=self.is_welcome_message_visible(),
        )
