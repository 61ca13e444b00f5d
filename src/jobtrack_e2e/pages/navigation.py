"""Shared navigation chrome: sidebars, mobile toggle, user menu."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

import structlog
from playwright.sync_api import Error as PlaywrightError

from jobtrack_e2e.constants.routes import UNAUTHENTICATED_ROUTES, Route
from jobtrack_e2e.constants.timeouts import AUTH_REDIRECT_TIMEOUT_MS
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap

log = structlog.get_logger(__name__)


class Destination(Enum):
    """Screens reachable from the navigation links."""

    STATS = "stats"
    ALL_JOBS = "all-jobs"
    ADD_JOB = "add-job"
    ACTIVITIES = "activities"
    TIMELINE = "timeline"
    PROFILE = "profile"

    @property
    def route(self) -> Route:
        return _ROUTES[self]


_ROUTES = {
    Destination.STATS: Route.DASHBOARD,
    Destination.ALL_JOBS: Route.ALL_JOBS,
    Destination.ADD_JOB: Route.ADD_JOB,
    Destination.ACTIVITIES: Route.ACTIVITIES,
    Destination.TIMELINE: Route.TIMELINE,
    Destination.PROFILE: Route.PROFILE,
}


class NavigationLocator(Enum):
    STATS_LINK = auto()
    ALL_JOBS_LINK = auto()
    ADD_JOB_LINK = auto()
    ACTIVITIES_LINK = auto()
    TIMELINE_LINK = auto()
    PROFILE_LINK = auto()
    NAVIGATION = auto()
    SIDEBAR = auto()
    MOBILE_TOGGLE = auto()
    MOBILE_NAV = auto()
    USER_INFO = auto()
    USER_MENU = auto()
    LOGOUT_BUTTON = auto()
    LOGO = auto()
    ACTIVE_LINK = auto()


LOCATORS = LocatorMap(
    NavigationLocator,
    {
        NavigationLocator.STATS_LINK: ('a[href="/"]', 'a:has-text("Stats")'),
        NavigationLocator.ALL_JOBS_LINK: ('a[href="/all-jobs"]', 'a:has-text("All Jobs")'),
        NavigationLocator.ADD_JOB_LINK: ('a[href="/add-job"]', 'a:has-text("Add Job")'),
        NavigationLocator.ACTIVITIES_LINK: ('a[href="/activities"]', 'a:has-text("Activities")'),
        NavigationLocator.TIMELINE_LINK: ('a[href="/timeline"]', 'a:has-text("Timeline")'),
        NavigationLocator.PROFILE_LINK: ('a[href="/profile"]', 'a:has-text("Profile")'),
        NavigationLocator.NAVIGATION: ("nav", ".navigation", ".navbar", ".sidebar"),
        NavigationLocator.SIDEBAR: (".sidebar", ".nav-sidebar", ".side-nav"),
        NavigationLocator.MOBILE_TOGGLE: (
            '[data-testid="mobile-toggle"]',
            ".mobile-menu-toggle",
            ".hamburger-menu",
            'button[aria-label*="menu"]',
        ),
        NavigationLocator.MOBILE_NAV: (".mobile-nav", ".sidebar", ".nav-mobile"),
        NavigationLocator.USER_INFO: ('[data-testid="user-info"]', ".user-info", ".nav-user"),
        NavigationLocator.USER_MENU: ('[data-testid="user-menu"]', ".user-dropdown", ".nav-user"),
        NavigationLocator.LOGOUT_BUTTON: (
            'button:has-text("Logout")',
            'a:has-text("Logout")',
            '[data-testid="logout-button"]',
        ),
        NavigationLocator.LOGO: (
            '[data-testid="logo"]',
            ".logo",
            'img[alt*="logo"]',
            ".app-title",
            "h1",
        ),
        NavigationLocator.ACTIVE_LINK: (".nav-link.active", ".active"),
    },
)

_LINKS = {
    Destination.STATS: NavigationLocator.STATS_LINK,
    Destination.ALL_JOBS: NavigationLocator.ALL_JOBS_LINK,
    Destination.ADD_JOB: NavigationLocator.ADD_JOB_LINK,
    Destination.ACTIVITIES: NavigationLocator.ACTIVITIES_LINK,
    Destination.TIMELINE: NavigationLocator.TIMELINE_LINK,
    Destination.PROFILE: NavigationLocator.PROFILE_LINK,
}


@dataclass(frozen=True)
class BrowserNavigationResult:
    back_to_all_jobs: bool
    back_to_dashboard: bool
    forward_to_all_jobs: bool


@dataclass(frozen=True)
class NavigationConsistency:
    navigation_visible: bool
    stats_link_visible: bool
    all_jobs_link_visible: bool
    add_job_link_visible: bool


class NavigationComponent:
    """Navigation shared by every authenticated screen."""

    LOCATORS = LOCATORS

    def __init__(
        self,
        actions: PageActions,
        auth_routes: Sequence[str] = tuple(route.value for route in UNAUTHENTICATED_ROUTES),
    ) -> None:
        self.actions = actions
        self.auth_routes = tuple(auth_routes)

    # Link navigation

    def go_to(self, destination: Destination) -> None:
        self.actions.click_element(LOCATORS[_LINKS[destination]])
        self.actions.wait_for_url(destination.route.value)

    def go_to_stats(self) -> None:
        self.go_to(Destination.STATS)

    def go_to_all_jobs(self) -> None:
        self.go_to(Destination.ALL_JOBS)

    def go_to_add_job(self) -> None:
        self.go_to(Destination.ADD_JOB)

    def go_to_activities(self) -> None:
        self.go_to(Destination.ACTIVITIES)

    def go_to_timeline(self) -> None:
        self.go_to(Destination.TIMELINE)

    def go_to_profile(self) -> None:
        self.go_to(Destination.PROFILE)

    def navigate_via_mobile(self, destination: Destination) -> None:
        self.toggle_mobile_nav()
        self.go_to(destination)

    def navigate_via_sidebar(self, destination: Destination) -> None:
        sidebar = self.actions.locate(LOCATORS[NavigationLocator.SIDEBAR])
        self.actions.click_element(LOCATORS[_LINKS[destination]], scope=sidebar)
        self.actions.wait_for_url(destination.route.value)

    # Chrome visibility

    def are_main_nav_links_visible(self) -> bool:
        return all(self.actions.is_visible(LOCATORS[link]) for link in _LINKS.values())

    def is_navigation_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[NavigationLocator.NAVIGATION])

    def is_sidebar_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[NavigationLocator.SIDEBAR])

    def toggle_mobile_nav(self) -> bool:
        """Open the mobile menu if the toggle is shown; False when there is none."""
        toggle = LOCATORS[NavigationLocator.MOBILE_TOGGLE]
        if not self.actions.is_visible(toggle):
            return False
        self.actions.click_element(toggle)
        self.actions.settle(self.is_mobile_nav_visible)
        return True

    def is_mobile_nav_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[NavigationLocator.MOBILE_NAV])

    def is_logo_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[NavigationLocator.LOGO])

    def is_active_link_highlighted(self, expected_path: str) -> bool:
        active = LOCATORS[NavigationLocator.ACTIVE_LINK].with_suffix(f'[href="{expected_path}"]')
        return self.actions.is_visible(active)

    # User menu

    def is_user_info_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[NavigationLocator.USER_INFO])

    def get_user_info(self) -> str | None:
        if not self.is_user_info_visible():
            return None
        return self.actions.get_text_content(LOCATORS[NavigationLocator.USER_INFO])

    def logout(self) -> None:
        logout_button = LOCATORS[NavigationLocator.LOGOUT_BUTTON]
        if not self.actions.is_visible(logout_button):
            user_menu = LOCATORS[NavigationLocator.USER_MENU]
            if self.actions.is_visible(user_menu):
                self.actions.click_element(user_menu)
        self.actions.click_element(logout_button)
        self.actions.wait_for_url(self.auth_routes, timeout=AUTH_REDIRECT_TIMEOUT_MS)

    # Checks returning structured results

    def check_direct_navigation(self, paths: Iterable[str]) -> dict[str, bool]:
        """Load each path directly; a path passes when the location settles on it."""
        results: dict[str, bool] = {}
        for path in paths:
            try:
                self.actions.navigate(path)
                self.actions.wait_for_url(path)
            except PlaywrightError as e:
                log.warning("direct_navigation_failed", path=path, error=str(e))
                results[path] = False
            else:
                results[path] = True
        return results

    def check_browser_navigation(self) -> BrowserNavigationResult:
        """Walk dashboard -> all jobs -> add job, then back twice and forward once."""
        self.go_to_all_jobs()
        self.go_to_add_job()

        self.actions.go_back()
        back_to_all_jobs = self.actions.settle(
            lambda: self.actions.path_contains(Route.ALL_JOBS.value)
        )

        self.actions.go_back()
        back_to_dashboard = self.actions.settle(
            lambda: self.actions.is_on(Route.DASHBOARD.value)
        )

        self.actions.go_forward()
        forward_to_all_jobs = self.actions.settle(
            lambda: self.actions.path_contains(Route.ALL_JOBS.value)
        )

        return BrowserNavigationResult(
            back_to_all_jobs=back_to_all_jobs,
            back_to_dashboard=back_to_dashboard,
            forward_to_all_jobs=forward_to_all_jobs,
        )

    def check_navigation_consistency(
        self, paths: Iterable[str]
    ) -> dict[str, NavigationConsistency]:
        results: dict[str, NavigationConsistency] = {}
        for path in paths:
            self.actions.navigate(path)
            results[path] = NavigationConsistency(
                navigation_visible=self.is_navigation_visible(),
                stats_link_visible=self.actions.is_visible(LOCATORS[NavigationLocator.STATS_LINK]),
                all_jobs_link_visible=self.actions.is_visible(
                    LOCATORS[NavigationLocator.ALL_JOBS_LINK]
                ),
                add_job_link_visible=self.actions.is_visible(
                    LOCATORS[NavigationLocator.ADD_JOB_LINK]
                ),
            )
        return results
