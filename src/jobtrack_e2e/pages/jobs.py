"""All-jobs listing: search, filters, sorting and per-card actions.

Filter changes re-render the card list asynchronously with no event to
wait on. Every filter action snapshots the cards first, then settles until
the list differs from the snapshot and its count stops changing.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum, auto

import structlog
from playwright.sync_api import Locator

from jobtrack_e2e.constants.routes import Route
from jobtrack_e2e.constants.timeouts import LOAD_PROBE_TIMEOUT_MS
from jobtrack_e2e.models import FilterState, JobFilters
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap

log = structlog.get_logger(__name__)


class JobsLocator(Enum):
    PAGE_TITLE = auto()
    SEARCH_INPUT = auto()
    STATUS_FILTER = auto()
    TYPE_FILTER = auto()
    CATEGORY_FILTER = auto()
    PRIORITY_FILTER = auto()
    SORT_SELECT = auto()
    CLEAR_FILTERS_BUTTON = auto()
    JOB_CARDS = auto()
    JOB_SALARY = auto()
    JOB_PRIORITY = auto()
    JOB_POSTING_LINK = auto()
    EDIT_BUTTON = auto()
    DELETE_BUTTON = auto()


class JobCardField(Enum):
    """Details rendered inside one job card."""

    POSITION = "position"
    COMPANY = "company"
    LOCATION = "location"
    STATUS = "status"
    TYPE = "type"
    SALARY = "salary"
    PRIORITY = "priority"
    POSTING_URL = "postingUrl"


LOCATORS = LocatorMap(
    JobsLocator,
    {
        JobsLocator.PAGE_TITLE: ("h2", "h3"),
        JobsLocator.SEARCH_INPUT: 'input[name="search"]',
        JobsLocator.STATUS_FILTER: 'select[name="searchStatus"]',
        JobsLocator.TYPE_FILTER: 'select[name="searchType"]',
        JobsLocator.CATEGORY_FILTER: 'select[name="searchCategory"]',
        JobsLocator.PRIORITY_FILTER: 'select[name="searchPriority"]',
        JobsLocator.SORT_SELECT: 'select[name="sort"]',
        JobsLocator.CLEAR_FILTERS_BUTTON: (
            'button:has-text("Clear Filters")',
            'button:has-text("Clear")',
        ),
        JobsLocator.JOB_CARDS: (".job-card", "article", '[class*="job"]'),
        JobsLocator.JOB_SALARY: '[class*="salary"]',
        JobsLocator.JOB_PRIORITY: (
            '[class*="priority"]',
            ".priority-high",
            ".priority-medium",
            ".priority-low",
        ),
        JobsLocator.JOB_POSTING_LINK: 'a[href*="http"]',
        JobsLocator.EDIT_BUTTON: ('button:has-text("Edit")', 'a:has-text("Edit")'),
        JobsLocator.DELETE_BUTTON: 'button:has-text("Delete")',
    },
)

CARD_LOCATORS = LocatorMap(
    JobCardField,
    {
        JobCardField.POSITION: ('[class*="position"]', ".job-title"),
        JobCardField.COMPANY: ('[class*="company"]', ".company-name"),
        JobCardField.LOCATION: ('[class*="location"]', ".job-location"),
        JobCardField.STATUS: ('[class*="status"]', ".job-status"),
        JobCardField.TYPE: ('[class*="type"]', ".job-type"),
        JobCardField.SALARY: ('[class*="salary"]', ".salary-range"),
        JobCardField.PRIORITY: ('[class*="priority"]', ".priority-badge"),
        JobCardField.POSTING_URL: ('a[href*="http"]', ".posting-link"),
    },
)

# JobFilters field -> listing control
_FILTER_CONTROLS = {
    "search": JobsLocator.SEARCH_INPUT,
    "status": JobsLocator.STATUS_FILTER,
    "type": JobsLocator.TYPE_FILTER,
    "category": JobsLocator.CATEGORY_FILTER,
    "priority": JobsLocator.PRIORITY_FILTER,
    "sort": JobsLocator.SORT_SELECT,
}


@dataclass(frozen=True)
class JobCardDetails:
    """Text of each detail; None when the card does not show it."""

    position: str | None
    company: str | None
    location: str | None
    status: str | None
    salary: str | None
    priority: str | None


@dataclass(frozen=True)
class EnhancedFieldsVisibility:
    has_salary: bool
    has_priority: bool
    has_posting_link: bool


@dataclass(frozen=True)
class JobsPageVerification:
    is_on_correct_url: bool
    has_page_title: bool
    has_search_filters: bool
    job_count: int


class JobsPage:
    LOCATORS = LOCATORS
    CARD_LOCATORS = CARD_LOCATORS

    def __init__(self, actions: PageActions) -> None:
        self.actions = actions

    def navigate_to_jobs(self) -> None:
        self.actions.navigate(Route.ALL_JOBS.value)
        self.actions.wait_for_url(Route.ALL_JOBS.value)

    def is_on_jobs_page(self) -> bool:
        return self.actions.path_contains(Route.ALL_JOBS.value)

    def get_page_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[JobsLocator.PAGE_TITLE])

    # Search / filter / sort

    def _refresh_listing(self, change: Callable[[], None]) -> None:
        cards = LOCATORS[JobsLocator.JOB_CARDS]
        before = self.actions.snapshot(cards)
        change()
        self.actions.wait_for_rerender(cards, before)

    def _select_filter(self, control: JobsLocator, value: str) -> None:
        log.debug("filter_jobs", control=control.name, value=value)
        self._refresh_listing(lambda: self.actions.select_option(LOCATORS[control], value))

    def search_jobs(self, search_term: str) -> None:
        self._refresh_listing(
            lambda: self.actions.fill_input(LOCATORS[JobsLocator.SEARCH_INPUT], search_term)
        )

    def filter_by_status(self, status: str) -> None:
        self._select_filter(JobsLocator.STATUS_FILTER, status)

    def filter_by_type(self, job_type: str) -> None:
        self._select_filter(JobsLocator.TYPE_FILTER, job_type)

    def filter_by_category(self, category: str) -> None:
        self._select_filter(JobsLocator.CATEGORY_FILTER, category)

    def filter_by_priority(self, priority: str) -> None:
        self._select_filter(JobsLocator.PRIORITY_FILTER, priority)

    def sort_jobs(self, sort_option: str) -> None:
        """Sort the listing (latest, oldest, a-z, z-a)."""
        self._select_filter(JobsLocator.SORT_SELECT, sort_option)

    def clear_filters(self) -> None:
        self._refresh_listing(
            lambda: self.actions.click_element(LOCATORS[JobsLocator.CLEAR_FILTERS_BUTTON])
        )

    def apply_filters(self, filters: JobFilters) -> None:
        """Apply every filter with a value, in listing-control order.

        Empty values are skipped so they never reset an active control.
        """
        supplied = {name: value for name, value in filters.supplied().items() if value}
        if "search" in supplied:
            self.search_jobs(supplied["search"])
        for name, control in _FILTER_CONTROLS.items():
            if name != "search" and name in supplied:
                self._select_filter(control, supplied[name])

    def get_current_filters(self) -> FilterState:
        values = {
            name: self.actions.get_input_value(LOCATORS[control])
            for name, control in _FILTER_CONTROLS.items()
        }
        return FilterState(**values)

    def are_search_filters_visible(self) -> bool:
        return self.actions.is_visible(
            LOCATORS[JobsLocator.SEARCH_INPUT]
        ) and self.actions.is_visible(LOCATORS[JobsLocator.STATUS_FILTER])

    # Cards

    def get_job_cards_count(self) -> int:
        return self.actions.get_element_count(LOCATORS[JobsLocator.JOB_CARDS])

    def get_job_card_by_company(self, company_name: str) -> Locator:
        return self.actions.matching(LOCATORS[JobsLocator.JOB_CARDS], company_name)

    def get_job_card_detail(self, job_card: Locator, detail: JobCardField) -> str | None:
        selector = CARD_LOCATORS[detail]
        if not self.actions.is_visible(selector, scope=job_card):
            return None
        return self.actions.get_text_content(selector, scope=job_card)

    def get_first_job_details(self) -> JobCardDetails | None:
        first_card = self.actions.locate(LOCATORS[JobsLocator.JOB_CARDS]).first
        if not first_card.is_visible():
            return None
        return JobCardDetails(
            position=self.get_job_card_detail(first_card, JobCardField.POSITION),
            company=self.get_job_card_detail(first_card, JobCardField.COMPANY),
            location=self.get_job_card_detail(first_card, JobCardField.LOCATION),
            status=self.get_job_card_detail(first_card, JobCardField.STATUS),
            salary=self.get_job_card_detail(first_card, JobCardField.SALARY),
            priority=self.get_job_card_detail(first_card, JobCardField.PRIORITY),
        )

    def job_card_contains_text(self, text: str) -> bool:
        return self.actions.any_visible(
            self.actions.matching(LOCATORS[JobsLocator.JOB_CARDS], text)
        )

    def job_contains_info(self, company_name: str, expected: Mapping[str, str | None]) -> bool:
        """True when the company's card shows every non-empty expected value."""
        card = self.get_job_card_by_company(company_name)
        if not self.actions.any_visible(card):
            return False
        return all(
            self.actions.any_visible(card.filter(has_text=value))
            for value in expected.values()
            if value
        )

    def check_enhanced_fields(self, company_name: str) -> EnhancedFieldsVisibility:
        card = self.get_job_card_by_company(company_name).first
        return EnhancedFieldsVisibility(
            has_salary=self.actions.is_visible(LOCATORS[JobsLocator.JOB_SALARY], scope=card),
            has_priority=self.actions.is_visible(LOCATORS[JobsLocator.JOB_PRIORITY], scope=card),
            has_posting_link=self.actions.is_visible(
                LOCATORS[JobsLocator.JOB_POSTING_LINK], scope=card
            ),
        )

    def edit_job_by_company(self, company_name: str) -> None:
        card = self.get_job_card_by_company(company_name).first
        self.actions.click_element(LOCATORS[JobsLocator.EDIT_BUTTON], scope=card)
        self.actions.wait_for_url(Route.ADD_JOB.value)

    def delete_job_by_company(self, company_name: str) -> bool:
        """Delete the first card for the company, accepting the confirm dialog.

        Returns True once one fewer card for the company is shown.
        """
        cards = self.get_job_card_by_company(company_name)
        before = cards.count()
        log.info("delete_job", company=company_name, cards=before)
        with self.actions.accepting_dialogs():
            self.actions.click_element(LOCATORS[JobsLocator.DELETE_BUTTON], scope=cards.first)
            return self.actions.settle(lambda: cards.count() < before)

    # Loading

    def wait_for_jobs_load(self) -> None:
        """Wait for job cards, or at least the heading when the list is empty."""
        self.actions.wait_until(
            lambda: self.actions.is_visible(LOCATORS[JobsLocator.JOB_CARDS])
            or self.actions.is_visible(LOCATORS[JobsLocator.PAGE_TITLE]),
            timeout=LOAD_PROBE_TIMEOUT_MS,
            description="job cards or page title",
        )

    def verify_jobs_page_loaded(self) -> JobsPageVerification:
        return JobsPageVerification(
            is_on_correct_url=self.is_on_jobs_page(),
            has_page_title=self.actions.is_visible(LOCATORS[JobsLocator.PAGE_TITLE]),
            has_search_filters=self.are_search_filters_visible(),
            job_count=self.get_job_cards_count(),
        )
