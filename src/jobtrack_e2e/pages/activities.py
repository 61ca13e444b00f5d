"""Activities list: filters, completion and deletion of activity cards."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

import structlog
from playwright.sync_api import Locator

from jobtrack_e2e.constants.routes import Route
from jobtrack_e2e.constants.timeouts import ELEMENT_TIMEOUT_MS, LOAD_PROBE_TIMEOUT_MS
from jobtrack_e2e.models import ActivityFilters
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap

log = structlog.get_logger(__name__)

EMPTY_STATE_TITLE = "No activities found"


class ActivitiesLocator(Enum):
    PAGE_TITLE = auto()
    ACTIVITIES_CONTAINER = auto()
    ACTIVITY_CARDS = auto()
    ACTIVITY_TYPE_FILTER = auto()
    ACTIVITY_STATUS_FILTER = auto()
    CLEAR_FILTERS_BUTTON = auto()
    ACTIVITY_TITLE = auto()
    ACTIVITY_TYPE = auto()
    STATUS_BADGE = auto()
    PRIORITY_BADGE = auto()
    CREATED_DATE = auto()
    SCHEDULED_DATE = auto()
    COMPLETED_DATE = auto()
    JOB_REFERENCE = auto()
    ACTIVITY_ACTIONS = auto()
    MARK_COMPLETE_BUTTON = auto()
    DELETE_BUTTON = auto()
    PENDING_ACTIVITY = auto()
    COMPLETED_ACTIVITY = auto()
    HIGH_PRIORITY_CARD = auto()
    MEDIUM_PRIORITY_CARD = auto()
    LOW_PRIORITY_CARD = auto()
    HIGH_PRIORITY_BADGE = auto()
    MEDIUM_PRIORITY_BADGE = auto()
    LOW_PRIORITY_BADGE = auto()
    NO_ACTIVITIES = auto()
    NO_ACTIVITIES_TITLE = auto()
    ACTIVITIES_COUNT = auto()
    ALERT_MESSAGE = auto()


LOCATORS = LocatorMap(
    ActivitiesLocator,
    {
        ActivitiesLocator.PAGE_TITLE: "h3",
        ActivitiesLocator.ACTIVITIES_CONTAINER: ".activities-container",
        ActivitiesLocator.ACTIVITY_CARDS: ".activity-card",
        ActivitiesLocator.ACTIVITY_TYPE_FILTER: 'select[name="activityType"]',
        ActivitiesLocator.ACTIVITY_STATUS_FILTER: 'select[name="activityStatus"]',
        ActivitiesLocator.CLEAR_FILTERS_BUTTON: 'button:has-text("Clear Filters")',
        ActivitiesLocator.ACTIVITY_TITLE: ".activity-title",
        ActivitiesLocator.ACTIVITY_TYPE: ".activity-type",
        ActivitiesLocator.STATUS_BADGE: ".status-badge",
        ActivitiesLocator.PRIORITY_BADGE: ".priority-badge",
        ActivitiesLocator.CREATED_DATE: ".created-date",
        ActivitiesLocator.SCHEDULED_DATE: ".scheduled-date",
        ActivitiesLocator.COMPLETED_DATE: ".completed-date",
        ActivitiesLocator.JOB_REFERENCE: ".job-reference",
        ActivitiesLocator.ACTIVITY_ACTIONS: ".activity-actions",
        ActivitiesLocator.MARK_COMPLETE_BUTTON: 'button:has-text("Mark Complete")',
        ActivitiesLocator.DELETE_BUTTON: 'button:has-text("Delete")',
        ActivitiesLocator.PENDING_ACTIVITY: ".activity-card.pending",
        ActivitiesLocator.COMPLETED_ACTIVITY: ".activity-card.completed",
        ActivitiesLocator.HIGH_PRIORITY_CARD: ".activity-card.priority-high",
        ActivitiesLocator.MEDIUM_PRIORITY_CARD: ".activity-card.priority-medium",
        ActivitiesLocator.LOW_PRIORITY_CARD: ".activity-card.priority-low",
        ActivitiesLocator.HIGH_PRIORITY_BADGE: ".priority-badge.priority-high",
        ActivitiesLocator.MEDIUM_PRIORITY_BADGE: ".priority-badge.priority-medium",
        ActivitiesLocator.LOW_PRIORITY_BADGE: ".priority-badge.priority-low",
        ActivitiesLocator.NO_ACTIVITIES: ".no-activities",
        ActivitiesLocator.NO_ACTIVITIES_TITLE: ".no-activities h4",
        ActivitiesLocator.ACTIVITIES_COUNT: ".activities-count",
        ActivitiesLocator.ALERT_MESSAGE: ('[class*="alert"]', ".success"),
    },
)


@dataclass(frozen=True)
class ActivitiesState:
    has_activities: bool
    has_empty_state: bool
    activity_count: int


@dataclass(frozen=True)
class ActivityCardDetails:
    has_title: bool
    has_type: bool
    has_status_badge: bool
    has_priority_badge: bool
    has_created_date: bool
    has_actions: bool
    has_delete_button: bool


@dataclass(frozen=True)
class PriorityIndicators:
    high_priority_count: int
    medium_priority_count: int
    low_priority_count: int


@dataclass(frozen=True)
class ActivityDates:
    has_created_date: bool = False
    has_scheduled_date: bool = False
    has_completed_date: bool = False


@dataclass(frozen=True)
class ActivitiesVerification:
    is_on_correct_url: bool
    has_page_title: bool
    has_filters: bool
    activities_state: ActivitiesState


class ActivitiesPage:
    LOCATORS = LOCATORS

    def __init__(self, actions: PageActions) -> None:
        self.actions = actions

    def navigate_to_activities(self) -> None:
        self.actions.navigate(Route.ACTIVITIES.value)
        self.actions.wait_for_url(Route.ACTIVITIES.value)

    def is_on_activities_page(self) -> bool:
        return self.actions.path_contains(Route.ACTIVITIES.value)

    def get_page_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[ActivitiesLocator.PAGE_TITLE])

    def is_activities_container_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[ActivitiesLocator.ACTIVITIES_CONTAINER])

    def get_activity_cards_count(self) -> int:
        return self.actions.get_element_count(LOCATORS[ActivitiesLocator.ACTIVITY_CARDS])

    # Filters

    def are_filters_visible(self) -> bool:
        return self.actions.is_visible(
            LOCATORS[ActivitiesLocator.ACTIVITY_TYPE_FILTER]
        ) and self.actions.is_visible(LOCATORS[ActivitiesLocator.ACTIVITY_STATUS_FILTER])

    def _refresh_cards(self, change: Callable[[], None]) -> None:
        cards = LOCATORS[ActivitiesLocator.ACTIVITY_CARDS]
        before = self.actions.snapshot(cards)
        change()
        self.actions.wait_for_rerender(cards, before)

    def _select_filter(self, control: ActivitiesLocator, value: str) -> None:
        log.debug("filter_activities", control=control.name, value=value)
        self._refresh_cards(lambda: self.actions.select_option(LOCATORS[control], value))

    def filter_by_type(self, activity_type: str) -> None:
        self._select_filter(ActivitiesLocator.ACTIVITY_TYPE_FILTER, activity_type)

    def filter_by_status(self, status: str) -> None:
        self._select_filter(ActivitiesLocator.ACTIVITY_STATUS_FILTER, status)

    def apply_filters(self, filters: ActivityFilters) -> None:
        """Apply the type then the status filter, skipping empty values."""
        if filters.type:
            self.filter_by_type(filters.type)
        if filters.status:
            self.filter_by_status(filters.status)

    def clear_filters(self) -> None:
        self._refresh_cards(
            lambda: self.actions.click_element(LOCATORS[ActivitiesLocator.CLEAR_FILTERS_BUTTON])
        )

    def get_current_filters(self) -> ActivityFilters:
        return ActivityFilters(
            type=self.actions.get_input_value(LOCATORS[ActivitiesLocator.ACTIVITY_TYPE_FILTER]),
            status=self.actions.get_input_value(LOCATORS[ActivitiesLocator.ACTIVITY_STATUS_FILTER]),
        )

    def apply_filters_for_empty_state(self) -> None:
        """Filter combination that the seeded data never matches."""
        self.apply_filters(ActivityFilters(type="offer-received", status="completed"))

    # Cards

    def get_activities_state(self) -> ActivitiesState:
        count = self.get_activity_cards_count()
        return ActivitiesState(
            has_activities=count > 0,
            has_empty_state=self.actions.is_visible(LOCATORS[ActivitiesLocator.NO_ACTIVITIES]),
            activity_count=count,
        )

    def _first_card(self) -> Locator:
        return self.actions.locate(LOCATORS[ActivitiesLocator.ACTIVITY_CARDS]).first

    def _shows(self, scope: Locator, control: ActivitiesLocator) -> bool:
        return self.actions.is_visible(LOCATORS[control], scope=scope)

    def mark_first_pending_activity_complete(self) -> bool:
        """Complete the first pending activity; False when none is pending."""
        pending = self.actions.locate(LOCATORS[ActivitiesLocator.PENDING_ACTIVITY])
        if not pending.first.is_visible():
            return False
        before = pending.count()
        self.actions.click_element(
            LOCATORS[ActivitiesLocator.MARK_COMPLETE_BUTTON], scope=pending.first
        )
        self.actions.settle(lambda: pending.count() < before)
        return True

    def delete_first_activity(self) -> str | None:
        """Delete the first card, accepting the confirm dialog.

        Returns the deleted activity's title, or None when there is no card.
        """
        first_card = self._first_card()
        if not first_card.is_visible():
            return None
        title = self.actions.get_text_content(
            LOCATORS[ActivitiesLocator.ACTIVITY_TITLE], scope=first_card
        )
        before = self.get_activity_cards_count()
        log.info("delete_activity", title=title)
        with self.actions.accepting_dialogs():
            self.actions.click_element(LOCATORS[ActivitiesLocator.DELETE_BUTTON], scope=first_card)
            self.actions.settle(lambda: self.get_activity_cards_count() < before)
        return title

    def get_first_activity_details(self) -> ActivityCardDetails | None:
        card = self._first_card()
        if not card.is_visible():
            return None
        return ActivityCardDetails(
            has_title=self._shows(card, ActivitiesLocator.ACTIVITY_TITLE),
            has_type=self._shows(card, ActivitiesLocator.ACTIVITY_TYPE),
            has_status_badge=self._shows(card, ActivitiesLocator.STATUS_BADGE),
            has_priority_badge=self._shows(card, ActivitiesLocator.PRIORITY_BADGE),
            has_created_date=self._shows(card, ActivitiesLocator.CREATED_DATE),
            has_actions=self._shows(card, ActivitiesLocator.ACTIVITY_ACTIONS),
            has_delete_button=self._shows(card, ActivitiesLocator.DELETE_BUTTON),
        )

    def check_priority_indicators(self) -> PriorityIndicators:
        count = self.actions.get_element_count
        return PriorityIndicators(
            high_priority_count=count(LOCATORS[ActivitiesLocator.HIGH_PRIORITY_CARD]),
            medium_priority_count=count(LOCATORS[ActivitiesLocator.MEDIUM_PRIORITY_CARD]),
            low_priority_count=count(LOCATORS[ActivitiesLocator.LOW_PRIORITY_CARD]),
        )

    def does_activity_type_appear_in_results(self, activity_type: str) -> bool:
        """Whether the first card mentions the type, e.g. "phone-screen" as "phone screen"."""
        text = self.actions.get_text_content(LOCATORS[ActivitiesLocator.ACTIVITY_CARDS])
        if text is None:
            return False
        return activity_type.lower().replace("-", " ", 1) in text.lower()

    def does_completed_status_appear_in_results(self) -> bool:
        return self.actions.get_element_count(LOCATORS[ActivitiesLocator.COMPLETED_ACTIVITY]) > 0

    def pending_activity_has_mark_complete_button(self) -> bool:
        pending = self.actions.locate(LOCATORS[ActivitiesLocator.PENDING_ACTIVITY]).first
        if not pending.is_visible():
            return False
        return self._shows(pending, ActivitiesLocator.MARK_COMPLETE_BUTTON)

    def does_activity_show_job_reference(self) -> bool:
        card = self._first_card()
        if not card.is_visible():
            return False
        return self._shows(card, ActivitiesLocator.JOB_REFERENCE)

    def check_activity_dates(self) -> ActivityDates:
        card = self._first_card()
        if not card.is_visible():
            return ActivityDates()
        return ActivityDates(
            has_created_date=self._shows(card, ActivitiesLocator.CREATED_DATE),
            has_scheduled_date=self._shows(card, ActivitiesLocator.SCHEDULED_DATE),
            has_completed_date=self._shows(card, ActivitiesLocator.COMPLETED_DATE),
        )

    # Messages

    def is_success_message_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[ActivitiesLocator.ALERT_MESSAGE])

    def get_success_message(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[ActivitiesLocator.ALERT_MESSAGE])

    def is_activities_count_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[ActivitiesLocator.ACTIVITIES_COUNT])

    def get_activities_count_text(self) -> str | None:
        if not self.is_activities_count_visible():
            return None
        return self.actions.get_text_content(LOCATORS[ActivitiesLocator.ACTIVITIES_COUNT])

    def is_empty_state_correct(self) -> bool:
        if not self.actions.is_visible(LOCATORS[ActivitiesLocator.NO_ACTIVITIES]):
            return False
        title = self.actions.get_text_content(LOCATORS[ActivitiesLocator.NO_ACTIVITIES_TITLE])
        return title is not None and EMPTY_STATE_TITLE in title

    # Loading

    def wait_for_activities_load(self) -> None:
        self.actions.wait_for_element(LOCATORS[ActivitiesLocator.PAGE_TITLE], ELEMENT_TIMEOUT_MS)
        self.actions.wait_until(
            lambda: self.is_activities_container_visible()
            or self.actions.is_visible(LOCATORS[ActivitiesLocator.ACTIVITY_TYPE_FILTER]),
            timeout=LOAD_PROBE_TIMEOUT_MS,
            description="activities container or filters",
        )

    def verify_activities_page_loaded(self) -> ActivitiesVerification:
        return ActivitiesVerification(
            is_on_correct_url=self.is_on_activities_page(),
            has_page_title=self.actions.is_visible(LOCATORS[ActivitiesLocator.PAGE_TITLE]),
            has_filters=self.are_filters_visible(),
            activities_state=self.get_activities_state(),
        )
