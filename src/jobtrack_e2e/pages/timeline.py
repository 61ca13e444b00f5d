"""Timeline screen: view-mode toggle, preview list and statistics.

The screen has two modes. "All Activities" mode hides the job selector;
"By Job" mode shows it. The active mode's button carries ``btn-primary``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from jobtrack_e2e.constants.routes import Route
from jobtrack_e2e.constants.timeouts import ELEMENT_TIMEOUT_MS
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap

ACTIVE_BUTTON_CLASS = "btn-primary"
EMPTY_STATE_TITLE = "No activities found"
PREVIEW_ACTIVITY_TYPES = ("Application Sent", "Email Received", "Interview Scheduled")
MOBILE_VIEWPORT = (375, 667)

# Icons checked for an inline background colour
_ICON_SAMPLE = 3


class TimelineMode(Enum):
    ALL_ACTIVITIES = "all-activities"
    BY_JOB = "by-job"


class TimelineLocator(Enum):
    PAGE_TITLE = auto()
    ALL_ACTIVITIES_BUTTON = auto()
    BY_JOB_BUTTON = auto()
    JOB_SELECTOR = auto()
    JOB_SELECTOR_LABEL = auto()
    JOB_SELECTOR_PLACEHOLDER = auto()
    JOB_OPTIONS = auto()
    TIMELINE_PREVIEW = auto()
    TIMELINE_PREVIEW_TITLE = auto()
    PREVIEW_TIMELINE_ITEMS = auto()
    PREVIEW_ICON = auto()
    PREVIEW_CONTENT = auto()
    PREVIEW_CONTENT_TITLE = auto()
    PREVIEW_CONTENT_TEXT = auto()
    PREVIEW_TIMESTAMP = auto()
    TIME_PERIOD_INDICATORS = auto()
    TIMELINE_STATS = auto()
    STAT_CARDS = auto()
    TOTAL_ACTIVITIES_STAT = auto()
    PENDING_STAT = auto()
    COMPLETED_STAT = auto()
    TIMELINE_CONTROLS_PREVIEW = auto()
    PREVIEW_CONTROLS_TITLE = auto()
    COMING_SOON_TITLE = auto()
    FEATURE_DESCRIPTION = auto()
    VISUAL_TIMELINE_DESCRIPTION = auto()
    FILTER_DESCRIPTION = auto()
    INFO_MESSAGE = auto()
    FEATURE_BULLETS = auto()
    NO_TIMELINE_DATA = auto()
    NO_TIMELINE_DATA_TITLE = auto()


LOCATORS = LocatorMap(
    TimelineLocator,
    {
        TimelineLocator.PAGE_TITLE: "h3",
        TimelineLocator.ALL_ACTIVITIES_BUTTON: 'button:has-text("All Activities")',
        TimelineLocator.BY_JOB_BUTTON: 'button:has-text("By Job")',
        TimelineLocator.JOB_SELECTOR: "select#jobSelect",
        TimelineLocator.JOB_SELECTOR_LABEL: 'label[for="jobSelect"]',
        TimelineLocator.JOB_SELECTOR_PLACEHOLDER: 'select#jobSelect option[value=""]',
        TimelineLocator.JOB_OPTIONS: 'select#jobSelect option:not([value=""])',
        TimelineLocator.TIMELINE_PREVIEW: ".timeline-preview",
        TimelineLocator.TIMELINE_PREVIEW_TITLE: 'h5:has-text("Timeline Preview")',
        TimelineLocator.PREVIEW_TIMELINE_ITEMS: ".preview-timeline-item",
        TimelineLocator.PREVIEW_ICON: ".preview-icon",
        TimelineLocator.PREVIEW_CONTENT: ".preview-content",
        TimelineLocator.PREVIEW_CONTENT_TITLE: ".preview-content h6",
        TimelineLocator.PREVIEW_CONTENT_TEXT: ".preview-content p",
        TimelineLocator.PREVIEW_TIMESTAMP: "small",
        TimelineLocator.TIME_PERIOD_INDICATORS: (
            'small:has-text("days ago")',
            'small:has-text("day ago")',
            'small:has-text("Coming up")',
        ),
        TimelineLocator.TIMELINE_STATS: ".timeline-stats",
        TimelineLocator.STAT_CARDS: ".stat-card",
        TimelineLocator.TOTAL_ACTIVITIES_STAT: '.stat-card:has-text("Total Activities")',
        TimelineLocator.PENDING_STAT: '.stat-card:has-text("Pending")',
        TimelineLocator.COMPLETED_STAT: '.stat-card:has-text("Completed")',
        TimelineLocator.TIMELINE_CONTROLS_PREVIEW: ".timeline-controls-preview",
        TimelineLocator.PREVIEW_CONTROLS_TITLE: 'h5:has-text("Preview: Timeline Controls")',
        TimelineLocator.COMING_SOON_TITLE: 'h4:has-text("Timeline View Coming Soon")',
        TimelineLocator.FEATURE_DESCRIPTION: (
            "text=Chronological view of all your job application activities"
        ),
        TimelineLocator.VISUAL_TIMELINE_DESCRIPTION: (
            "text=Visual timeline with activity types and priorities"
        ),
        TimelineLocator.FILTER_DESCRIPTION: "text=Filter by specific jobs or view all activities",
        TimelineLocator.INFO_MESSAGE: ".info-message",
        TimelineLocator.FEATURE_BULLETS: ".info-message li",
        TimelineLocator.NO_TIMELINE_DATA: ".no-timeline-data",
        TimelineLocator.NO_TIMELINE_DATA_TITLE: ".no-timeline-data h4",
    },
)


@dataclass(frozen=True)
class PreviewItemsStructure:
    has_items: bool
    has_icon: bool = False
    has_content: bool = False
    has_title: bool = False
    has_text: bool = False


@dataclass(frozen=True)
class PreviewActivityTypes:
    has_application_sent: bool
    has_email_received: bool
    has_interview_scheduled: bool


@dataclass(frozen=True)
class TimelineStats:
    has_stats: bool
    has_stat_cards: bool = False
    has_total_activities: bool = False
    has_pending: bool = False
    has_completed: bool = False


@dataclass(frozen=True)
class FeatureDescriptions:
    has_chronological_view: bool
    has_visual_timeline: bool
    has_filter_description: bool


@dataclass(frozen=True)
class InfoMessage:
    has_info_message: bool
    bullet_count: int = 0
    has_preview_controls: bool = False


@dataclass(frozen=True)
class EmptyTimelineState:
    has_timeline_items: bool
    has_empty_state: bool
    is_empty_state_correct: bool


@dataclass(frozen=True)
class ResponsiveCheck:
    controls_visible: bool
    preview_visible: bool


@dataclass(frozen=True)
class DevelopmentStatus:
    has_info_message: bool
    has_preview_controls_title: bool
    has_controls_preview: bool
    bullet_count: int


@dataclass(frozen=True)
class ViewModeToggleResult:
    initial_all_activities_active: bool
    by_job_active: bool
    job_selector_visible_in_by_job_mode: bool
    all_activities_active_again: bool
    job_selector_hidden_in_all_activities_mode: bool


@dataclass(frozen=True)
class TimelineVerification:
    is_on_correct_url: bool
    has_page_title: bool
    has_timeline_controls: bool
    has_timeline_preview: bool
    has_coming_soon_message: bool


class TimelinePage:
    LOCATORS = LOCATORS

    def __init__(self, actions: PageActions) -> None:
        self.actions = actions

    def _visible(self, control: TimelineLocator) -> bool:
        return self.actions.is_visible(LOCATORS[control])

    def _count(self, control: TimelineLocator) -> int:
        return self.actions.get_element_count(LOCATORS[control])

    def navigate_to_timeline(self) -> None:
        self.actions.navigate(Route.TIMELINE.value)
        self.actions.wait_for_url(Route.TIMELINE.value)

    def is_on_timeline_page(self) -> bool:
        return self.actions.path_contains(Route.TIMELINE.value)

    def get_page_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[TimelineLocator.PAGE_TITLE])

    # View mode

    def are_timeline_controls_visible(self) -> bool:
        return self._visible(TimelineLocator.ALL_ACTIVITIES_BUTTON) and self._visible(
            TimelineLocator.BY_JOB_BUTTON
        )

    def current_mode(self) -> TimelineMode:
        if self.is_job_selector_visible():
            return TimelineMode.BY_JOB
        return TimelineMode.ALL_ACTIVITIES

    def switch_to_all_activities_mode(self) -> None:
        self.actions.click_element(LOCATORS[TimelineLocator.ALL_ACTIVITIES_BUTTON])
        self.actions.settle(lambda: not self.is_job_selector_visible())

    def switch_to_by_job_mode(self) -> None:
        self.actions.click_element(LOCATORS[TimelineLocator.BY_JOB_BUTTON])
        self.actions.settle(self.is_job_selector_visible)

    def is_all_activities_button_active(self) -> bool:
        return self.actions.has_class(
            LOCATORS[TimelineLocator.ALL_ACTIVITIES_BUTTON], ACTIVE_BUTTON_CLASS
        )

    def is_by_job_button_active(self) -> bool:
        return self.actions.has_class(LOCATORS[TimelineLocator.BY_JOB_BUTTON], ACTIVE_BUTTON_CLASS)

    def is_job_selector_visible(self) -> bool:
        return self._visible(TimelineLocator.JOB_SELECTOR)

    def get_job_selector_label(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[TimelineLocator.JOB_SELECTOR_LABEL])

    def has_job_selector_placeholder(self) -> bool:
        # Options are never "visible" on their own, so presence is the check
        return self._count(TimelineLocator.JOB_SELECTOR_PLACEHOLDER) > 0

    def get_job_selector_options_count(self) -> int:
        """Selectable jobs, excluding the empty placeholder option."""
        return self._count(TimelineLocator.JOB_OPTIONS)

    def select_job(self, job_value: str) -> None:
        self.actions.select_option(LOCATORS[TimelineLocator.JOB_SELECTOR], job_value)

    def check_view_mode_toggle(self) -> ViewModeToggleResult:
        """Switch to "By Job" and back, recording both buttons and the selector."""
        initial_all_activities_active = self.is_all_activities_button_active()

        self.switch_to_by_job_mode()
        by_job_active = self.is_by_job_button_active()
        job_selector_visible = self.is_job_selector_visible()

        self.switch_to_all_activities_mode()
        return ViewModeToggleResult(
            initial_all_activities_active=initial_all_activities_active,
            by_job_active=by_job_active,
            job_selector_visible_in_by_job_mode=job_selector_visible,
            all_activities_active_again=self.is_all_activities_button_active(),
            job_selector_hidden_in_all_activities_mode=not self.is_job_selector_visible(),
        )

    # Preview

    def is_timeline_preview_visible(self) -> bool:
        return self._visible(TimelineLocator.TIMELINE_PREVIEW)

    def get_preview_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[TimelineLocator.TIMELINE_PREVIEW_TITLE])

    def get_preview_items_count(self) -> int:
        return self._count(TimelineLocator.PREVIEW_TIMELINE_ITEMS)

    def verify_preview_items_structure(self) -> PreviewItemsStructure:
        item = self.actions.locate(LOCATORS[TimelineLocator.PREVIEW_TIMELINE_ITEMS]).first
        if not item.is_visible():
            return PreviewItemsStructure(has_items=False)

        def shows(control: TimelineLocator) -> bool:
            return self.actions.is_visible(LOCATORS[control], scope=item)

        return PreviewItemsStructure(
            has_items=True,
            has_icon=shows(TimelineLocator.PREVIEW_ICON),
            has_content=shows(TimelineLocator.PREVIEW_CONTENT),
            has_title=shows(TimelineLocator.PREVIEW_CONTENT_TITLE),
            has_text=shows(TimelineLocator.PREVIEW_CONTENT_TEXT),
        )

    def check_activity_types_in_preview(self) -> PreviewActivityTypes:
        application_sent, email_received, interview_scheduled = (
            self.actions.any_visible(
                self.actions.matching(LOCATORS[TimelineLocator.PREVIEW_TIMELINE_ITEMS], label)
            )
            for label in PREVIEW_ACTIVITY_TYPES
        )
        return PreviewActivityTypes(
            has_application_sent=application_sent,
            has_email_received=email_received,
            has_interview_scheduled=interview_scheduled,
        )

    def do_preview_icons_have_colors(self) -> bool:
        """True when the first few icons all carry an inline background colour."""
        icons = self.actions.locate(LOCATORS[TimelineLocator.PREVIEW_ICON])
        count = icons.count()
        if count == 0:
            return False
        for index in range(min(count, _ICON_SAMPLE)):
            style = icons.nth(index).get_attribute("style")
            if not style or "background-color" not in style:
                return False
        return True

    def are_timestamps_visible(self) -> bool:
        item = self.actions.locate(LOCATORS[TimelineLocator.PREVIEW_TIMELINE_ITEMS]).first
        if self.get_preview_items_count() == 0:
            return False
        return self.actions.is_visible(LOCATORS[TimelineLocator.PREVIEW_TIMESTAMP], scope=item)

    def are_time_period_indicators_visible(self) -> bool:
        return self._visible(TimelineLocator.TIME_PERIOD_INDICATORS)

    def check_empty_timeline_state(self) -> EmptyTimelineState:
        has_empty_state = self._visible(TimelineLocator.NO_TIMELINE_DATA)
        title = (
            self.actions.get_text_content(LOCATORS[TimelineLocator.NO_TIMELINE_DATA_TITLE])
            if has_empty_state
            else None
        )
        return EmptyTimelineState(
            has_timeline_items=self.get_preview_items_count() > 0,
            has_empty_state=has_empty_state,
            is_empty_state_correct=title is not None and EMPTY_STATE_TITLE in title,
        )

    # Statistics and development notice

    def are_timeline_stats_visible(self) -> bool:
        return self._visible(TimelineLocator.TIMELINE_STATS)

    def get_timeline_stats(self) -> TimelineStats:
        if not self.are_timeline_stats_visible():
            return TimelineStats(has_stats=False)
        return TimelineStats(
            has_stats=True,
            has_stat_cards=self._visible(TimelineLocator.STAT_CARDS),
            has_total_activities=self._visible(TimelineLocator.TOTAL_ACTIVITIES_STAT),
            has_pending=self._visible(TimelineLocator.PENDING_STAT),
            has_completed=self._visible(TimelineLocator.COMPLETED_STAT),
        )

    def is_coming_soon_message_visible(self) -> bool:
        return self._visible(TimelineLocator.COMING_SOON_TITLE)

    def check_feature_descriptions(self) -> FeatureDescriptions:
        return FeatureDescriptions(
            has_chronological_view=self._visible(TimelineLocator.FEATURE_DESCRIPTION),
            has_visual_timeline=self._visible(TimelineLocator.VISUAL_TIMELINE_DESCRIPTION),
            has_filter_description=self._visible(TimelineLocator.FILTER_DESCRIPTION),
        )

    def check_info_message(self) -> InfoMessage:
        if not self._visible(TimelineLocator.INFO_MESSAGE):
            return InfoMessage(has_info_message=False)
        return InfoMessage(
            has_info_message=True,
            bullet_count=self._count(TimelineLocator.FEATURE_BULLETS),
            has_preview_controls=self._visible(TimelineLocator.PREVIEW_CONTROLS_TITLE),
        )

    def check_development_status(self) -> DevelopmentStatus:
        return DevelopmentStatus(
            has_info_message=self._visible(TimelineLocator.INFO_MESSAGE),
            has_preview_controls_title=self._visible(TimelineLocator.PREVIEW_CONTROLS_TITLE),
            has_controls_preview=self._visible(TimelineLocator.TIMELINE_CONTROLS_PREVIEW),
            bullet_count=self._count(TimelineLocator.FEATURE_BULLETS),
        )

    def check_responsive_design(self) -> ResponsiveCheck:
        """Switch to a phone-sized viewport and check the main sections."""
        self.actions.set_viewport_size(*MOBILE_VIEWPORT)
        return ResponsiveCheck(
            controls_visible=self.are_timeline_controls_visible(),
            preview_visible=self.is_timeline_preview_visible(),
        )

    # Loading

    def wait_for_timeline_load(self) -> None:
        self.actions.wait_for_element(LOCATORS[TimelineLocator.PAGE_TITLE], ELEMENT_TIMEOUT_MS)
        self.actions.wait_for_element(
            LOCATORS[TimelineLocator.ALL_ACTIVITIES_BUTTON], ELEMENT_TIMEOUT_MS
        )

    def verify_timeline_page_loaded(self) -> TimelineVerification:
        return TimelineVerification(
            is_on_correct_url=self.is_on_timeline_page(),
            has_page_title=self._visible(TimelineLocator.PAGE_TITLE),
            has_timeline_controls=self.are_timeline_controls_visible(),
            has_timeline_preview=self.is_timeline_preview_visible(),
            has_coming_soon_message=self.is_coming_soon_message_visible(),
        )
