"""Add/edit job form.

The form has three sections: basic fields, enhanced fields (salary,
links, description) and categorisation fields (category, tags,
priority). Workflows only write the fields a ``JobDraft`` supplies, so
one method covers both minimal and exhaustive submissions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import structlog

from jobtrack_e2e.constants.routes import Route
from jobtrack_e2e.constants.timeouts import ELEMENT_TIMEOUT_MS
from jobtrack_e2e.models import (
    DEFAULT_TEST_JOB,
    EnhancedJobFields,
    JobDraft,
    JobUpdate,
    Phase2JobFields,
)
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap

log = structlog.get_logger(__name__)


class AddJobLocator(Enum):
    PAGE_TITLE = auto()
    POSITION_INPUT = auto()
    COMPANY_INPUT = auto()
    JOB_LOCATION_INPUT = auto()
    JOB_TYPE_SELECT = auto()
    STATUS_SELECT = auto()
    SALARY_MIN_INPUT = auto()
    SALARY_MAX_INPUT = auto()
    SALARY_CURRENCY_SELECT = auto()
    JOB_DESCRIPTION_TEXTAREA = auto()
    COMPANY_WEBSITE_INPUT = auto()
    JOB_POSTING_URL_INPUT = auto()
    APPLICATION_METHOD_SELECT = auto()
    NOTES_TEXTAREA = auto()
    CATEGORY_SELECT = auto()
    TAGS_INPUT = auto()
    PRIORITY_SELECT = auto()
    SUBMIT_BUTTON = auto()
    ALERT_MESSAGE = auto()


LOCATORS = LocatorMap(
    AddJobLocator,
    {
        AddJobLocator.PAGE_TITLE: "h3",
        AddJobLocator.POSITION_INPUT: 'input[name="position"]',
        AddJobLocator.COMPANY_INPUT: 'input[name="company"]',
        AddJobLocator.JOB_LOCATION_INPUT: 'input[name="jobLocation"]',
        AddJobLocator.JOB_TYPE_SELECT: 'select[name="jobType"]',
        AddJobLocator.STATUS_SELECT: 'select[name="status"]',
        AddJobLocator.SALARY_MIN_INPUT: '.form-input[name="salaryMin"]',
        AddJobLocator.SALARY_MAX_INPUT: '.form-input[name="salaryMax"]',
        AddJobLocator.SALARY_CURRENCY_SELECT: 'select[name="salaryCurrency"]',
        AddJobLocator.JOB_DESCRIPTION_TEXTAREA: '.form-textarea[name="jobDescription"]',
        AddJobLocator.COMPANY_WEBSITE_INPUT: '.form-input[name="companyWebsite"]',
        AddJobLocator.JOB_POSTING_URL_INPUT: '.form-input[name="jobPostingUrl"]',
        AddJobLocator.APPLICATION_METHOD_SELECT: 'select[name="applicationMethod"]',
        AddJobLocator.NOTES_TEXTAREA: '.form-textarea[name="notes"]',
        AddJobLocator.CATEGORY_SELECT: 'select[name="category"]',
        AddJobLocator.TAGS_INPUT: '.form-input[name="tags"]',
        AddJobLocator.PRIORITY_SELECT: 'select[name="priority"]',
        AddJobLocator.SUBMIT_BUTTON: (".submit-btn", 'button[type="submit"]'),
        AddJobLocator.ALERT_MESSAGE: ('[class*="alert"]', ".success", ".error"),
    },
)

# Form field name -> control, one table per form section
BASIC_FIELDS = {
    "position": AddJobLocator.POSITION_INPUT,
    "company": AddJobLocator.COMPANY_INPUT,
    "jobLocation": AddJobLocator.JOB_LOCATION_INPUT,
    "jobType": AddJobLocator.JOB_TYPE_SELECT,
    "status": AddJobLocator.STATUS_SELECT,
}
ENHANCED_FIELDS = {
    "salaryMin": AddJobLocator.SALARY_MIN_INPUT,
    "salaryMax": AddJobLocator.SALARY_MAX_INPUT,
    "salaryCurrency": AddJobLocator.SALARY_CURRENCY_SELECT,
    "jobDescription": AddJobLocator.JOB_DESCRIPTION_TEXTAREA,
    "companyWebsite": AddJobLocator.COMPANY_WEBSITE_INPUT,
    "jobPostingUrl": AddJobLocator.JOB_POSTING_URL_INPUT,
    "applicationMethod": AddJobLocator.APPLICATION_METHOD_SELECT,
    "notes": AddJobLocator.NOTES_TEXTAREA,
}
PHASE2_FIELDS = {
    "category": AddJobLocator.CATEGORY_SELECT,
    "tags": AddJobLocator.TAGS_INPUT,
    "priority": AddJobLocator.PRIORITY_SELECT,
}

_SELECTS = frozenset(
    {
        AddJobLocator.JOB_TYPE_SELECT,
        AddJobLocator.STATUS_SELECT,
        AddJobLocator.SALARY_CURRENCY_SELECT,
        AddJobLocator.APPLICATION_METHOD_SELECT,
        AddJobLocator.CATEGORY_SELECT,
        AddJobLocator.PRIORITY_SELECT,
    }
)


@dataclass(frozen=True)
class BasicFieldsVisibility:
    position: bool
    company: bool
    location: bool
    type: bool
    status: bool


@dataclass(frozen=True)
class EnhancedSectionVisibility:
    salary_min: bool
    salary_max: bool
    description: bool
    website: bool
    posting_url: bool


@dataclass(frozen=True)
class Phase2SectionVisibility:
    category: bool
    tags: bool
    priority: bool


@dataclass(frozen=True)
class FormFieldsVisibility:
    basic_fields: BasicFieldsVisibility
    enhanced_fields: EnhancedSectionVisibility
    phase2_fields: Phase2SectionVisibility


@dataclass(frozen=True)
class AddJobVerification:
    is_on_correct_url: bool
    has_page_title: bool
    has_position_field: bool
    has_submit_button: bool


class AddJobPage:
    LOCATORS = LOCATORS

    def __init__(self, actions: PageActions) -> None:
        self.actions = actions

    def navigate_to_add_job(self) -> None:
        self.actions.navigate(Route.ADD_JOB.value)
        self.actions.wait_for_url(Route.ADD_JOB.value)

    def is_on_add_job_page(self) -> bool:
        return self.actions.path_contains(Route.ADD_JOB.value)

    def get_page_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[AddJobLocator.PAGE_TITLE])

    # Writing

    def _write(self, control: AddJobLocator, value: str) -> None:
        if control in _SELECTS:
            self.actions.select_option(LOCATORS[control], value)
        else:
            self.actions.fill_input(LOCATORS[control], value)

    def _fill_section(self, controls: dict[str, AddJobLocator], values: dict[str, str]) -> None:
        for name, value in values.items():
            # Empty strings count as not supplied
            if value and name in controls:
                self._write(controls[name], value)

    def fill_basic_job_info(self, job: JobDraft) -> None:
        self._fill_section(BASIC_FIELDS, job.supplied())

    def fill_enhanced_job_info(self, enhanced: EnhancedJobFields) -> None:
        self._fill_section(ENHANCED_FIELDS, enhanced.supplied())

    def fill_phase2_job_info(self, phase2: Phase2JobFields) -> None:
        self._fill_section(PHASE2_FIELDS, phase2.supplied())

    def fill_complete_job_form(self, job: JobDraft) -> None:
        """Write every supplied field; omitted sections are left untouched."""
        self.fill_basic_job_info(job)
        if job.enhanced is not None:
            self.fill_enhanced_job_info(job.enhanced)
        if job.phase2 is not None:
            self.fill_phase2_job_info(job.phase2)

    def submit_form(self) -> None:
        self.actions.click_element(LOCATORS[AddJobLocator.SUBMIT_BUTTON])

    def submit_empty_form(self) -> None:
        """Submit without filling anything, for required-field validation."""
        self.submit_form()

    def create_job(self, job: JobDraft) -> None:
        log.info("create_job", position=job.position, company=job.company)
        self.fill_complete_job_form(job)
        self.submit_form()

    def create_test_job(self, **overrides: Any) -> JobDraft:
        """Create the default test job with ``overrides`` applied and return it.

        Overrides use either field or form names and replace nested
        sections wholesale, e.g. ``create_test_job(company="Acme")``.
        """
        job = DEFAULT_TEST_JOB.merged(JobDraft.model_validate(overrides))
        self.create_job(job)
        return job

    def update_job(self, updates: JobUpdate) -> None:
        """Rewrite the supplied fields of the job being edited and submit."""
        if updates.position:
            self.actions.clear_input(LOCATORS[AddJobLocator.POSITION_INPUT])
            self.actions.fill_input(LOCATORS[AddJobLocator.POSITION_INPUT], updates.position)
        if updates.status:
            self.actions.select_option(LOCATORS[AddJobLocator.STATUS_SELECT], updates.status)
        if updates.priority:
            self.actions.select_option(LOCATORS[AddJobLocator.PRIORITY_SELECT], updates.priority)
        self.submit_form()

    # Reading

    def _read_section(self, controls: dict[str, AddJobLocator]) -> dict[str, str | None]:
        return {
            name: self.actions.get_input_value(LOCATORS[control])
            for name, control in controls.items()
        }

    def get_form_values(self) -> JobDraft:
        """Current value of every form control as a draft.

        Empty controls read as ``""``; controls missing from the page read
        as ``None``.
        """
        return JobDraft.model_validate(
            {
                **self._read_section(BASIC_FIELDS),
                "enhanced": self._read_section(ENHANCED_FIELDS),
                "phase2": self._read_section(PHASE2_FIELDS),
            }
        )

    def is_form_cleared(self) -> bool:
        return self.actions.get_input_value(LOCATORS[AddJobLocator.POSITION_INPUT]) == ""

    def is_form_pre_filled(self, expected: JobDraft) -> bool:
        current = self.get_form_values()
        return current.position == expected.position and current.company == expected.company

    def is_alert_visible(self) -> bool:
        """Any alert, success or validation error."""
        return self.actions.is_visible(LOCATORS[AddJobLocator.ALERT_MESSAGE])

    def is_success_message_visible(self) -> bool:
        # Success and errors share the alert region
        return self.is_alert_visible()

    def get_alert_message(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[AddJobLocator.ALERT_MESSAGE])

    def _visible(self, control: AddJobLocator) -> bool:
        return self.actions.is_visible(LOCATORS[control])

    def check_form_fields_visibility(self) -> FormFieldsVisibility:
        return FormFieldsVisibility(
            basic_fields=BasicFieldsVisibility(
                position=self._visible(AddJobLocator.POSITION_INPUT),
                company=self._visible(AddJobLocator.COMPANY_INPUT),
                location=self._visible(AddJobLocator.JOB_LOCATION_INPUT),
                type=self._visible(AddJobLocator.JOB_TYPE_SELECT),
                status=self._visible(AddJobLocator.STATUS_SELECT),
            ),
            enhanced_fields=EnhancedSectionVisibility(
                salary_min=self._visible(AddJobLocator.SALARY_MIN_INPUT),
                salary_max=self._visible(AddJobLocator.SALARY_MAX_INPUT),
                description=self._visible(AddJobLocator.JOB_DESCRIPTION_TEXTAREA),
                website=self._visible(AddJobLocator.COMPANY_WEBSITE_INPUT),
                posting_url=self._visible(AddJobLocator.JOB_POSTING_URL_INPUT),
            ),
            phase2_fields=Phase2SectionVisibility(
                category=self._visible(AddJobLocator.CATEGORY_SELECT),
                tags=self._visible(AddJobLocator.TAGS_INPUT),
                priority=self._visible(AddJobLocator.PRIORITY_SELECT),
            ),
        )

    # Loading

    def wait_for_form_load(self) -> None:
        self.actions.wait_for_element(LOCATORS[AddJobLocator.POSITION_INPUT], ELEMENT_TIMEOUT_MS)
        self.actions.wait_for_element(LOCATORS[AddJobLocator.SUBMIT_BUTTON], ELEMENT_TIMEOUT_MS)

    def verify_add_job_page_loaded(self) -> AddJobVerification:
        return AddJobVerification(
            is_on_correct_url=self.is_on_add_job_page(),
            has_page_title=self._visible(AddJobLocator.PAGE_TITLE),
            has_position_field=self._visible(AddJobLocator.POSITION_INPUT),
            has_submit_button=self._visible(AddJobLocator.SUBMIT_BUTTON),
        )
