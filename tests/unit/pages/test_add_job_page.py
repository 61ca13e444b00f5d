"""Unit tests for AddJobPage form workflows."""

from __future__ import annotations

import pytest

from jobtrack_e2e.models import DEFAULT_TEST_JOB, JobDraft, JobUpdate
from jobtrack_e2e.pages import JobTrackPages
from jobtrack_e2e.pages.add_job import (
    BASIC_FIELDS,
    ENHANCED_FIELDS,
    LOCATORS,
    PHASE2_FIELDS,
    AddJobLocator,
)
from tests.support.factories import JobDraftFactory
from tests.support.fake_page import FakeElement, FakePage

pytestmark = pytest.mark.unit


def css(field: AddJobLocator) -> str:
    return LOCATORS[field].primary


def build_form(page: FakePage, initial: str = "") -> dict[str, FakeElement]:
    """Every form control, keyed by its form field name."""
    controls = {**BASIC_FIELDS, **ENHANCED_FIELDS, **PHASE2_FIELDS}
    fields = {name: page.add(css(control), value=initial) for name, control in controls.items()}
    page.add(css(AddJobLocator.SUBMIT_BUTTON), text="Submit")
    return fields


class TestFormRoundTrip:
    """What the fill workflow writes is what the reader returns."""

    def test_complete_form_reads_back_equal(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        build_form(fake_page)

        pages.add_job.fill_complete_job_form(DEFAULT_TEST_JOB)

        assert pages.add_job.get_form_values() == DEFAULT_TEST_JOB

    def test_generated_complete_drafts_read_back_equal(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        build_form(fake_page)
        job = JobDraftFactory.build(complete=True)

        pages.add_job.fill_complete_job_form(job)

        assert pages.add_job.get_form_values() == job

    def test_omitted_sections_are_left_untouched(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        fields = build_form(fake_page, initial="prior")

        pages.add_job.fill_complete_job_form(JobDraft(position="QA Engineer", company="Initech"))

        values = pages.add_job.get_form_values()
        assert (values.position, values.company) == ("QA Engineer", "Initech")
        assert values.job_location == "prior"
        untouched = {*ENHANCED_FIELDS, *PHASE2_FIELDS}
        assert all(fields[name].value == "prior" for name in untouched)

    def test_empty_strings_are_not_written(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        fields = build_form(fake_page, initial="prior")

        pages.add_job.fill_basic_job_info(JobDraft(position="", company="Initech"))

        assert fields["position"].value == "prior"
        assert fields["company"].value == "Initech"

    def test_controls_missing_from_page_read_as_none(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        fake_page.add(css(AddJobLocator.POSITION_INPUT), value="")

        values = pages.add_job.get_form_values()

        assert values.position == ""
        assert values.company is None
        assert values.enhanced is not None and values.enhanced.salary_min is None


class TestJobWorkflows:
    """Create, test-job defaults and edit."""

    def test_create_test_job_merges_overrides(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        fields = build_form(fake_page)

        job = pages.add_job.create_test_job(company="SearchTest Corp", jobLocation="New York, NY")

        assert job.company == "SearchTest Corp"
        assert job.job_location == "New York, NY"
        assert job.position == DEFAULT_TEST_JOB.position
        assert job.enhanced == DEFAULT_TEST_JOB.enhanced
        assert fields["company"].value == "SearchTest Corp"
        assert fake_page.first(css(AddJobLocator.SUBMIT_BUTTON)).clicks == 1

    def test_form_pre_filled_and_cleared(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        fields = build_form(fake_page)
        assert pages.add_job.is_form_cleared()

        fields["position"].value = "Data Analyst"
        fields["company"].value = "Acme"

        assert not pages.add_job.is_form_cleared()
        assert pages.add_job.is_form_pre_filled(JobDraft(position="Data Analyst", company="Acme"))
        assert not pages.add_job.is_form_pre_filled(JobDraft(position="Data Analyst", company="X"))

    def test_update_job_rewrites_supplied_fields(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        fields = build_form(fake_page)
        fields["position"].value = "Data Analyst"
        fields["status"].value = "pending"

        pages.add_job.update_job(JobUpdate(position="Senior Data Analyst", priority="high"))

        assert fields["position"].value == "Senior Data Analyst"
        assert fields["status"].value == "pending"
        assert fields["priority"].value == "high"
        assert fake_page.first(css(AddJobLocator.SUBMIT_BUTTON)).clicks == 1


class TestAddJobPageLoad:
    """Route, visibility and alerts."""

    def test_is_on_add_job_page_only_after_navigation(self, pages: JobTrackPages) -> None:
        assert pages.add_job.is_on_add_job_page() is False

        pages.add_job.navigate_to_add_job()

        assert pages.add_job.is_on_add_job_page() is True

    def test_field_visibility_and_load(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        fields = build_form(fake_page)
        fields["tags"].visible = False
        pages.add_job.navigate_to_add_job()

        pages.add_job.wait_for_form_load()
        visibility = pages.add_job.check_form_fields_visibility()

        assert visibility.basic_fields.position and visibility.basic_fields.status
        assert visibility.enhanced_fields.salary_min and visibility.enhanced_fields.posting_url
        assert visibility.phase2_fields.category and not visibility.phase2_fields.tags
        assert pages.add_job.verify_add_job_page_loaded().has_submit_button

    def test_success_alert(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        assert pages.add_job.get_alert_message() is None

        fake_page.add(css(AddJobLocator.ALERT_MESSAGE), text="Success! Job Created!")

        assert pages.add_job.is_success_message_visible()
        assert pages.add_job.get_alert_message() == "Success! Job Created!"

    def test_validation_alert_after_empty_submit(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        build_form(fake_page)
        submit = fake_page.first(css(AddJobLocator.SUBMIT_BUTTON))
        submit.on_click = lambda: fake_page.add(
            css(AddJobLocator.ALERT_MESSAGE), text="Please provide all values!"
        )
        assert pages.add_job.is_alert_visible() is False

        pages.add_job.submit_empty_form()

        assert pages.add_job.is_alert_visible()
        assert pages.add_job.get_alert_message() == "Please provide all values!"
