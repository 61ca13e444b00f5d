"""Unit tests for JobsPage: filters, card queries and card actions."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from jobtrack_e2e.models import FilterState, JobFilters
from jobtrack_e2e.pages import JobTrackPages
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.jobs import (
    CARD_LOCATORS,
    LOCATORS,
    EnhancedFieldsVisibility,
    JobCardDetails,
    JobCardField,
    JobsLocator,
    JobsPage,
)
from tests.support.fake_page import BASE_URL, FakeElement, FakePage

pytestmark = pytest.mark.unit

DEFAULT_FILTERS = {
    JobsLocator.SEARCH_INPUT: "",
    JobsLocator.STATUS_FILTER: "all",
    JobsLocator.TYPE_FILTER: "all",
    JobsLocator.CATEGORY_FILTER: "all",
    JobsLocator.PRIORITY_FILTER: "all",
    JobsLocator.SORT_SELECT: "latest",
}


def css(field: JobsLocator) -> str:
    return LOCATORS[field].primary


@dataclass
class Listing:
    controls: dict[JobsLocator, FakeElement]
    clear_button: FakeElement


def build_listing(page: FakePage) -> Listing:
    """Filter bar whose clear button restores every default."""
    controls = {
        control: page.add(css(control), value=default) for control, default in DEFAULT_FILTERS.items()
    }

    def reset() -> None:
        for control, default in DEFAULT_FILTERS.items():
            controls[control].value = default

    clear_button = page.add(css(JobsLocator.CLEAR_FILTERS_BUTTON), text="Clear Filters", on_click=reset)
    return Listing(controls, clear_button)


def add_card(page: FakePage, **details: str) -> FakeElement:
    card = page.add(css(JobsLocator.JOB_CARDS))
    for name, text in details.items():
        card.add(CARD_LOCATORS[JobCardField(name)].primary, text=text)
    return card


class TestFilters:
    """Search, filter and sort controls."""

    def test_apply_then_clear_restores_defaults(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        build_listing(fake_page)

        pages.jobs.apply_filters(JobFilters(search="Developer", status="interview", type="remote"))
        applied = pages.jobs.get_current_filters()
        pages.jobs.clear_filters()
        cleared = pages.jobs.get_current_filters()

        assert (applied.search, applied.status, applied.type) == ("Developer", "interview", "remote")
        assert (cleared.search, cleared.status, cleared.type) == ("", "all", "all")

    def test_apply_filters_only_touches_supplied_controls(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        build_listing(fake_page)

        pages.jobs.apply_filters(JobFilters(priority="high"))

        assert pages.jobs.get_current_filters() == FilterState(
            search="", status="all", type="all", category="all", priority="high", sort="latest"
        )

    def test_single_filter_actions(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        listing = build_listing(fake_page)

        pages.jobs.search_jobs("Frontend")
        pages.jobs.filter_by_status("declined")
        pages.jobs.filter_by_type("part-time")
        pages.jobs.filter_by_category("design")
        pages.jobs.sort_jobs("a-z")

        values = {control: element.value for control, element in listing.controls.items()}
        assert values == {
            JobsLocator.SEARCH_INPUT: "Frontend",
            JobsLocator.STATUS_FILTER: "declined",
            JobsLocator.TYPE_FILTER: "part-time",
            JobsLocator.CATEGORY_FILTER: "design",
            JobsLocator.PRIORITY_FILTER: "all",
            JobsLocator.SORT_SELECT: "a-z",
        }

    def test_empty_values_leave_active_controls_alone(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        listing = build_listing(fake_page)
        pages.jobs.apply_filters(JobFilters(search="Developer", status="interview"))

        pages.jobs.apply_filters(JobFilters(search="", status="", priority="high"))

        assert listing.controls[JobsLocator.SEARCH_INPUT].value == "Developer"
        assert listing.controls[JobsLocator.STATUS_FILTER].value == "interview"
        assert listing.controls[JobsLocator.PRIORITY_FILTER].value == "high"

    def test_filter_waits_for_a_rerender_that_lands_late(self, fake_page: FakePage) -> None:
        # ARRANGE - default wait budgets; the backend answers 500 ms after the change
        build_listing(fake_page)
        cards = [add_card(fake_page, company=f"Company {n}", status="pending") for n in range(3)]
        kept = cards[1]

        def rerender() -> None:
            for card in cards:
                if card is not kept:
                    fake_page.remove(css(JobsLocator.JOB_CARDS), card)

        jobs = JobsPage(PageActions(fake_page, base_url=BASE_URL))  # type: ignore[arg-type]
        fake_page.after(500, rerender)

        # ACT
        jobs.filter_by_status("interview")

        # ASSERT
        assert jobs.get_job_cards_count() == 1
        details = jobs.get_first_job_details()
        assert details is not None and details.company == "Company 1"
        assert fake_page.waited_ms >= 500

    def test_missing_controls_read_as_none(self, pages: JobTrackPages) -> None:
        assert pages.jobs.get_current_filters() == FilterState()
        assert pages.jobs.are_search_filters_visible() is False


class TestJobCards:
    """Card-scoped queries."""

    def test_first_job_details(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        add_card(
            fake_page,
            position="Frontend Developer",
            company="SearchTest Corp",
            location="New York, NY",
            status="pending",
        )
        add_card(fake_page, position="Other", company="Other Co")

        assert pages.jobs.get_first_job_details() == JobCardDetails(
            position="Frontend Developer",
            company="SearchTest Corp",
            location="New York, NY",
            status="pending",
            salary=None,
            priority=None,
        )
        assert pages.jobs.get_job_cards_count() == 2

    def test_no_cards(self, pages: JobTrackPages) -> None:
        assert pages.jobs.get_first_job_details() is None
        assert pages.jobs.get_job_cards_count() == 0
        assert pages.jobs.job_card_contains_text("anything") is False

    def test_card_text_search_is_case_insensitive(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        add_card(fake_page, position="Frontend Developer", company="SearchTest Corp")

        assert pages.jobs.job_card_contains_text("frontend developer")
        assert pages.jobs.job_card_contains_text("SearchTest Corp")

    def test_job_contains_info(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        add_card(
            fake_page, position="Backend Engineer", company="Acme", location="Remote", status="interview"
        )

        assert pages.jobs.job_contains_info(
            "Acme", {"position": "Backend Engineer", "location": "Remote", "salary": None}
        )
        assert not pages.jobs.job_contains_info("Acme", {"status": "declined"})
        assert not pages.jobs.job_contains_info("Globex", {"position": "Backend Engineer"})

    def test_check_enhanced_fields(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        card = add_card(fake_page, company="Acme", salary="$80,000 - $120,000")
        card.add(css(JobsLocator.JOB_POSTING_LINK), text="View posting")

        assert pages.jobs.check_enhanced_fields("Acme") == EnhancedFieldsVisibility(
            has_salary=True, has_priority=False, has_posting_link=True
        )


class TestCardActions:
    """Edit and delete buttons inside one card."""

    def test_edit_opens_the_form(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        card = add_card(fake_page, company="Acme")
        edit = card.add(css(JobsLocator.EDIT_BUTTON), on_click=fake_page.navigates_to("/add-job"))

        pages.jobs.edit_job_by_company("Acme")

        assert edit.clicks == 1
        assert pages.add_job.is_on_add_job_page()

    def test_delete_accepts_confirmation_and_waits_for_card_removal(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        selector = css(JobsLocator.JOB_CARDS)
        doomed = add_card(fake_page, company="Acme")
        add_card(fake_page, company="Globex")
        dialogs = []

        def confirm_then_remove() -> None:
            dialog = fake_page.trigger_dialog("Are you sure you want to delete this job?")
            dialogs.append(dialog)
            if dialog.accepted:
                fake_page.remove(selector, doomed)

        doomed.add(css(JobsLocator.DELETE_BUTTON), on_click=confirm_then_remove)

        assert pages.jobs.delete_job_by_company("Acme") is True
        assert dialogs[0].accepted is True
        assert pages.jobs.get_job_cards_count() == 1
        assert fake_page.listener_count("dialog") == 0

    def test_delete_reports_card_that_did_not_disappear(
        self, pages: JobTrackPages, fake_page: FakePage
    ) -> None:
        card = add_card(fake_page, company="Acme")
        card.add(css(JobsLocator.DELETE_BUTTON))

        assert pages.jobs.delete_job_by_company("Acme") is False


class TestJobsPageLoad:
    """Route and load checks."""

    def test_is_on_jobs_page_only_after_navigation(self, pages: JobTrackPages) -> None:
        assert pages.jobs.is_on_jobs_page() is False

        pages.jobs.navigate_to_jobs()

        assert pages.jobs.is_on_jobs_page() is True

    def test_verify_loaded(self, pages: JobTrackPages, fake_page: FakePage) -> None:
        build_listing(fake_page)
        fake_page.add("h2", text="All Jobs")
        add_card(fake_page, company="Acme")
        pages.jobs.navigate_to_jobs()

        pages.jobs.wait_for_jobs_load()
        result = pages.jobs.verify_jobs_page_loaded()

        assert result.is_on_correct_url and result.has_page_title and result.has_search_filters
        assert result.job_count == 1
        assert pages.jobs.get_page_title() == "All Jobs"
