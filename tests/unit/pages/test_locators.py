"""Unit tests for selectors and locator maps."""

from __future__ import annotations

from enum import Enum, auto

import pytest

from jobtrack_e2e.core.exceptions import ConfigurationError, LocatorMapError
from jobtrack_e2e.pages import activities, add_job, auth, dashboard, jobs, navigation, timeline
from jobtrack_e2e.pages.locators import LocatorMap, Selector

pytestmark = pytest.mark.unit


class Field(Enum):
    EMAIL = auto()
    SUBMIT = auto()


class TestSelector:
    """Ordered candidate lists."""

    def test_primary_is_first_candidate(self) -> None:
        selector = Selector.of('button[type="submit"]', 'button:has-text("Login")')

        assert selector.primary == 'button[type="submit"]'
        assert list(selector) == ['button[type="submit"]', 'button:has-text("Login")']

    def test_rejects_empty_and_blank_candidates(self) -> None:
        with pytest.raises(ValueError):
            Selector.of()
        with pytest.raises(ValueError):
            Selector.of(".ok", "  ")

    def test_with_suffix_narrows_every_candidate(self) -> None:
        active = Selector.of(".nav-link.active", ".active").with_suffix('[href="/all-jobs"]')

        assert active.candidates == (
            '.nav-link.active[href="/all-jobs"]',
            '.active[href="/all-jobs"]',
        )

    def test_str_lists_candidates(self) -> None:
        assert str(Selector.of("h1", "h2")) == "h1 | h2"


class TestLocatorMap:
    """Completeness is checked when the map is built."""

    def test_accepts_strings_sequences_and_selectors(self) -> None:
        locators = LocatorMap(
            Field,
            {
                Field.EMAIL: 'input[name="email"]',
                Field.SUBMIT: ('button[type="submit"]', ".submit-btn"),
            },
        )

        assert locators[Field.EMAIL] == Selector.of('input[name="email"]')
        assert locators[Field.SUBMIT].primary == 'button[type="submit"]'
        assert len(locators) == 2

    def test_missing_field_is_reported_by_name(self) -> None:
        with pytest.raises(LocatorMapError) as exc_info:
            LocatorMap(Field, {Field.EMAIL: 'input[name="email"]'})

        assert exc_info.value.missing == ["SUBMIT"]
        assert "Field" in str(exc_info.value)

    def test_foreign_key_is_rejected(self) -> None:
        with pytest.raises(LocatorMapError) as exc_info:
            LocatorMap(
                Field,
                {Field.EMAIL: "input", Field.SUBMIT: "button", "extra": "div"},  # type: ignore[dict-item]
            )

        assert exc_info.value.unexpected == ["'extra'"]

    def test_empty_selector_entry_is_rejected(self) -> None:
        with pytest.raises(LocatorMapError) as exc_info:
            LocatorMap(Field, {Field.EMAIL: (), Field.SUBMIT: "button"})

        assert exc_info.value.missing == ["EMAIL"]

    def test_error_is_a_configuration_error(self) -> None:
        assert issubclass(LocatorMapError, ConfigurationError)

    def test_map_is_read_only(self) -> None:
        locators = LocatorMap(Field, {Field.EMAIL: "input", Field.SUBMIT: "button"})

        with pytest.raises(TypeError):
            locators[Field.EMAIL] = Selector.of("textarea")  # type: ignore[index]


@pytest.mark.parametrize(
    "locator_map",
    [
        auth.LOCATORS,
        dashboard.LOCATORS,
        navigation.LOCATORS,
        jobs.LOCATORS,
        jobs.CARD_LOCATORS,
        add_job.LOCATORS,
        activities.LOCATORS,
        timeline.LOCATORS,
    ],
    ids=repr,
)
def test_page_locator_maps_cover_their_fields(locator_map: LocatorMap) -> None:
    """Every symbolic field a page object can reference has a selector."""
    assert set(locator_map) == set(locator_map.fields)
    assert all(locator_map[field].candidates for field in locator_map.fields)


def test_form_section_tables_point_into_the_add_job_map() -> None:
    for table in (add_job.BASIC_FIELDS, add_job.ENHANCED_FIELDS, add_job.PHASE2_FIELDS):
        assert all(control in add_job.LOCATORS for control in table.values())
