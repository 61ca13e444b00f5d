"""In-test data shapes: session credentials, job drafts and filter state.

These are transient. Each scenario builds its own instances; nothing here
is persisted by the suite. Field aliases are the ``name`` attributes the
application's forms use, so ``JobDraft.model_validate({"jobLocation": ...})``
and ``JobDraft(job_location=...)`` are equivalent.

``None`` always means "not supplied": form workflows only write fields that
carry a value, which is what lets one draft type express both minimal and
exhaustive submissions.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TEST_EMAIL_DOMAIN = "jobtrack.com"


class _FormModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def supplied(self) -> dict[str, str]:
        """Form field name -> value for every supplied scalar field."""
        return {
            key: value
            for key, value in self.model_dump(by_alias=True, exclude_none=True).items()
            if isinstance(value, str)
        }


def generate_test_email(prefix: str = "test", domain: str = TEST_EMAIL_DOMAIN) -> str:
    """Unique address per call: millisecond timestamp suffix."""
    return f"{prefix}{time.time_ns() // 1_000_000}@{domain}"


class Credentials(_FormModel):
    """Email/password pair, plus a display name for registration."""

    email: str
    password: str
    name: str | None = None

    @classmethod
    def unique(cls, password: str = "testpassword123", name: str = "Test User") -> Credentials:
        return cls(email=generate_test_email(), password=password, name=name)


class EnhancedJobFields(_FormModel):
    """Salary, links and free-text fields of the add-job form."""

    salary_min: str | None = None
    salary_max: str | None = None
    salary_currency: str | None = None
    job_description: str | None = None
    company_website: str | None = None
    job_posting_url: str | None = None
    application_method: str | None = None
    notes: str | None = None


class Phase2JobFields(_FormModel):
    """Categorisation fields of the add-job form."""

    category: str | None = None
    tags: str | None = None
    priority: str | None = None


class JobDraft(_FormModel):
    """A job as a scenario wants it submitted."""

    position: str | None = None
    company: str | None = None
    job_location: str | None = None
    job_type: str | None = None
    status: str | None = None
    enhanced: EnhancedJobFields | None = None
    phase2: Phase2JobFields | None = None

    def merged(self, overrides: JobDraft) -> JobDraft:
        """Return a copy where every supplied field of ``overrides`` wins.

        Nested sections are replaced wholesale, matching a shallow object
        spread of the override data.
        """
        updates = {
            name: getattr(overrides, name)
            for name in overrides.model_fields_set
            if getattr(overrides, name) is not None
        }
        return self.model_copy(update=updates)


class JobUpdate(_FormModel):
    """Fields the edit workflow rewrites."""

    position: str | None = None
    status: str | None = None
    priority: str | None = None


class JobFilters(_FormModel):
    """Listing controls a scenario wants applied; ``None`` leaves a control alone."""

    search: str | None = None
    status: str | None = None
    type: str | None = None
    category: str | None = None
    priority: str | None = None
    sort: str | None = None


class FilterState(_FormModel):
    """Listing controls as read back from the page; ``None`` means the control is absent."""

    search: str | None = None
    status: str | None = None
    type: str | None = None
    category: str | None = None
    priority: str | None = None
    sort: str | None = None


class ActivityFilters(_FormModel):
    """Activity list controls as read back from the page."""

    type: str | None = None
    status: str | None = None


DEFAULT_TEST_JOB = JobDraft(
    position="Test Software Engineer",
    company="Test Company Inc",
    job_location="Remote",
    job_type="full-time",
    status="pending",
    enhanced=EnhancedJobFields(
        salary_min="80000",
        salary_max="120000",
        salary_currency="USD",
        job_description="Test job description",
        company_website="https://testcompany.com",
        job_posting_url="https://testcompany.com/careers/engineer",
        application_method="website",
        notes="Test notes",
    ),
    phase2=Phase2JobFields(
        category="software-engineering",
        tags="javascript, react, node.js",
        priority="medium",
    ),
)
