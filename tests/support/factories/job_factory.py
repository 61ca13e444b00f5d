"""
Job Draft Factory

Generates realistic job drafts using Faker.
Drafts are in-memory only; scenarios submit them through the add-job form.
"""

from __future__ import annotations

import factory
from faker import Faker

from jobtrack_e2e.models import EnhancedJobFields, JobDraft, Phase2JobFields

fake = Faker()

JOB_TYPES = ["full-time", "part-time", "remote", "internship"]
JOB_STATUSES = ["pending", "interview", "declined"]
CATEGORIES = ["software-engineering", "data-science", "product", "design"]
PRIORITIES = ["low", "medium", "high"]


class EnhancedJobFieldsFactory(factory.Factory):
    class Meta:
        model = EnhancedJobFields

    salary_min = factory.LazyFunction(lambda: str(fake.pyint(min_value=40, max_value=90) * 1000))
    salary_max = factory.LazyAttribute(lambda o: str(int(o.salary_min) + 30_000))
    salary_currency = "USD"
    job_description = factory.LazyFunction(lambda: fake.sentence(nb_words=12))
    company_website = factory.LazyFunction(lambda: fake.url())
    job_posting_url = factory.LazyAttribute(lambda o: f"{o.company_website.rstrip('/')}/careers")
    application_method = "website"
    notes = factory.LazyFunction(lambda: fake.sentence(nb_words=6))


class Phase2JobFieldsFactory(factory.Factory):
    class Meta:
        model = Phase2JobFields

    category = factory.LazyFunction(lambda: fake.random_element(CATEGORIES))
    tags = factory.LazyFunction(lambda: ", ".join(fake.words(nb=3)))
    priority = factory.LazyFunction(lambda: fake.random_element(PRIORITIES))


class JobDraftFactory(factory.Factory):
    """
    Factory for generating JobDraft test data.

    Usage:
        # Basic fields only
        job = JobDraftFactory.build()

        # Every section filled
        job = JobDraftFactory.build(complete=True)

        # Custom values
        job = JobDraftFactory.build(company="SearchTest Corp", status="interview")
    """

    class Meta:
        model = JobDraft

    class Params:
        complete = factory.Trait(
            enhanced=factory.SubFactory(EnhancedJobFieldsFactory),
            phase2=factory.SubFactory(Phase2JobFieldsFactory),
        )

    position = factory.LazyFunction(lambda: fake.job())
    # Suffix keeps company names unique across runs against one database
    company = factory.LazyFunction(lambda: f"{fake.company()} {fake.pyint(1000, 9999)}")
    job_location = factory.LazyFunction(lambda: f"{fake.city()}, {fake.state_abbr()}")
    job_type = factory.LazyFunction(lambda: fake.random_element(JOB_TYPES))
    status = factory.LazyFunction(lambda: fake.random_element(JOB_STATUSES))
    enhanced = None
    phase2 = None
