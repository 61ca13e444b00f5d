"""
Test Data Factories

Factory-boy based factories for generating test data.
Follows the pattern: Faker + overrides.

Usage:
    from tests.support.factories import JobDraftFactory

    job = JobDraftFactory.build()
    complete = JobDraftFactory.build(complete=True)
"""

from tests.support.factories.credentials_factory import CredentialsFactory
from tests.support.factories.job_factory import (
    EnhancedJobFieldsFactory,
    JobDraftFactory,
    Phase2JobFieldsFactory,
)

__all__ = [
    "CredentialsFactory",
    "EnhancedJobFieldsFactory",
    "JobDraftFactory",
    "Phase2JobFieldsFactory",
]
