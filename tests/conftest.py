"""Shared pytest fixtures for JobTrack E2E tests.

This module provides fixtures for:
- Environment defaults (loaded from .env first)
- Settings isolated from the developer's .env
- Test data factories

Usage:
    @pytest.mark.unit
    def test_something(job_draft_factory):
        job = job_draft_factory()
        assert job.company
"""

import os
from collections.abc import Generator

import pytest

from jobtrack_e2e.config.settings import Settings, get_settings
from tests.support.factories import CredentialsFactory, JobDraftFactory

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Loads .env file first, then sets defaults for any missing variables.
    """
    from dotenv import load_dotenv

    original_env = os.environ.copy()

    # Load .env file if it exists (won't override existing env vars)
    load_dotenv()

    os.environ.setdefault("BASE_URL", "http://localhost:3000")
    os.environ.setdefault("API_URL", "http://localhost:5000")
    os.environ.setdefault("TEST_USER_EMAIL", "test@jobtrack.com")
    os.environ.setdefault("TEST_USER_PASSWORD", "testpassword123")

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_settings() -> Generator[Settings, None, None]:
    """Settings built from defaults only, with the cached instance reset around the test."""
    get_settings.cache_clear()
    yield Settings(_env_file=None)  # type: ignore[call-arg]
    get_settings.cache_clear()


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def job_draft_factory() -> type[JobDraftFactory]:
    """Provide job draft factory for creating test jobs."""
    return JobDraftFactory


@pytest.fixture
def credentials_factory() -> type[CredentialsFactory]:
    """Provide credentials factory for throwaway accounts."""
    return CredentialsFactory


# =============================================================================
# Markers for Test Selection
# =============================================================================

# Usage:
# pytest -m unit          # Run only unit tests (no browser, no app)
# pytest -m e2e           # Run only browser scenarios
