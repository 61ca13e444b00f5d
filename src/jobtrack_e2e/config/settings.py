"""Suite settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobtrack_e2e.constants.projects import DEFAULT_PROJECTS, PROJECTS
from jobtrack_e2e.constants.routes import UNAUTHENTICATED_ROUTES
from jobtrack_e2e.models import Credentials

CapturePolicy = Literal["on", "off", "retain-on-failure", "only-on-failure"]


class Settings(BaseSettings):
    """JobTrack E2E configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application under test
    base_url: str = Field(default="http://localhost:3000", description="Frontend base URL")
    api_url: str = Field(default="http://localhost:5000", description="Backend base URL")
    backend_health_path: str = Field(
        default="/api/v1/auth/getCurrentUser",
        description="Backend path polled for readiness (200 or 401 means up)",
    )
    auth_routes: list[str] = Field(
        default_factory=lambda: [route.value for route in UNAUTHENTICATED_ROUTES],
        description="Routes the app uses for visitors without a session",
    )

    # Timeouts (milliseconds)
    action_timeout: int = Field(default=30_000, gt=0, description="Per-action timeout")
    navigation_timeout: int = Field(default=30_000, gt=0, description="Navigation timeout")
    test_timeout: int = Field(default=60_000, gt=0, description="Whole-test timeout")
    expect_timeout: int = Field(default=10_000, gt=0, description="Assertion timeout")
    settle_timeout: int = Field(
        default=2_000, gt=0, description="Budget for re-render after filters/deletes"
    )
    rerender_timeout: int = Field(
        default=1_000, gt=0, description="Budget for a list to start changing after a filter"
    )
    poll_interval: int = Field(default=100, gt=0, description="Polling interval for waits")

    # Runner
    ci: bool = Field(default=False, description="Running on CI")
    retries: int | None = Field(default=None, ge=0, description="Reruns for failed tests")
    workers: int | None = Field(default=None, ge=1, description="Parallel worker processes")
    projects: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROJECTS),
        description="Browser/device profiles to run",
    )
    trace: CapturePolicy = Field(default="retain-on-failure", description="Trace capture")
    screenshot: CapturePolicy = Field(default="only-on-failure", description="Screenshots")
    video: CapturePolicy = Field(default="retain-on-failure", description="Video capture")
    report_dir: str = Field(default="playwright-report", description="HTML/JSON report folder")
    output_dir: str = Field(default="test-results", description="Trace/video/screenshot folder")
    headed: bool = Field(default=False, description="Show the browser window")
    slow_mo: int = Field(default=0, ge=0, description="Delay between engine operations")
    require_application: bool = Field(
        default=False,
        description="Fail the run instead of skipping scenarios when the app is down",
    )

    # Seeded test user
    test_user_email: str = Field(default="test@jobtrack.com", description="Seeded user email")
    test_user_password: SecretStr = Field(
        default=SecretStr("testpassword123"), description="Seeded user password"
    )
    test_user_name: str = Field(default="Test User", description="Seeded user display name")

    # Bootstrap
    bootstrap_attempts: int = Field(default=30, ge=1, description="Readiness polls per service")
    bootstrap_interval: float = Field(default=2.0, gt=0, description="Seconds between polls")
    bootstrap_request_timeout: float = Field(
        default=5.0, gt=0, description="Per-request timeout in seconds"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")

    @field_validator("base_url", "api_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate application URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Application URLs must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("auth_routes")
    @classmethod
    def validate_auth_routes(cls, v: list[str]) -> list[str]:
        """Auth routes are absolute paths, at least one."""
        if not v:
            raise ValueError("At least one auth route is required")
        for route in v:
            if not route.startswith("/"):
                raise ValueError(f"Auth route must start with '/': {route!r}")
        return v

    @field_validator("projects")
    @classmethod
    def validate_projects(cls, v: list[str]) -> list[str]:
        """Only known browser/device profiles can be selected."""
        unknown = [name for name in v if name not in PROJECTS]
        if unknown:
            raise ValueError(
                f"Unknown projects {unknown}; choose from {sorted(PROJECTS)}"
            )
        return v

    @model_validator(mode="after")
    def apply_ci_defaults(self) -> "Settings":
        """Retry and worker counts depend on the environment when unset."""
        if self.retries is None:
            self.retries = 2 if self.ci else 0
        if self.workers is None and self.ci:
            self.workers = 1
        return self

    @property
    def backend_health_url(self) -> str:
        return f"{self.api_url}{self.backend_health_path}"

    @property
    def test_user_credentials(self) -> Credentials:
        """The seeded user every logged-in scenario starts from."""
        return Credentials(
            email=self.test_user_email,
            password=self.test_user_password.get_secret_value(),
            name=self.test_user_name,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
