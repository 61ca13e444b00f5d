"""JobTrack E2E exception hierarchy.

This module defines the base exception class and specialized exceptions
for the failure categories of the suite: bad configuration, locator maps
that do not cover their fields, waits that expire and services that never
become ready.
"""


class JobTrackE2EError(Exception):
    """Base exception for all JobTrack E2E errors.

    All custom exceptions in the suite inherit from this class so a
    runner can tell harness failures apart from assertion failures.
    """

    pass


class ConfigurationError(JobTrackE2EError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("Unknown project: 'Mobile Opera'")
    """

    pass


class LocatorMapError(ConfigurationError):
    """Raised when a page object's locator map is incomplete or malformed.

    Attributes:
        fields: Names of the symbolic fields that are missing or invalid.

    Example:
        raise LocatorMapError("AuthLocator", missing=["NAME_INPUT"])
    """

    def __init__(
        self,
        map_name: str,
        missing: list[str] | None = None,
        unexpected: list[str] | None = None,
    ) -> None:
        self.map_name = map_name
        self.missing = missing or []
        self.unexpected = unexpected or []
        self.fields = [*self.missing, *self.unexpected]

        problems = []
        if self.missing:
            problems.append(f"missing entries for {', '.join(self.missing)}")
        if self.unexpected:
            problems.append(f"unexpected keys {', '.join(self.unexpected)}")
        super().__init__(f"{map_name}: {'; '.join(problems)}")


class WaitTimeoutError(JobTrackE2EError, TimeoutError):
    """Raised when an explicit wait does not observe its condition in time.

    Subclasses the builtin ``TimeoutError`` so callers that only care about
    "it timed out" do not need to know about the suite's hierarchy.

    Attributes:
        description: Selector or condition that was being waited for.
        timeout_ms: Budget in milliseconds that elapsed.

    Example:
        raise WaitTimeoutError('input[name="name"]', timeout_ms=5000)
    """

    def __init__(self, description: str, timeout_ms: float) -> None:
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms:.0f}ms waiting for {description}")


class BootstrapError(JobTrackE2EError):
    """Raised when a target service never becomes ready.

    This is fatal for the whole run, not for a single scenario.

    Attributes:
        service: Name of the service that failed (frontend, backend).
        url: URL that was being polled.

    Example:
        raise BootstrapError(service="backend", url="http://localhost:5000/...", message="...")
    """

    def __init__(self, service: str, url: str, message: str) -> None:
        self.service = service
        self.url = url
        super().__init__(f"{service} ({url}): {message}")
