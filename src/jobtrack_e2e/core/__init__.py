"""Core primitives shared across the suite."""

from jobtrack_e2e.core.exceptions import (
    BootstrapError,
    ConfigurationError,
    JobTrackE2EError,
    LocatorMapError,
    WaitTimeoutError,
)

__all__ = [
    "BootstrapError",
    "ConfigurationError",
    "JobTrackE2EError",
    "LocatorMapError",
    "WaitTimeoutError",
]
