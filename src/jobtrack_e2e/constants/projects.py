"""Browser/device profiles the suite can run against.

Names follow the ones the application's original CI used, so report
folders stay comparable across runs.
"""

from typing import NamedTuple


class BrowserProject(NamedTuple):
    """One pytest-playwright invocation profile."""

    name: str
    browser: str
    device: str | None = None
    channel: str | None = None


PROJECTS: dict[str, BrowserProject] = {
    project.name: project
    for project in (
        BrowserProject("chromium", "chromium", "Desktop Chrome"),
        BrowserProject("firefox", "firefox", "Desktop Firefox"),
        BrowserProject("webkit", "webkit", "Desktop Safari"),
        BrowserProject("Mobile Chrome", "chromium", "Pixel 5"),
        BrowserProject("Mobile Safari", "webkit", "iPhone 12"),
        BrowserProject("Microsoft Edge", "chromium", "Desktop Edge", "msedge"),
    )
}

DEFAULT_PROJECTS = ("chromium",)
