"""Static values shared by the page objects, fixtures and runner."""

from jobtrack_e2e.constants.projects import DEFAULT_PROJECTS, PROJECTS, BrowserProject
from jobtrack_e2e.constants.routes import PROTECTED_ROUTES, UNAUTHENTICATED_ROUTES, Route

__all__ = [
    "DEFAULT_PROJECTS",
    "PROJECTS",
    "PROTECTED_ROUTES",
    "UNAUTHENTICATED_ROUTES",
    "BrowserProject",
    "Route",
]
