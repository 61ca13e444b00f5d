"""Routes of the application under test."""

from enum import Enum


class Route(str, Enum):
    """Paths the suite navigates to or expects to land on."""

    DASHBOARD = "/"
    REGISTER = "/register"
    LANDING = "/landing"
    ALL_JOBS = "/all-jobs"
    ADD_JOB = "/add-job"
    ACTIVITIES = "/activities"
    TIMELINE = "/timeline"
    PROFILE = "/profile"


# Routes that require a session; unauthenticated visitors are redirected away
PROTECTED_ROUTES = (
    Route.DASHBOARD,
    Route.ALL_JOBS,
    Route.ADD_JOB,
    Route.ACTIVITIES,
    Route.TIMELINE,
    Route.PROFILE,
)

# Where the app may send a visitor without a session
UNAUTHENTICATED_ROUTES = (Route.LANDING, Route.REGISTER)
