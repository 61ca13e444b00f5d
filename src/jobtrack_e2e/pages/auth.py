"""Login/register screen.

The screen is a single form with two modes. Register mode shows the name
field; login mode hides it. Mode switches are driven by the "Register
Now" / "Login Here" toggle buttons.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

import structlog

from jobtrack_e2e.config import get_settings
from jobtrack_e2e.constants.routes import UNAUTHENTICATED_ROUTES, Route
from jobtrack_e2e.constants.timeouts import AUTH_REDIRECT_TIMEOUT_MS
from jobtrack_e2e.models import Credentials
from jobtrack_e2e.models import generate_test_email as _generate_test_email
from jobtrack_e2e.pages.base import PageActions
from jobtrack_e2e.pages.locators import LocatorMap

log = structlog.get_logger(__name__)


class AuthMode(Enum):
    LOGIN = "login"
    REGISTER = "register"


class AuthLocator(Enum):
    NAME_INPUT = auto()
    EMAIL_INPUT = auto()
    PASSWORD_INPUT = auto()
    SUBMIT_BUTTON = auto()
    SIGN_UP_BUTTON = auto()
    SIGN_IN_BUTTON = auto()
    PAGE_TITLE = auto()
    ALERT_MESSAGE = auto()
    USER_INFO = auto()
    DASHBOARD_CONTENT = auto()
    LOGOUT_BUTTON = auto()
    USER_MENU = auto()
    DROPDOWN_TOGGLE = auto()


LOCATORS = LocatorMap(
    AuthLocator,
    {
        AuthLocator.NAME_INPUT: 'input[name="name"]',
        AuthLocator.EMAIL_INPUT: 'input[name="email"]',
        AuthLocator.PASSWORD_INPUT: 'input[name="password"]',
        AuthLocator.SUBMIT_BUTTON: 'button[type="submit"]',
        AuthLocator.SIGN_UP_BUTTON: (
            'button:has-text("Register Now")',
            'button.member-btn:has-text("Register")',
        ),
        AuthLocator.SIGN_IN_BUTTON: (
            'button:has-text("Login Here")',
            'button.member-btn:has-text("Login")',
        ),
        AuthLocator.PAGE_TITLE: "h3",
        AuthLocator.ALERT_MESSAGE: ('[class*="alert"]', ".error", '[role="alert"]'),
        AuthLocator.USER_INFO: (
            ".btn-container .btn",
            ".nav-center .btn",
            ".nav-links",
            ".sidebar .nav-links",
            ".big-sidebar .nav-links",
        ),
        AuthLocator.DASHBOARD_CONTENT: ("h1", "h2", "h3", ".logo-text"),
        AuthLocator.LOGOUT_BUTTON: (
            'button:has-text("logout")',
            'button:has-text("Logout")',
            'button:has-text("Sign Out")',
            '[data-testid="logout-button"]',
        ),
        AuthLocator.USER_MENU: (
            '[data-testid="user-menu"]',
            ".user-dropdown",
            ".nav-user",
            ".btn-container .btn",
        ),
        AuthLocator.DROPDOWN_TOGGLE: (".btn-container .btn", ".dropdown-btn"),
    },
)


@dataclass(frozen=True)
class AuthFormValues:
    """Current field values; ``name`` is None in login mode."""

    name: str | None
    email: str | None
    password: str | None


class AuthPage:
    """Login, registration and logout flows."""

    LOCATORS = LOCATORS

    def __init__(
        self,
        actions: PageActions,
        auth_routes: Sequence[str] = tuple(route.value for route in UNAUTHENTICATED_ROUTES),
        default_credentials: Credentials | None = None,
    ) -> None:
        self.actions = actions
        self.auth_routes = tuple(auth_routes)
        self.default_credentials = default_credentials

    # Navigation

    def navigate_to_auth(self) -> None:
        self.actions.navigate(Route.REGISTER.value)

    def is_on_register_page(self) -> bool:
        """True on any route the app uses for visitors without a session."""
        return any(self.actions.path_contains(route) for route in self.auth_routes)

    def is_on_dashboard(self) -> bool:
        return self.actions.is_on(Route.DASHBOARD.value)

    # Mode

    def current_mode(self) -> AuthMode:
        if self.is_name_field_visible():
            return AuthMode.REGISTER
        return AuthMode.LOGIN

    def switch_to_register(self) -> None:
        if self.actions.is_visible(LOCATORS[AuthLocator.SIGN_UP_BUTTON]):
            self.actions.click_element(LOCATORS[AuthLocator.SIGN_UP_BUTTON])
        self.actions.settle(self.is_name_field_visible)

    def switch_to_login(self) -> None:
        if self.actions.is_visible(LOCATORS[AuthLocator.SIGN_IN_BUTTON]):
            self.actions.click_element(LOCATORS[AuthLocator.SIGN_IN_BUTTON])
        self.actions.settle(lambda: not self.is_name_field_visible())

    # Forms

    def fill_registration_form(self, user: Credentials) -> None:
        self.switch_to_register()
        self.actions.fill_input(LOCATORS[AuthLocator.NAME_INPUT], user.name or "")
        self.actions.fill_input(LOCATORS[AuthLocator.EMAIL_INPUT], user.email)
        self.actions.fill_input(LOCATORS[AuthLocator.PASSWORD_INPUT], user.password)

    def fill_login_form(self, credentials: Credentials) -> None:
        self.switch_to_login()
        self.actions.fill_input(LOCATORS[AuthLocator.EMAIL_INPUT], credentials.email)
        self.actions.fill_input(LOCATORS[AuthLocator.PASSWORD_INPUT], credentials.password)

    def submit_form(self) -> None:
        self.actions.click_element(LOCATORS[AuthLocator.SUBMIT_BUTTON])

    def register(self, user: Credentials) -> None:
        log.info("register", email=user.email)
        self.fill_registration_form(user)
        self.submit_form()

    def login(self, credentials: Credentials) -> None:
        log.info("login", email=credentials.email)
        self.fill_login_form(credentials)
        self.submit_form()

    def perform_login(self, credentials: Credentials | None = None) -> None:
        """Navigate, log in and wait for the dashboard.

        Without explicit credentials the seeded test user is used.
        """
        credentials = credentials or self.default_credentials
        if credentials is None:
            credentials = get_settings().test_user_credentials
        self.navigate_to_auth()
        self.login(credentials)
        self.actions.wait_for_url(Route.DASHBOARD.value, timeout=AUTH_REDIRECT_TIMEOUT_MS)

    def logout(self) -> None:
        """Log out through the user dropdown and wait for an auth route."""
        logout_button = LOCATORS[AuthLocator.LOGOUT_BUTTON]
        if not self.actions.is_visible(logout_button):
            toggle = LOCATORS[AuthLocator.DROPDOWN_TOGGLE]
            if self.actions.is_visible(toggle):
                self.actions.click_element(toggle)
                self.actions.settle(lambda: self.actions.is_visible(logout_button))

        self.actions.wait_for_element(logout_button).click()
        self.actions.wait_for_url(self.auth_routes, timeout=AUTH_REDIRECT_TIMEOUT_MS)
        log.info("logged_out", url=self.actions.url)

    # Queries

    def is_alert_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[AuthLocator.ALERT_MESSAGE])

    def get_alert_message(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[AuthLocator.ALERT_MESSAGE])

    def is_name_field_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[AuthLocator.NAME_INPUT])

    def is_user_info_visible(self) -> bool:
        return self.actions.is_visible(LOCATORS[AuthLocator.USER_INFO])

    def get_page_title(self) -> str | None:
        return self.actions.get_text_content(LOCATORS[AuthLocator.PAGE_TITLE])

    def get_email_validation_message(self) -> str | None:
        """Browser-native constraint message of the email field ("" when valid)."""
        return self.actions.evaluate(
            LOCATORS[AuthLocator.EMAIL_INPUT], "el => el.validationMessage"
        )

    def get_form_values(self) -> AuthFormValues:
        return AuthFormValues(
            name=self.actions.get_input_value(LOCATORS[AuthLocator.NAME_INPUT]),
            email=self.actions.get_input_value(LOCATORS[AuthLocator.EMAIL_INPUT]),
            password=self.actions.get_input_value(LOCATORS[AuthLocator.PASSWORD_INPUT]),
        )

    @staticmethod
    def generate_test_email() -> str:
        return _generate_test_email()
