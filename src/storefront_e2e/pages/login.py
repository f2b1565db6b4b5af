"""Page object for the storefront login screen."""

from __future__ import annotations

from ..models import Locator
from ..sync.conditions import visible
from .base import BasePage

USERNAME = Locator.by_id("user-name", "username field")
PASSWORD = Locator.by_id("password", "password field")
LOGIN_BUTTON = Locator.by_id("login-button", "login button")
ERROR_MESSAGE = Locator.xpath("//h3[@data-test='error']", "login error")
LOGO = Locator.by_class("login_logo", "login logo")


class LoginPage(BasePage):
    """Login form: username, password and submit."""

    path = "/"

    def is_loaded(self) -> bool:
        return self._holds(visible(LOGO)) and self.actions.is_displayed(LOGIN_BUTTON)

    def wait_until_loaded(self) -> None:
        self.actions.wait_until_visible(LOGO)
        self.actions.wait_until_visible(LOGIN_BUTTON)

    def login(self, username: str, password: str) -> None:
        self.enter_username(username)
        self.enter_password(password)
        self.click_login()

    def enter_username(self, username: str) -> None:
        self.actions.type(USERNAME, username)

    def enter_password(self, password: str) -> None:
        self.actions.type(PASSWORD, password)

    def click_login(self) -> None:
        self.actions.click(LOGIN_BUTTON)

    def error_message(self) -> str:
        return self.actions.read(ERROR_MESSAGE)

    def is_error_displayed(self) -> bool:
        return self.actions.is_displayed(ERROR_MESSAGE)

    def clear_username(self) -> None:
        self.actions.clear(USERNAME)

    def clear_password(self) -> None:
        self.actions.clear(PASSWORD)

    def is_username_field_displayed(self) -> bool:
        return self.actions.is_displayed(USERNAME)

    def is_password_field_displayed(self) -> bool:
        return self.actions.is_displayed(PASSWORD)

    def is_login_button_enabled(self) -> bool:
        return self.actions.is_enabled(LOGIN_BUTTON)
