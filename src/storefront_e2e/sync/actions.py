"""Wait-then-act wrappers for every UI interaction.

Page objects never touch the Playwright page directly; they go through an
:class:`ActionSynchronizer`, which waits for the condition each action needs
(clickable before click, visible before read, type and select) and turns a
timed-out wait into a typed error naming the condition and the locator.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from playwright.sync_api import Error as PlaywrightError

from ..browser.base import BrowserSession
from ..config import Timeouts
from ..errors import (
    ConditionTimeoutError,
    ElementNotFoundError,
    ElementNotInteractableError,
    OptionNotFoundError,
    StillPresentError,
)
from ..models import Locator
from . import conditions
from .conditions import WaitCondition
from .poller import ConditionPoller, Satisfied, TimedOut, WaitOutcome

if TYPE_CHECKING:
    from ..reporting.artifacts import ArtifactStore

LOGGER = logging.getLogger(__name__)


class ActionSynchronizer:
    """Synchronized UI actions bound to one browser session."""

    def __init__(
        self,
        session: BrowserSession,
        timeouts: Optional[Timeouts] = None,
        poller: Optional[ConditionPoller] = None,
        artifacts: Optional["ArtifactStore"] = None,
    ) -> None:
        self._session = session
        self._timeouts = timeouts or session.timeouts
        self._poller = poller or ConditionPoller(self._timeouts.poll_interval)
        self._artifacts = artifacts

    @property
    def session(self) -> BrowserSession:
        return self._session

    @property
    def timeouts(self) -> Timeouts:
        return self._timeouts

    def wait_for(self, condition: WaitCondition, timeout: Optional[float] = None) -> WaitOutcome:
        """Wait for ``condition`` and return the outcome without raising on timeout."""

        if timeout is None:
            timeout = self._timeouts.explicit_wait
        with self._session.lock:
            deadline = self._poller.deadline(timeout)
            return self._poller.poll(condition, self._session.page, deadline)

    def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            outcome = self._require(
                conditions.clickable(locator), timeout, ElementNotInteractableError
            )
            LOGGER.debug("Clicking %s", locator)
            self._perform(
                outcome, locator, "click", ElementNotInteractableError, lambda el: el.click()
            )

    def type(self, locator: Locator, text: str, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            outcome = self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            LOGGER.debug("Typing into %s", locator)

            def fill(element: Any) -> None:
                element.clear()
                element.fill(text)

            self._perform(outcome, locator, "type", ElementNotFoundError, fill)

    def clear(self, locator: Locator, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            outcome = self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            self._perform(outcome, locator, "clear", ElementNotFoundError, lambda el: el.clear())

    def read(self, locator: Locator, timeout: Optional[float] = None) -> str:
        with self._session.lock:
            outcome = self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            text = self._perform(
                outcome, locator, "read", ElementNotFoundError, lambda el: el.inner_text()
            )
            return text.strip()

    def read_all(self, locator: Locator, timeout: Optional[float] = None) -> list[str]:
        """Wait for the first match to be visible and return the text of all matches."""

        with self._session.lock:
            self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            texts = locator.resolve_all(self._session.page).all_inner_texts()
            return [text.strip() for text in texts]

    def select(self, locator: Locator, value: str, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            outcome = self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            options = outcome.value.evaluate(conditions.OPTION_VALUES_SCRIPT)
            if value not in options:
                error = OptionNotFoundError(
                    f"option-present '{value}'",
                    locator,
                    outcome.elapsed,
                    message=(
                        f"OptionNotFoundError: option '{value}' not among "
                        f"{options} of {locator.describe()}"
                    ),
                )
                raise self._failure(error)
            LOGGER.debug("Selecting %s in %s", value, locator)
            self._perform(
                outcome,
                locator,
                "select",
                OptionNotFoundError,
                lambda el: el.select_option(value=value),
            )

    def is_displayed(self, locator: Locator) -> bool:
        """Probe visibility immediately; a missing element is simply not displayed."""

        with self._session.lock:
            try:
                element = locator.resolve(self._session.page)
                return bool(element.count()) and element.is_visible()
            except PlaywrightError:
                return False

    def is_present(self, locator: Locator) -> bool:
        """Report whether any element matches, rendered or not, without waiting."""

        with self._session.lock:
            try:
                return locator.resolve_all(self._session.page).count() > 0
            except PlaywrightError:
                return False

    def dispatch_click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Fire a DOM click on a visible element, bypassing the hit test."""

        with self._session.lock:
            outcome = self._require(
                conditions.visible(locator), timeout, ElementNotInteractableError
            )
            LOGGER.debug("Dispatching click on %s", locator)
            self._perform(
                outcome,
                locator,
                "dispatch-click",
                ElementNotInteractableError,
                lambda el: el.dispatch_event("click"),
            )

    def scroll_into_view(self, locator: Locator, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            outcome = self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            self._perform(
                outcome,
                locator,
                "scroll",
                ElementNotFoundError,
                lambda el: el.scroll_into_view_if_needed(),
            )

    def scroll_to_top(self) -> None:
        with self._session.lock:
            self._session.page.evaluate(conditions.SCROLL_TO_TOP_SCRIPT)

    def scroll_to_bottom(self) -> None:
        with self._session.lock:
            self._session.page.evaluate(conditions.SCROLL_TO_BOTTOM_SCRIPT)

    def is_enabled(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        with self._session.lock:
            outcome = self._require(conditions.visible(locator), timeout, ElementNotFoundError)
            return bool(outcome.value.is_enabled())

    def count(self, locator: Locator) -> int:
        """Return the number of matching elements without waiting."""

        with self._session.lock:
            return locator.resolve_all(self._session.page).count()

    def wait_until_visible(self, locator: Locator, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            self._require(conditions.visible(locator), timeout, ElementNotFoundError)

    def wait_until_gone(self, locator: Locator, timeout: Optional[float] = None) -> None:
        with self._session.lock:
            self._require(conditions.absent(locator), timeout, StillPresentError)

    def wait_until_text(
        self,
        locator: Locator,
        text: str,
        timeout: Optional[float] = None,
        exact: bool = False,
    ) -> None:
        """Wait until the element shows ``text`` (or exactly ``text`` with ``exact``)."""

        if exact:
            condition = conditions.text_equals(locator, text)
        else:
            condition = conditions.text_contains(locator, text)
        with self._session.lock:
            self._require(condition, timeout, ElementNotFoundError)

    def wait_until_page_ready(self, timeout: Optional[float] = None) -> None:
        if timeout is None:
            timeout = self._timeouts.page_load
        with self._session.lock:
            self._require(conditions.page_ready(), timeout, ConditionTimeoutError)

    def navigate(self, url: str) -> None:
        with self._session.lock:
            LOGGER.info("Navigating to %s", url)
            self._session.page.goto(url)
            self.wait_until_page_ready()

    def refresh(self) -> None:
        with self._session.lock:
            LOGGER.info("Reloading %s", self._session.page.url)
            self._session.page.reload()
            self.wait_until_page_ready()

    def back(self) -> None:
        with self._session.lock:
            self._session.page.go_back()
            self.wait_until_page_ready()

    def forward(self) -> None:
        with self._session.lock:
            self._session.page.go_forward()
            self.wait_until_page_ready()

    @property
    def current_url(self) -> str:
        with self._session.lock:
            return self._session.page.url

    def title(self) -> str:
        with self._session.lock:
            return self._session.page.title()

    def _require(
        self,
        condition: WaitCondition,
        timeout: Optional[float],
        error_type: type[ConditionTimeoutError],
    ) -> Satisfied:
        outcome = self.wait_for(condition, timeout)
        if isinstance(outcome, TimedOut):
            raise self._failure(outcome.to_error(error_type))
        return outcome

    def _perform(
        self,
        outcome: Satisfied,
        locator: Locator,
        action: str,
        error_type: type[ConditionTimeoutError],
        operation: Any,
    ) -> Any:
        try:
            return operation(outcome.value)
        except PlaywrightError as exc:
            error = error_type(action, locator, outcome.elapsed, exc)
            raise self._failure(error) from exc

    def _failure(self, error: ConditionTimeoutError) -> ConditionTimeoutError:
        LOGGER.warning("%s", error)
        if self._artifacts is not None:
            name = error.condition
            if error.locator is not None:
                name = f"{name}_{error.locator.name or error.locator.value}"
            try:
                error.screenshot = self._artifacts.capture_screenshot(self._session, name)
            except Exception:  # pragma: no cover - defensive logging
                LOGGER.exception("Failed to capture screenshot for %s", error.condition)
        return error
