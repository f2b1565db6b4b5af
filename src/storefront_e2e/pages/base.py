"""Common base for page objects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..browser.base import BrowserSession
from ..sync.actions import ActionSynchronizer
from ..sync.conditions import WaitCondition


class BasePage(ABC):
    """A facade over one screen of the storefront.

    A page object is only valid for the session its synchronizer is bound to.
    Subclasses implement :meth:`is_loaded` and :meth:`wait_until_loaded` with
    bounded waits, never by sleeping.
    """

    path = "/"

    def __init__(self, actions: ActionSynchronizer, base_url: Optional[str] = None) -> None:
        self._actions = actions
        self._base_url = (base_url or "").rstrip("/")

    @property
    def actions(self) -> ActionSynchronizer:
        return self._actions

    @property
    def session(self) -> BrowserSession:
        return self._actions.session

    @property
    def url(self) -> str:
        return f"{self._base_url}{self.path}"

    def open(self) -> "BasePage":
        self._actions.navigate(self.url)
        return self

    @abstractmethod
    def is_loaded(self) -> bool:
        """Return whether the screen rendered within the explicit wait."""

    @abstractmethod
    def wait_until_loaded(self) -> None:
        """Wait for the screen to render; raise the typed wait error otherwise."""

    def page_title(self) -> str:
        """Return the document title of the browser tab."""

        return self._actions.title()

    def current_url(self) -> str:
        return self._actions.current_url

    def refresh(self) -> None:
        self._actions.refresh()

    def go_back(self) -> None:
        self._actions.back()

    def go_forward(self) -> None:
        self._actions.forward()

    def scroll_to_top(self) -> None:
        self._actions.scroll_to_top()

    def scroll_to_bottom(self) -> None:
        self._actions.scroll_to_bottom()

    def _holds(self, condition: WaitCondition, timeout: Optional[float] = None) -> bool:
        return bool(self._actions.wait_for(condition, timeout))
