"""Playwright-powered browser session implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from ..config import Timeouts
from ..errors import SessionClosedError
from ..models import BrowserFamily
from .base import BrowserSession, Liveness

LOGGER = logging.getLogger(__name__)


class PlaywrightBrowserSession(BrowserSession):
    """Browser session backed by a Playwright runtime, browser, context and page."""

    def __init__(
        self,
        family: BrowserFamily,
        timeouts: Timeouts,
        *,
        playwright: Any,
        browser: Any,
        context: Any,
        page: Any,
        endpoint: Optional[str] = None,
        capabilities: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(family, timeouts, endpoint=endpoint, capabilities=capabilities)
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page

    @property
    def page(self) -> Any:
        if self._page is None:
            raise SessionClosedError(f"{self.family.value} session has been quit")
        return self._page

    def probe(self) -> Liveness:
        if self._page is None or self._browser is None:
            return Liveness.DEAD
        try:
            if not self._browser.is_connected() or self._page.is_closed():
                return Liveness.DEAD
            self._page.evaluate("() => document.URL")
        except Exception as exc:
            LOGGER.debug("Liveness probe failed for %s session: %s", self.family.value, exc)
            return Liveness.DEAD
        return Liveness.ALIVE

    def quit(self) -> None:
        if self._playwright is None:
            return
        LOGGER.debug("Stopping Playwright %s session", self.family.value)
        try:
            if self._context:
                self._context.close()
        finally:
            try:
                if self._browser:
                    self._browser.close()
            finally:
                self._playwright.stop()
                self._context = None
                self._browser = None
                self._playwright = None
                self._page = None

    def screenshot(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.page.screenshot(path=str(path), full_page=True)
        return path
