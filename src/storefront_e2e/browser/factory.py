"""Construction of browser sessions for each supported browser family."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union
from urllib.parse import urlsplit

from playwright.sync_api import sync_playwright

from ..config import BrowserConfig, Timeouts
from ..errors import InvalidEndpointError, UnsupportedBrowserError
from ..models import BrowserFamily, ExecutionMode
from .base import BrowserSession
from .playwright_session import PlaywrightBrowserSession

LOGGER = logging.getLogger(__name__)

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-extensions",
    "--disable-notifications",
    "--disable-infobars",
    "--disable-save-password-bubble",
    "--disable-blink-features=AutomationControlled",
    "--disable-features=PasswordManagerOnboarding,PasswordLeakDetection,AutofillServerCommunication",
)

# Options removed from Playwright's default chromium command line.
CHROMIUM_IGNORED_DEFAULT_ARGS = ["--enable-automation"]

GRID_SCHEMES = {"ws", "wss", "http", "https"}

# Playwright browser type used for each family.
ENGINES = {
    BrowserFamily.CHROME: "chromium",
    BrowserFamily.EDGE: "chromium",
    BrowserFamily.FIREFOX: "firefox",
    BrowserFamily.SAFARI: "webkit",
}

# Capability browser names accepted from the grid configuration.
GRID_BROWSER_ENGINES = {
    "chrome": "chromium",
    "chromium": "chromium",
    "edge": "chromium",
    "msedge": "chromium",
    "firefox": "firefox",
    "safari": "webkit",
    "webkit": "webkit",
}


class SessionFactory:
    """Create configured browser sessions.

    Each session owns its own Playwright runtime, so a session can be created
    and driven entirely from the thread of the worker that requested it.
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        timeouts: Optional[Timeouts] = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ) -> None:
        self._config = config or BrowserConfig()
        self._timeouts = timeouts or Timeouts()
        self._playwright_factory = playwright_factory

    def create(
        self,
        family: Union[BrowserFamily, str],
        mode: Union[ExecutionMode, str] = ExecutionMode.LOCAL,
        timeouts: Optional[Timeouts] = None,
    ) -> BrowserSession:
        family = _parse_family(family)
        mode = _parse_mode(mode)
        timeouts = timeouts or self._timeouts
        remote = family == BrowserFamily.REMOTE or mode == ExecutionMode.GRID
        endpoint = _parse_endpoint(self._config.grid_url) if remote else None

        LOGGER.info(
            "Creating %s session (%s)",
            family.value,
            endpoint or mode.value,
        )
        playwright = self._playwright_factory().start()
        try:
            if remote:
                session = self._connect_remote(playwright, family, endpoint, timeouts)
            else:
                session = self._launch_local(playwright, family, timeouts)
        except Exception:
            playwright.stop()
            raise
        return session

    def _launch_local(
        self,
        playwright: Any,
        family: BrowserFamily,
        timeouts: Timeouts,
    ) -> BrowserSession:
        browser_type = getattr(playwright, ENGINES[family])
        if family in (BrowserFamily.CHROME, BrowserFamily.EDGE):
            browser = browser_type.launch(**self._chromium_launch_options(family))
            context = browser.new_context(
                viewport={
                    "width": self._config.viewport_width,
                    "height": self._config.viewport_height,
                },
            )
        elif family == BrowserFamily.FIREFOX:
            browser = browser_type.launch(
                headless=self._config.headless,
                args=[
                    f"--width={self._config.viewport_width}",
                    f"--height={self._config.viewport_height}",
                    *self._config.extra_args,
                ],
            )
            # Without a fixed viewport the page follows the window size set above.
            context = browser.new_context(no_viewport=True)
        else:
            browser = browser_type.launch(headless=self._config.headless)
            context = browser.new_context()
        return self._open_session(playwright, browser, context, family, timeouts)

    def _chromium_launch_options(self, family: BrowserFamily) -> dict[str, Any]:
        args = list(CHROMIUM_ARGS)
        args.append(
            f"--window-size={self._config.viewport_width},{self._config.viewport_height}"
        )
        args.extend(self._config.extra_args)
        options: dict[str, Any] = {
            "headless": True,
            "args": args,
            "ignore_default_args": list(CHROMIUM_IGNORED_DEFAULT_ARGS),
            "chromium_sandbox": False,
        }
        channel = self._config.channel
        if family == BrowserFamily.EDGE:
            channel = channel or "msedge"
        if channel:
            options["channel"] = channel
        return options

    def _connect_remote(
        self,
        playwright: Any,
        family: BrowserFamily,
        endpoint: str,
        timeouts: Timeouts,
    ) -> BrowserSession:
        if family == BrowserFamily.REMOTE:
            browser_name = self._config.remote_browser.lower()
        else:
            browser_name = family.value
        engine = GRID_BROWSER_ENGINES.get(browser_name)
        if engine is None:
            raise UnsupportedBrowserError(f"Unsupported grid browser: {browser_name}")
        capabilities = {"browserName": browser_name}
        browser = getattr(playwright, engine).connect(endpoint)
        context = browser.new_context(
            viewport={
                "width": self._config.viewport_width,
                "height": self._config.viewport_height,
            },
        )
        return self._open_session(
            playwright,
            browser,
            context,
            family,
            timeouts,
            endpoint=endpoint,
            capabilities=capabilities,
        )

    @staticmethod
    def _open_session(
        playwright: Any,
        browser: Any,
        context: Any,
        family: BrowserFamily,
        timeouts: Timeouts,
        *,
        endpoint: Optional[str] = None,
        capabilities: Optional[dict[str, Any]] = None,
    ) -> BrowserSession:
        context.set_default_timeout(_to_timeout(timeouts.implicit_wait))
        context.set_default_navigation_timeout(_to_timeout(timeouts.page_load))
        page = context.new_page()
        return PlaywrightBrowserSession(
            family,
            timeouts,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
            endpoint=endpoint,
            capabilities=capabilities,
        )


def _parse_family(value: Union[BrowserFamily, str]) -> BrowserFamily:
    try:
        return BrowserFamily(value.lower() if isinstance(value, str) else value)
    except ValueError as exc:
        raise UnsupportedBrowserError(f"Unsupported browser: {value}") from exc


def _parse_mode(value: Union[ExecutionMode, str]) -> ExecutionMode:
    try:
        return ExecutionMode(value.lower() if isinstance(value, str) else value)
    except ValueError as exc:
        raise UnsupportedBrowserError(f"Unsupported execution mode: {value}") from exc


def _parse_endpoint(url: str) -> str:
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a malformed port
    except ValueError as exc:
        raise InvalidEndpointError(f"Invalid grid URL: {url}") from exc
    if parts.scheme not in GRID_SCHEMES or not parts.hostname:
        raise InvalidEndpointError(f"Invalid grid URL: {url}")
    return url


def _to_timeout(seconds: float) -> float:
    return seconds * 1000
