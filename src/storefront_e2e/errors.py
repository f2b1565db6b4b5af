"""Exception hierarchy for the storefront end-to-end framework."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .models import Locator


class FrameworkError(RuntimeError):
    """Base class for errors raised by the framework."""


class ConditionTimeoutError(FrameworkError):
    """Raised when a wait condition never became true before its deadline."""

    def __init__(
        self,
        condition: str,
        locator: Optional[Locator],
        elapsed: float,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> None:
        self.condition = condition
        self.locator = locator
        self.elapsed = elapsed
        self.cause = cause
        self.screenshot: Optional[Path] = None
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        target = self.locator.describe() if self.locator else "page"
        text = (
            f"{type(self).__name__}: condition '{self.condition}' not met for "
            f"{target} after {self.elapsed:.2f}s"
        )
        if self.cause is not None:
            text = f"{text} (last error: {self.cause})"
        return text


class ElementNotInteractableError(ConditionTimeoutError):
    """The element never became clickable."""


class ElementNotFoundError(ConditionTimeoutError):
    """The element never became visible."""


class StillPresentError(ConditionTimeoutError):
    """The element did not disappear."""


class OptionNotFoundError(ConditionTimeoutError):
    """A dropdown does not offer the requested option value."""


class SessionConfigurationError(FrameworkError):
    """Raised when a browser session cannot be configured."""


class UnsupportedBrowserError(SessionConfigurationError):
    """The requested browser family or execution mode is not supported."""


class InvalidEndpointError(SessionConfigurationError):
    """The grid endpoint URL cannot be parsed."""


class SessionClosedError(FrameworkError):
    """Raised when a session is used after it was quit."""
