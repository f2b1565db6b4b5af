"""Shared models used across the storefront end-to-end framework."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


class BrowserFamily(str, enum.Enum):
    """Browser families a session can be created for."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    SAFARI = "safari"
    REMOTE = "remote"


class ExecutionMode(str, enum.Enum):
    """Where the browser process runs."""

    LOCAL = "local"
    GRID = "grid"


class LocatorStrategy(str, enum.Enum):
    """Ways of finding elements on a page."""

    ID = "id"
    CLASS_NAME = "class"
    CSS = "css"
    XPATH = "xpath"
    NAME = "name"
    TEST_ID = "data-test"
    TEXT = "text"


@dataclass(frozen=True)
class Locator:
    """Description of how to find one or more elements on a page."""

    strategy: LocatorStrategy
    value: str
    name: Optional[str] = None
    index: Optional[int] = None

    @classmethod
    def by_id(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.ID, value, name)

    @classmethod
    def by_class(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.CLASS_NAME, value, name)

    @classmethod
    def css(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.CSS, value, name)

    @classmethod
    def xpath(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.XPATH, value, name)

    @classmethod
    def by_name(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.NAME, value, name)

    @classmethod
    def by_test_id(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.TEST_ID, value, name)

    @classmethod
    def by_text(cls, value: str, name: Optional[str] = None) -> "Locator":
        return cls(LocatorStrategy.TEXT, value, name)

    @property
    def selector(self) -> str:
        """Return the Playwright selector for this locator."""

        if self.strategy == LocatorStrategy.ID:
            return f'[id="{self.value}"]'
        if self.strategy == LocatorStrategy.CLASS_NAME:
            return f".{self.value}"
        if self.strategy == LocatorStrategy.CSS:
            return self.value
        if self.strategy == LocatorStrategy.XPATH:
            return f"xpath={self.value}"
        if self.strategy == LocatorStrategy.NAME:
            return f'[name="{self.value}"]'
        if self.strategy == LocatorStrategy.TEST_ID:
            return f'[data-test="{self.value}"]'
        return f"text={self.value}"

    def format(self, **values: Any) -> "Locator":
        """Fill a templated locator, e.g. a product name in an XPath."""

        name = self.name.format(**values) if self.name else None
        return replace(self, value=self.value.format(**values), name=name)

    def nth(self, index: int) -> "Locator":
        return replace(self, index=index)

    def resolve(self, page: Any) -> Any:
        """Return the Playwright locator for the single element this describes."""

        matches = page.locator(self.selector)
        if self.index is not None:
            return matches.nth(self.index)
        return matches.first

    def resolve_all(self, page: Any) -> Any:
        return page.locator(self.selector)

    def describe(self) -> str:
        text = f"{self.strategy.value}={self.value}"
        if self.index is not None:
            text = f"{text}[{self.index}]"
        if self.name:
            return f"{self.name} ({text})"
        return text

    def __str__(self) -> str:
        return self.describe()


class ReportStatus(str, enum.Enum):
    """Status attached to report events."""

    INFO = "info"
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    WARNING = "warning"


class ReportEvent(BaseModel):
    """Structured log event keyed to a named test case."""

    case: str
    status: ReportStatus = ReportStatus.INFO
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
