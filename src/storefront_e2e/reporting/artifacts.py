"""Storage of failure artifacts."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Callable

from ..browser.base import BrowserSession

LOGGER = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


class ArtifactStore(ABC):
    """Interface for persisting artifacts captured from a session."""

    @abstractmethod
    def capture_screenshot(self, session: BrowserSession, name: str) -> Path:
        """Capture the session's current page and return the file path."""


class ScreenshotStore(ArtifactStore):
    """Write screenshots as ``<name>_<timestamp>.png`` into a directory."""

    def __init__(
        self,
        directory: Path,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._directory = Path(directory)
        self._now = now

    @property
    def directory(self) -> Path:
        return self._directory

    def capture_screenshot(self, session: BrowserSession, name: str) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        timestamp = self._now().strftime("%Y-%m-%d_%H-%M-%S-%f")
        path = self._directory / f"{safe_name(name)}_{timestamp}.png"
        session.screenshot(path)
        LOGGER.info("Screenshot saved: %s", path)
        return path


def safe_name(name: str) -> str:
    cleaned = _UNSAFE.sub("_", name).strip("_")
    return cleaned[:80] or "screenshot"
