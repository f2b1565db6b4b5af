"""Browser session abstractions."""

from __future__ import annotations

import enum
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from ..config import Timeouts
from ..models import BrowserFamily


class Liveness(str, enum.Enum):
    """Result of probing a session."""

    ALIVE = "alive"
    DEAD = "dead"


class BrowserSession(ABC):
    """One running, controllable browser instance.

    Liveness is never cached: :meth:`probe` asks the browser every time.
    All interaction with a session is serialized through :attr:`lock`.
    """

    def __init__(
        self,
        family: BrowserFamily,
        timeouts: Timeouts,
        endpoint: Optional[str] = None,
        capabilities: Optional[dict[str, Any]] = None,
    ) -> None:
        self.family = family
        self.timeouts = timeouts
        self.endpoint = endpoint
        self.capabilities = dict(capabilities or {})
        self.lock = threading.RLock()

    @property
    def is_remote(self) -> bool:
        return self.endpoint is not None

    @property
    @abstractmethod
    def page(self) -> Any:
        """Return the page driven by this session."""

    @abstractmethod
    def probe(self) -> Liveness:
        """Check with a trivial round trip whether the browser still responds."""

    @abstractmethod
    def quit(self) -> None:
        """Terminate the browser. Calling it again is a no-op."""

    @abstractmethod
    def screenshot(self, path: Path) -> Path:
        """Write a PNG of the current page to ``path``."""
