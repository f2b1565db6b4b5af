"""Bounded polling of wait conditions against a live page."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from playwright.sync_api import Error as PlaywrightError

from ..errors import ConditionTimeoutError
from ..models import Locator

if TYPE_CHECKING:
    from .conditions import WaitCondition

LOGGER = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.25

Clock = Callable[[], float]


@dataclass(frozen=True)
class Deadline:
    """Absolute point in time after which a wait gives up."""

    started_at: float
    expires_at: float
    clock: Clock = field(default=time.monotonic, compare=False, repr=False)

    @classmethod
    def after(cls, timeout: float, clock: Clock = time.monotonic) -> "Deadline":
        now = clock()
        return cls(started_at=now, expires_at=now + max(timeout, 0.0), clock=clock)

    def remaining(self) -> float:
        return max(self.expires_at - self.clock(), 0.0)

    def elapsed(self) -> float:
        return self.clock() - self.started_at

    def expired(self) -> bool:
        return self.clock() >= self.expires_at


@dataclass(frozen=True)
class Satisfied:
    """The condition held; ``value`` is what its check returned."""

    value: Any
    elapsed: float

    ok = True

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class TimedOut:
    """The condition never held before the deadline."""

    condition: str
    locator: Optional[Locator]
    elapsed: float
    cause: Optional[BaseException] = None

    ok = False

    def __bool__(self) -> bool:
        return False

    def to_error(
        self,
        error_type: type[ConditionTimeoutError] = ConditionTimeoutError,
    ) -> ConditionTimeoutError:
        return error_type(self.condition, self.locator, self.elapsed, self.cause)


WaitOutcome = Union[Satisfied, TimedOut]


class ConditionPoller:
    """Evaluate a condition repeatedly until it holds or the deadline passes.

    Exceptions listed in ``ignored_exceptions`` (Playwright errors by default,
    e.g. an element detached mid-evaluation) count as "not yet satisfied".
    If the evaluation made after the deadline raises one, it becomes the
    ``cause`` of the returned :class:`TimedOut`. Any other exception
    propagates.
    """

    def __init__(
        self,
        interval: float = DEFAULT_POLL_INTERVAL,
        *,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        ignored_exceptions: tuple[type[BaseException], ...] = (PlaywrightError,),
    ) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._ignored = ignored_exceptions

    def deadline(self, timeout: float) -> Deadline:
        return Deadline.after(timeout, clock=self._clock)

    def poll(self, condition: "WaitCondition", page: Any, deadline: Deadline) -> WaitOutcome:
        attempts = 0
        while True:
            final = deadline.expired()
            attempts += 1
            cause: Optional[BaseException] = None
            try:
                value = condition.check(page)
            except self._ignored as exc:
                value = None
                cause = exc
            if value:
                return Satisfied(value=value, elapsed=deadline.elapsed())
            if final:
                LOGGER.debug(
                    "Condition %s timed out after %d attempts",
                    condition.describe(),
                    attempts,
                )
                return TimedOut(
                    condition=condition.name,
                    locator=condition.locator,
                    elapsed=deadline.elapsed(),
                    cause=cause,
                )
            self._sleep(min(self.interval, deadline.remaining()))
