"""Runs scenarios, one session acquire/release cycle per scenario."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ..browser.base import BrowserSession
from ..browser.registry import SessionRegistry
from ..config import E2EConfig
from ..errors import ConditionTimeoutError, FrameworkError
from ..models import ReportEvent, ReportStatus
from ..reporting.artifacts import ArtifactStore
from ..reporting.sink import ReportSink
from ..sync.actions import ActionSynchronizer
from .scenarios import Scenario, ScenarioContext, ScenarioSkipped

LOGGER = logging.getLogger(__name__)


class ScenarioStatus(str, enum.Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ScenarioResult:
    """Outcome of a single scenario."""

    name: str
    status: ScenarioStatus
    elapsed: float
    message: Optional[str] = None
    screenshot: Optional[Path] = None


@dataclass
class RunSummary:
    """Aggregated outcome of a suite run."""

    results: list[ScenarioResult] = field(default_factory=list)

    def count(self, status: ScenarioStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def passed(self) -> int:
        return self.count(ScenarioStatus.PASSED)

    @property
    def failed(self) -> int:
        return self.count(ScenarioStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(ScenarioStatus.SKIPPED)

    @property
    def success(self) -> bool:
        return self.failed == 0


class SuiteRunner:
    """Run scenarios against sessions from a registry and report each outcome.

    A failing scenario is reported and aborted; the rest of the run goes on.
    """

    def __init__(
        self,
        config: E2EConfig,
        registry: SessionRegistry,
        sink: ReportSink,
        artifacts: Optional[ArtifactStore] = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._sink = sink
        self._artifacts = artifacts

    def run(self, scenarios: Iterable[Scenario]) -> RunSummary:
        summary = RunSummary()
        try:
            for item in scenarios:
                summary.results.append(self.run_one(item))
        finally:
            self._registry.shutdown()
        LOGGER.info(
            "Run finished: %d passed, %d failed, %d skipped",
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        return summary

    def run_one(self, scenario: Scenario) -> ScenarioResult:
        LOGGER.info("Starting scenario %s", scenario.name)
        self._record(scenario.name, ReportStatus.INFO, f"Starting: {scenario.description}")
        started = time.monotonic()
        session: Optional[BrowserSession] = None
        try:
            session = self._registry.acquire()
            actions = ActionSynchronizer(
                session,
                self._config.timeouts,
                artifacts=self._artifacts if self._config.artifacts.capture_on_failure else None,
            )
            context = ScenarioContext(
                name=scenario.name,
                config=self._config,
                actions=actions,
                sink=self._sink,
            )
            scenario.run(context)
        except ScenarioSkipped as exc:
            return self._finish(scenario, ScenarioStatus.SKIPPED, started, str(exc))
        except (AssertionError, FrameworkError) as exc:
            screenshot = self._failure_screenshot(scenario, session, exc)
            return self._finish(scenario, ScenarioStatus.FAILED, started, str(exc), screenshot)
        except Exception as exc:
            LOGGER.exception("Unhandled error in scenario %s", scenario.name)
            screenshot = self._failure_screenshot(scenario, session, exc)
            message = f"{type(exc).__name__}: {exc}"
            return self._finish(scenario, ScenarioStatus.FAILED, started, message, screenshot)
        finally:
            self._release()
        return self._finish(scenario, ScenarioStatus.PASSED, started, "Scenario passed")

    def _finish(
        self,
        scenario: Scenario,
        status: ScenarioStatus,
        started: float,
        message: str,
        screenshot: Optional[Path] = None,
    ) -> ScenarioResult:
        result = ScenarioResult(
            name=scenario.name,
            status=status,
            elapsed=time.monotonic() - started,
            message=message,
            screenshot=screenshot,
        )
        report_status = {
            ScenarioStatus.PASSED: ReportStatus.PASS,
            ScenarioStatus.FAILED: ReportStatus.FAIL,
            ScenarioStatus.SKIPPED: ReportStatus.SKIP,
        }[status]
        data: dict[str, object] = {"elapsed": round(result.elapsed, 3)}
        if screenshot is not None:
            data["screenshot"] = str(screenshot)
        self._record(scenario.name, report_status, message, data)
        return result

    def _failure_screenshot(
        self,
        scenario: Scenario,
        session: Optional[BrowserSession],
        exc: BaseException,
    ) -> Optional[Path]:
        if isinstance(exc, ConditionTimeoutError) and exc.screenshot is not None:
            return exc.screenshot
        if session is None or self._artifacts is None:
            return None
        if not self._config.artifacts.capture_on_failure:
            return None
        try:
            return self._artifacts.capture_screenshot(session, scenario.name)
        except Exception as capture_error:
            self._record(
                scenario.name,
                ReportStatus.WARNING,
                f"Failed to capture screenshot: {capture_error}",
            )
            return None

    def _release(self) -> None:
        try:
            self._registry.release()
        except Exception:  # pragma: no cover - defensive logging
            LOGGER.exception("Failed to release browser session")

    def _record(
        self,
        case: str,
        status: ReportStatus,
        message: str,
        data: Optional[dict[str, object]] = None,
    ) -> None:
        self._sink.record(ReportEvent(case=case, status=status, message=message, data=data or {}))
