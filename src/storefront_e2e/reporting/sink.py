"""Report sinks receiving per-test-case events."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import Counter
from typing import Iterable, List, Optional

from rich.console import Console

from ..models import ReportEvent, ReportStatus


class ReportSink(ABC):
    """Interface for recording structured events about test cases."""

    @abstractmethod
    def record(self, event: ReportEvent) -> None:
        """Record a report event."""


class ConsoleReportSink(ReportSink):
    """Print events to the console using Rich."""

    STYLES = {
        ReportStatus.INFO: "cyan",
        ReportStatus.PASS: "green",
        ReportStatus.FAIL: "red",
        ReportStatus.SKIP: "yellow",
        ReportStatus.WARNING: "dark_orange",
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console()

    def record(self, event: ReportEvent) -> None:
        style = self.STYLES.get(event.status, "white")
        self._console.print(
            f"[{event.status.value.upper()}] {event.case}: {event.message}",
            style=style,
            markup=False,
        )
        if event.data:
            self._console.print(event.data, style="dim")


class RecordingReportSink(ReportSink):
    """Keep events in memory; used for run summaries and in tests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[ReportEvent] = []

    def record(self, event: ReportEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[ReportEvent]:
        with self._lock:
            return list(self._events)

    def for_case(self, case: str) -> List[ReportEvent]:
        return [event for event in self.events if event.case == case]

    def counts(self) -> Counter[ReportStatus]:
        return Counter(event.status for event in self.events)


class CompositeReportSink(ReportSink):
    """Fan-out sink that propagates events to multiple sinks."""

    def __init__(self, sinks: Iterable[ReportSink]) -> None:
        self._sinks = list(sinks)

    @property
    def sinks(self) -> List[ReportSink]:
        return list(self._sinks)

    def record(self, event: ReportEvent) -> None:
        for sink in self._sinks:
            sink.record(event)
