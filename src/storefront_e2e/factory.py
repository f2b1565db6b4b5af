"""Factories for constructing components from configuration."""

from __future__ import annotations

from .browser.factory import SessionFactory
from .browser.registry import SessionRegistry
from .config import ArtifactConfig, E2EConfig, ReportConfig
from .reporting.artifacts import ScreenshotStore
from .reporting.sink import (
    CompositeReportSink,
    ConsoleReportSink,
    RecordingReportSink,
    ReportSink,
)


def build_registry(config: E2EConfig) -> SessionRegistry:
    factory = SessionFactory(config.browser, config.timeouts)
    return SessionRegistry(factory, config.browser.family, config.browser.mode)


def build_report_sink(config: ReportConfig) -> ReportSink:
    channels = [part.strip().lower() for part in config.channel.split(",") if part.strip()]
    if not channels:
        raise ValueError("At least one report channel is required")
    sinks = [_build_channel(channel) for channel in channels]
    if len(sinks) == 1:
        return sinks[0]
    return CompositeReportSink(sinks)


def _build_channel(channel: str) -> ReportSink:
    if channel == "console":
        return ConsoleReportSink()
    if channel in {"memory", "none"}:
        return RecordingReportSink()
    raise ValueError(f"Unsupported report channel: {channel}")


def build_artifact_store(config: ArtifactConfig) -> ScreenshotStore:
    return ScreenshotStore(config.screenshot_dir)
