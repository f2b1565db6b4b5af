from pathlib import Path

import pytest

from storefront_e2e.config import ArtifactConfig, ReportConfig
from storefront_e2e.factory import build_artifact_store, build_report_sink
from storefront_e2e.models import ReportEvent, ReportStatus
from storefront_e2e.reporting.sink import (
    CompositeReportSink,
    ConsoleReportSink,
    RecordingReportSink,
)


@pytest.mark.parametrize(
    ("channel", "sink_type"),
    [("console", ConsoleReportSink), ("memory", RecordingReportSink), ("none", RecordingReportSink)],
)
def test_single_channel_builds_its_sink(channel: str, sink_type: type) -> None:
    assert type(build_report_sink(ReportConfig(channel=channel))) is sink_type


def test_several_channels_fan_out_through_composite() -> None:
    sink = build_report_sink(ReportConfig(channel="Console, memory"))

    assert isinstance(sink, CompositeReportSink)
    console, memory = sink.sinks
    assert isinstance(console, ConsoleReportSink)
    assert isinstance(memory, RecordingReportSink)

    event = ReportEvent(case="add-to-cart", status=ReportStatus.PASS, message="Scenario passed")
    sink.record(event)
    assert memory.events == [event]


@pytest.mark.parametrize("channel", ["", " , ", "console,extent"])
def test_unknown_or_empty_channel_is_rejected(channel: str) -> None:
    with pytest.raises(ValueError):
        build_report_sink(ReportConfig(channel=channel))


def test_artifact_store_uses_configured_directory(tmp_path: Path) -> None:
    store = build_artifact_store(ArtifactConfig(screenshot_dir=tmp_path / "shots"))

    assert store.directory == tmp_path / "shots"
