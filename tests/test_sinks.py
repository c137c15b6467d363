"""Tests for the console, logger and recording sinks."""

from __future__ import annotations

import io
import logging
from typing import Any

import pytest
from rich.console import Console

from diagsnap import DebugRequest, Selector, emit
from diagsnap.core.contracts.record import DiagnosticRecord
from diagsnap.sinks import ConsoleSink, LoggerSink, OutputSink, RecordingSink


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


def test_sinks_satisfy_protocol() -> None:
    """All shipped sinks implement the OutputSink capability."""
    console, _ = _console()
    logger = logging.getLogger("tests.diagsnap.protocol")
    for sink in (ConsoleSink(console), LoggerSink(logger), RecordingSink()):
        assert isinstance(sink, OutputSink)


def test_console_sink_prints_text_verbatim() -> None:
    """Markup-looking text is printed literally."""
    console, buffer = _console()
    sink = ConsoleSink(console)
    sink.write(DiagnosticRecord(group="gc_stats", name="PauseEnd", value=(), text="PauseEnd: [bold]"))
    assert buffer.getvalue() == "PauseEnd: [bold]\n"


def test_console_sink_with_emit(provider: Any) -> None:
    """A memory dump lands on the console one field per line."""
    console, buffer = _console()
    result = emit(DebugRequest(selector="MEM", message="checkpoint A"), ConsoleSink(console), provider)
    assert result.is_ok()
    lines = buffer.getvalue().splitlines()
    assert lines[0] == "checkpoint A"
    assert lines[1] == "Alloc: 1024 bytes"


def test_logger_sink_attributes_records_to_caller(
    caplog: pytest.LogCaptureFixture, provider: Any
) -> None:
    """call_depth=1 points funcName at the code calling emit()."""
    logger = logging.getLogger("tests.diagsnap.logger_sink")
    caplog.set_level(logging.INFO, logger=logger.name)

    emit(DebugRequest(selector=Selector.GC_STATS, message="gc now"), LoggerSink(logger), provider)

    records = [r for r in caplog.records if r.name == logger.name]
    assert [r.getMessage() for r in records][0] == "gc now"
    assert all(r.funcName == "test_logger_sink_attributes_records_to_caller" for r in records)
    assert [getattr(r, "diag_field") for r in records[1:]][0] == "LastGC"
    assert all(getattr(r, "diag_group") == "gc_stats" for r in records[1:])


def test_logger_sink_level_and_depth_zero(
    caplog: pytest.LogCaptureFixture, provider: Any
) -> None:
    """Level is configurable; call_depth=0 attributes to emit itself."""
    logger = logging.getLogger("tests.diagsnap.logger_level")
    caplog.set_level(logging.DEBUG, logger=logger.name)

    sink = LoggerSink(logger, level=logging.WARNING, call_depth=0)
    emit(DebugRequest(message="warn"), sink, provider)

    (record,) = [r for r in caplog.records if r.name == logger.name]
    assert record.levelno == logging.WARNING
    assert record.funcName == "emit"


def test_logger_sink_rejects_negative_depth() -> None:
    """Negative call depths make no sense."""
    with pytest.raises(ValueError):
        LoggerSink(logging.getLogger("tests.diagsnap.bad"), call_depth=-1)


def test_recording_sink_collects_in_order() -> None:
    """RecordingSink keeps records in write order and can be cleared."""
    sink = RecordingSink()
    sink.write(DiagnosticRecord(group="message", name="Message", value="a", text="a"))
    sink.write(DiagnosticRecord(group="memory_stats", name="NumGC", value=1, text="NumGC: 1"))
    assert sink.lines() == ["a", "NumGC: 1"]
    assert sink.names() == [("message", "Message"), ("memory_stats", "NumGC")]
    sink.clear()
    assert len(sink) == 0
