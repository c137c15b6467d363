"""Output sinks for diagnostic dumps."""

from __future__ import annotations

from .base import OutputSink
from .console import ConsoleSink
from .logger import LoggerSink
from .memory import RecordingSink

__all__ = ["OutputSink", "ConsoleSink", "LoggerSink", "RecordingSink"]
