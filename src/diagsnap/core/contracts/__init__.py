"""Value contracts shared by the printer, the runtime provider and the sinks."""

from __future__ import annotations

from .record import DiagnosticRecord, RecordGroup
from .request import DebugOptions, DebugRequest
from .snapshot import BuildSnapshot, GCSnapshot, MemorySnapshot, RuntimeSnapshot

__all__ = [
    "DebugOptions",
    "DebugRequest",
    "DiagnosticRecord",
    "RecordGroup",
    "BuildSnapshot",
    "GCSnapshot",
    "MemorySnapshot",
    "RuntimeSnapshot",
]
