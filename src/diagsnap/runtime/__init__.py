"""Runtime stat sources consumed by the diagnostic printer."""

from __future__ import annotations

from .build import main_distribution, read_build_info
from .gc_pauses import PAUSE_HISTORY, GCPauseRecorder, default_recorder
from .provider import PythonRuntimeStats, RuntimeStatsProvider, capture_stack

__all__ = [
    "RuntimeStatsProvider",
    "PythonRuntimeStats",
    "capture_stack",
    "GCPauseRecorder",
    "PAUSE_HISTORY",
    "default_recorder",
    "main_distribution",
    "read_build_info",
]
