"""diagsnap: on-demand diagnostic dumps of Python runtime statistics.

Typical use::

    from diagsnap import DebugRequest, Selector, emit
    from diagsnap.sinks import ConsoleSink

    emit(DebugRequest(selector=Selector.ALL, message="checkpoint A"), ConsoleSink())
"""

from __future__ import annotations

from .core.contracts import DebugOptions, DebugRequest, DiagnosticRecord
from .core.errors import (
    DiagnosticError,
    InvalidSelector,
    InvalidSettings,
    SinkWriteError,
    SnapshotError,
)
from .core.result import Err, Ok, Result
from .core.selector import Selector, parse_selector
from .printer import (
    debug_from_settings,
    emit,
    print_debug,
    print_debug_with_log,
    render_records,
)

__all__ = [
    "__version__",
    "DebugOptions",
    "DebugRequest",
    "DiagnosticRecord",
    "DiagnosticError",
    "InvalidSelector",
    "SinkWriteError",
    "SnapshotError",
    "InvalidSettings",
    "Result",
    "Ok",
    "Err",
    "Selector",
    "parse_selector",
    "emit",
    "render_records",
    "print_debug",
    "print_debug_with_log",
    "debug_from_settings",
]
__version__ = "0.1.0"
