"""
Diagnostic snapshot printer.

Given a message and a verbosity selector, :func:`emit` captures one runtime
snapshot and writes the requested stat groups to an output sink:

1. ``enabled=False`` returns ``Ok(None)`` without touching the sink.
2. The selector is validated; unknown text tags return
   ``Err(InvalidSelector)`` and nothing is written.
3. All four groups are captured at once, whatever the selector says.
4. The message record is always written first, then stack trace, memory
   stats, GC stats and build info, each only if selected.
5. A provider failure returns ``Err(SnapshotError)`` before anything is
   written; the first sink failure stops the dump and returns
   ``Err(SinkWriteError)``.

Nothing here raises for bad input; callers who prefer exceptions can call
``.unwrap()`` on the result.

Facades
-------
- :func:`print_debug`: console output framed by start/finish banners.
- :func:`print_debug_with_log`: one log call per record, attributed to the
  caller.
- :func:`debug_from_settings`: everything driven by ``DIAGSNAP_*`` settings.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime, timedelta
from functools import lru_cache

from pydantic import ValidationError
from rich.console import Console

from .core.contracts.record import DiagnosticRecord
from .core.contracts.request import DebugOptions, DebugRequest
from .core.contracts.snapshot import BuildSnapshot, GCSnapshot, MemorySnapshot, RuntimeSnapshot
from .core.errors import DiagnosticError, InvalidSettings, SinkWriteError, SnapshotError
from .core.result import Result, err, ok
from .core.selector import Selector, parse_selector
from .core.settings import get_logger, load_settings
from .runtime.provider import PythonRuntimeStats, RuntimeStatsProvider
from .sinks.base import OutputSink
from .sinks.console import ConsoleSink
from .sinks.logger import LoggerSink

logger = logging.getLogger(__name__)

START_BANNER = "\nStart debug..."
FINISH_BANNER = "\nFinish debug..."


@lru_cache(maxsize=1)
def default_provider() -> PythonRuntimeStats:
    """Return the shared provider configured from settings."""
    cfg = load_settings()
    return PythonRuntimeStats(cfg.distribution, trace_allocations=cfg.trace_allocations)


if hasattr(os, "register_at_fork"):
    os.register_at_fork(after_in_child=default_provider.cache_clear)


# --------------------------------------------------------------------------- #
# Formatting
# --------------------------------------------------------------------------- #


def format_duration(value: timedelta | None) -> str:
    """Render a duration with the largest fitting unit, e.g. ``1.5ms``."""
    if value is None:
        return "n/a"
    seconds = value.total_seconds()
    if seconds == 0:
        return "0s"
    for unit, scale in (("s", 1.0), ("ms", 1e-3), ("µs", 1e-6)):
        if abs(seconds) >= scale:
            return f"{seconds / scale:.6g}{unit}"
    return f"{seconds / 1e-9:.6g}ns"


def _format_time(value: datetime | None) -> str:
    return value.isoformat() if value is not None else "never"


def _memory_records(mem: MemorySnapshot) -> Iterator[DiagnosticRecord]:
    fields: list[tuple[str, int | None, bool]] = [
        ("Alloc", mem.alloc, True),
        ("TotalAlloc", mem.total_alloc, True),
        ("HeapAlloc", mem.heap_alloc, True),
        ("HeapSys", mem.heap_sys, True),
        ("HeapIdle", mem.heap_idle, True),
        ("HeapInuse", mem.heap_inuse, True),
        ("HeapReleased", mem.heap_released, True),
        ("HeapObjects", mem.heap_objects, False),
        ("StackInUse", mem.stack_inuse, True),
        ("StackSys", mem.stack_sys, True),
        ("NumGC", mem.num_gc, False),
    ]
    for name, value, is_bytes in fields:
        if value is None:
            continue
        text = f"{name}: {value} bytes" if is_bytes else f"{name}: {value}"
        yield DiagnosticRecord(group="memory_stats", name=name, value=value, text=text)


def _gc_records(stats: GCSnapshot) -> Iterator[DiagnosticRecord]:
    pause_end = "[" + " ".join(_format_time(t) for t in stats.pause_end) + "]"
    quantiles = "[" + " ".join(format_duration(q) for q in stats.pause_quantiles) + "]"
    rendered = [
        ("LastGC", stats.last_gc, _format_time(stats.last_gc)),
        ("NumGC", stats.num_gc, str(stats.num_gc)),
        ("PauseTotal", stats.pause_total, format_duration(stats.pause_total)),
        ("Pause", stats.pause, format_duration(stats.pause)),
        ("PauseEnd", stats.pause_end, pause_end),
        ("PauseQuantiles", stats.pause_quantiles, quantiles),
    ]
    for name, value, text in rendered:
        yield DiagnosticRecord(group="gc_stats", name=name, value=value, text=f"{name}: {text}")


def _build_record(build: BuildSnapshot) -> DiagnosticRecord:
    blob = build.render()
    return DiagnosticRecord(
        group="build_info", name="BuildInfo", value=blob, text=f"Build Info:\n{blob}"
    )


def render_records(
    selector: Selector, message: str, snapshot: RuntimeSnapshot
) -> list[DiagnosticRecord]:
    """Turn a snapshot into the ordered records selected by ``selector``."""
    records = [DiagnosticRecord(group="message", name="Message", value=message, text=message)]

    if selector.includes(Selector.STACK_TRACE):
        records.append(
            DiagnosticRecord(
                group="stack_trace",
                name="StackTrace",
                value=snapshot.stack,
                text=f"Stack Trace:\n{snapshot.stack}",
            )
        )
    if selector.includes(Selector.MEMORY_STATS):
        records.extend(_memory_records(snapshot.memory))
    if selector.includes(Selector.GC_STATS):
        records.extend(_gc_records(snapshot.gc))
    if selector.includes(Selector.BUILD_INFO) and snapshot.build is not None:
        records.append(_build_record(snapshot.build))
    return records


# --------------------------------------------------------------------------- #
# Core operation
# --------------------------------------------------------------------------- #


def emit(
    request: DebugRequest,
    sink: OutputSink,
    provider: RuntimeStatsProvider | None = None,
) -> Result[None, DiagnosticError]:
    """Write a diagnostic dump for ``request`` to ``sink``."""
    if not request.enabled:
        return ok(None)

    parsed = parse_selector(request.selector)
    if parsed.is_err():
        error = parsed.unwrap_err()
        logger.debug("Rejected debug selector %r", error.value)
        return err(error)

    try:
        snapshot = (provider if provider is not None else default_provider()).snapshot()
    except ValidationError as exc:
        logger.debug("Settings rejected while building the default provider: %s", exc)
        return err(InvalidSettings(exc))
    except Exception as exc:
        logger.debug("Runtime snapshot failed: %s", exc)
        return err(SnapshotError(exc))

    # sink.write is called from this frame; LoggerSink.call_depth relies on it.
    for record in render_records(parsed.unwrap(), request.message, snapshot):
        try:
            sink.write(record)
        except Exception as exc:
            logger.debug("Sink %r rejected %s record: %s", sink, record.name, exc)
            return err(SinkWriteError(record, exc))
    return ok(None)


# --------------------------------------------------------------------------- #
# Facades
# --------------------------------------------------------------------------- #


def _banner(sink: ConsoleSink, text: str) -> Result[None, DiagnosticError]:
    record = DiagnosticRecord(group="message", name="Banner", value=text, text=text)
    try:
        sink.write(record)
    except Exception as exc:
        return err(SinkWriteError(record, exc))
    return ok(None)


def print_debug(
    message: str,
    options: DebugOptions,
    *,
    provider: RuntimeStatsProvider | None = None,
    console: Console | None = None,
    banner: bool = True,
) -> Result[None, DiagnosticError]:
    """Print a dump to the console, framed by start/finish banners."""
    request = options.to_request(message)
    if not request.enabled:
        return ok(None)
    parsed = parse_selector(request.selector)
    if parsed.is_err():
        return err(parsed.unwrap_err())

    sink = ConsoleSink(console)
    request = replace(request, selector=parsed.unwrap())
    if not banner:
        return emit(request, sink, provider)
    return (
        _banner(sink, START_BANNER)
        .flat_map(lambda _: emit(request, sink, provider))
        .flat_map(lambda _: _banner(sink, FINISH_BANNER))
    )


def print_debug_with_log(
    message: str,
    options: DebugOptions,
    log: logging.Logger,
    *,
    call_depth: int = 1,
    provider: RuntimeStatsProvider | None = None,
) -> Result[None, DiagnosticError]:
    """Log a dump through ``log``, one record per call.

    Records are attributed ``call_depth`` frames above this function
    (1 = the code calling ``print_debug_with_log``).
    """
    sink = LoggerSink(log, call_depth=call_depth + 1)
    return emit(options.to_request(message), sink, provider)


def debug_from_settings(
    message: str,
    sink: OutputSink | None = None,
    *,
    provider: RuntimeStatsProvider | None = None,
) -> Result[None, DiagnosticError]:
    """Dump according to ``DIAGSNAP_ENABLED`` / ``DIAGSNAP_LEVEL``.

    Without an explicit ``sink`` the dump goes to the ``diagsnap.dump``
    logger, attributed per ``DIAGSNAP_LOG_CALL_DEPTH``.
    Settings that fail validation come back as ``Err(InvalidSettings)``.
    """
    try:
        cfg = load_settings()
    except ValidationError as exc:
        logger.debug("Rejected diagsnap settings: %s", exc)
        return err(InvalidSettings(exc))
    request = DebugRequest(enabled=cfg.enabled, selector=cfg.level, message=message)
    if sink is None:
        sink = LoggerSink(get_logger("diagsnap.dump"), call_depth=cfg.log_call_depth + 1)
    return emit(request, sink, provider)


__all__ = [
    "emit",
    "render_records",
    "format_duration",
    "default_provider",
    "print_debug",
    "print_debug_with_log",
    "debug_from_settings",
    "START_BANNER",
    "FINISH_BANNER",
]
