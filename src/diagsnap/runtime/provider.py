"""
Runtime stats providers.

The printer never reads process-wide counters itself; it asks a
:class:`RuntimeStatsProvider` for one :class:`RuntimeSnapshot` per dump. This
keeps the printer testable with a deterministic fake, while
:class:`PythonRuntimeStats` reads the real interpreter and process.

Where the numbers come from
---------------------------
- ``stack``: ``traceback`` of the calling thread, with this package's own
  frames trimmed from the innermost end.
- ``alloc`` / ``total_alloc``: ``tracemalloc`` current and peak traced bytes.
- ``heap_*``: process resident/virtual sizes from ``psutil``.
- ``heap_objects`` / ``num_gc``: the ``gc`` module.
- ``stack_sys``: soft ``RLIMIT_STACK`` (POSIX only).
- GC pauses: :mod:`diagsnap.runtime.gc_pauses`.
- build: :mod:`diagsnap.runtime.build`.
"""

from __future__ import annotations

import gc
import logging
import os
import threading
import traceback
import tracemalloc
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

import psutil

from ..core.contracts.snapshot import BuildSnapshot, MemorySnapshot, RuntimeSnapshot
from .build import read_build_info
from .gc_pauses import GCPauseRecorder, default_recorder

try:
    import resource
except ImportError:  # Windows
    resource = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_PACKAGE_DIRS = (
    str(Path(__file__).parent.parent) + os.sep,
    str(Path(__file__).resolve().parent.parent) + os.sep,
)


@runtime_checkable
class RuntimeStatsProvider(Protocol):
    """Anything able to produce a :class:`RuntimeSnapshot` on demand."""

    def snapshot(self) -> RuntimeSnapshot: ...


def capture_stack() -> str:
    """Format the calling thread's stack, ending at the first non-diagsnap frame."""
    frames = traceback.extract_stack()
    while frames and frames[-1].filename.startswith(_PACKAGE_DIRS):
        frames.pop()
    thread = threading.current_thread()
    header = f"Thread {thread.name} ({thread.ident}), most recent call last:\n"
    return header + "".join(traceback.format_list(frames)).rstrip("\n")


def _stack_limit() -> int | None:
    if resource is None:
        return None
    soft, _ = resource.getrlimit(resource.RLIMIT_STACK)
    if soft == resource.RLIM_INFINITY or soft < 0:
        return None
    return soft


class PythonRuntimeStats:
    """Read stats from the running interpreter and process.

    Parameters
    ----------
    distribution:
        Distribution whose metadata is reported as build info. ``None``
        infers it from ``__main__``; build info is absent if that fails.
    trace_allocations:
        Start ``tracemalloc`` now (if not already tracing) so ``Alloc`` and
        ``TotalAlloc`` carry real values. Tracing has a runtime cost.
    recorder:
        GC pause recorder; defaults to the process-wide one.
    """

    def __init__(
        self,
        distribution: str | None = None,
        *,
        trace_allocations: bool = False,
        recorder: GCPauseRecorder | None = None,
    ) -> None:
        self.distribution = distribution
        self.recorder = recorder if recorder is not None else default_recorder()
        self._process = psutil.Process()
        if trace_allocations and not tracemalloc.is_tracing():
            tracemalloc.start()

    def process(self) -> psutil.Process:
        """Return a handle on the current process, rebuilt after a fork."""
        if self._process.pid != os.getpid():
            self._process = psutil.Process()
        return self._process

    def memory(self) -> MemorySnapshot:
        """Read memory counters of the calling process."""
        if tracemalloc.is_tracing():
            current, peak = tracemalloc.get_traced_memory()
        else:
            current, peak = 0, 0

        process = self.process()
        mem = process.memory_info()
        shared = getattr(mem, "shared", 0)
        try:
            swapped = getattr(process.memory_full_info(), "swap", 0)
        except psutil.Error as exc:
            logger.debug("memory_full_info unavailable: %s", exc)
            swapped = 0

        return MemorySnapshot(
            alloc=current,
            total_alloc=peak,
            heap_alloc=max(mem.rss - shared, 0),
            heap_sys=mem.vms,
            heap_idle=max(mem.vms - mem.rss, 0),
            heap_inuse=mem.rss,
            heap_released=swapped,
            heap_objects=len(gc.get_objects()),
            stack_inuse=None,
            stack_sys=_stack_limit(),
            num_gc=sum(gen["collections"] for gen in gc.get_stats()),
        )

    def build(self) -> BuildSnapshot | None:
        """Read build metadata, or ``None`` when unavailable."""
        return read_build_info(self.distribution)

    def snapshot(self) -> RuntimeSnapshot:
        """Capture all four stat groups at once."""
        memory = self.memory()
        return RuntimeSnapshot(
            captured_at=datetime.now(UTC),
            stack=capture_stack(),
            memory=memory,
            gc=self.recorder.snapshot(num_gc=memory.num_gc),
            build=self.build(),
        )


__all__ = ["RuntimeStatsProvider", "PythonRuntimeStats", "capture_stack"]
