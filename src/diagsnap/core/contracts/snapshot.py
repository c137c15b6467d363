"""
Runtime snapshot contracts.

These are the read-only values a :class:`~diagsnap.runtime.provider.RuntimeStatsProvider`
hands to the printer. One :class:`RuntimeSnapshot` is captured per dump, at a
single instant, and discarded when the call returns.

Design Notes
------------
- **Immutability**: all snapshots are ``frozen=True`` dataclasses.
- **Optional fields**: ``stack_inuse`` / ``stack_sys`` are ``None`` when the
  platform cannot report them; the printer then skips those lines. A missing
  ``build`` means no build metadata is available, which is not an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True)
class MemorySnapshot:
    """
    Memory counters of the process.

    Attributes
    ----------
    alloc : int
        Bytes currently allocated by traced Python objects (0 when
        ``tracemalloc`` is not tracing).
    total_alloc : int
        Peak traced bytes since tracing started.
    heap_alloc : int
        Private resident bytes (resident minus shared pages).
    heap_sys : int
        Virtual memory reserved by the process.
    heap_idle : int
        Reserved but not resident bytes.
    heap_inuse : int
        Resident set size.
    heap_released : int
        Bytes swapped out of memory, when the platform reports it.
    heap_objects : int
        Live objects tracked by the garbage collector.
    stack_inuse : int | None
        Bytes of stack in use, if known.
    stack_sys : int | None
        Bytes reserved for the main thread stack, if known.
    num_gc : int
        Completed collections across all generations.
    """

    alloc: int = 0
    total_alloc: int = 0
    heap_alloc: int = 0
    heap_sys: int = 0
    heap_idle: int = 0
    heap_inuse: int = 0
    heap_released: int = 0
    heap_objects: int = 0
    stack_inuse: int | None = None
    stack_sys: int | None = None
    num_gc: int = 0


@dataclass(frozen=True, slots=True)
class GCSnapshot:
    """Garbage-collector pause history, most recent pause first."""

    last_gc: datetime | None = None
    num_gc: int = 0
    pause_total: timedelta = timedelta(0)
    pause: timedelta | None = None
    pause_end: tuple[datetime, ...] = ()
    pause_quantiles: tuple[timedelta, ...] = ()


@dataclass(frozen=True, slots=True)
class BuildSnapshot:
    """Metadata of the distribution the running program was installed from."""

    distribution: str
    version: str
    requires: tuple[str, ...] = ()
    python_implementation: str = ""
    python_version: str = ""
    executable: str = ""
    platform: str = ""

    def render(self) -> str:
        """Return a multi-line, human readable blob of the build metadata."""
        lines = [
            f"python\t{self.python_implementation} {self.python_version}",
            f"path\t{self.executable}",
            f"mod\t{self.distribution}\t{self.version}",
        ]
        lines.extend(f"dep\t{req}" for req in self.requires)
        lines.append(f"platform\t{self.platform}")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class RuntimeSnapshot:
    """Everything a single dump may print, captured at ``captured_at``."""

    captured_at: datetime
    stack: str = ""
    memory: MemorySnapshot = field(default_factory=MemorySnapshot)
    gc: GCSnapshot = field(default_factory=GCSnapshot)
    build: BuildSnapshot | None = None


__all__ = ["MemorySnapshot", "GCSnapshot", "BuildSnapshot", "RuntimeSnapshot"]
