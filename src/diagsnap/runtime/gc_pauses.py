"""
Garbage-collector pause history.

CPython does not keep a history of collection pauses, so this module records
one through ``gc.callbacks``: the ``"start"`` phase stamps a monotonic clock,
the ``"stop"`` phase turns it into a pause and keeps it in a bounded ring
buffer (the last :data:`PAUSE_HISTORY` pauses).

Callbacks fire in whichever thread triggered the collection, including a
thread that is itself inside :meth:`GCPauseRecorder.snapshot`. The callback
therefore never takes a lock: it only puts the pause on a
``queue.SimpleQueue``, whose ``put`` is reentrant. ``snapshot`` drains that
queue into the ring buffer under the lock. The recorder only observes; it
never triggers or tunes collections.
"""

from __future__ import annotations

import gc
import os
import queue
import threading
import time
from collections import deque
from datetime import UTC, datetime, timedelta
from typing import Any

from ..core.contracts.snapshot import GCSnapshot

PAUSE_HISTORY = 256


def _quantiles(pauses: list[timedelta]) -> tuple[timedelta, ...]:
    """Return min, 25%, 50%, 75% and max of ``pauses`` (nearest rank)."""
    if not pauses:
        return ()
    ordered = sorted(pauses)
    last = len(ordered) - 1
    return tuple(ordered[round(last * q / 4)] for q in range(5))


class GCPauseRecorder:
    """Collect pause durations and end times of completed collections."""

    def __init__(self, history: int = PAUSE_HISTORY) -> None:
        self._lock = threading.Lock()
        self._started: float | None = None
        self._pending: queue.SimpleQueue[tuple[timedelta, datetime]] = queue.SimpleQueue()
        self._pauses: deque[tuple[timedelta, datetime]] = deque(maxlen=history)
        self._pause_total = timedelta(0)
        self._installed = False

    # ------------------------------------------------------------------ hooks

    def _callback(self, phase: str, info: dict[str, Any]) -> None:
        if phase == "start":
            self._started = time.perf_counter()
            return
        if phase != "stop" or self._started is None:
            return
        pause = timedelta(seconds=time.perf_counter() - self._started)
        self._started = None
        self._pending.put((pause, datetime.now(UTC)))

    def install(self) -> None:
        """Register on ``gc.callbacks`` (idempotent)."""
        if not self._installed:
            gc.callbacks.append(self._callback)
            self._installed = True

    def uninstall(self) -> None:
        """Remove the callback; recorded history is kept."""
        if self._installed:
            gc.callbacks.remove(self._callback)
            self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def _reset_lock(self) -> None:
        # A forked child may inherit the lock in the held state.
        self._lock = threading.Lock()

    # --------------------------------------------------------------- snapshot

    def _drain(self) -> None:
        # Caller holds self._lock.
        while True:
            try:
                pause, end = self._pending.get_nowait()
            except queue.Empty:
                return
            self._pauses.appendleft((pause, end))
            self._pause_total += pause

    def snapshot(self, num_gc: int | None = None) -> GCSnapshot:
        """Return the recorded history as a :class:`GCSnapshot`.

        ``num_gc`` defaults to the collector's own completed-collection count,
        which also covers collections that ran before the recorder was
        installed.
        """
        with self._lock:
            self._drain()
            pauses = list(self._pauses)
            pause_total = self._pause_total
        if num_gc is None:
            num_gc = sum(gen["collections"] for gen in gc.get_stats())
        durations = [pause for pause, _ in pauses]
        return GCSnapshot(
            last_gc=pauses[0][1] if pauses else None,
            num_gc=num_gc,
            pause_total=pause_total,
            pause=durations[0] if durations else None,
            pause_end=tuple(end for _, end in pauses),
            pause_quantiles=_quantiles(durations),
        )


_default_recorder: GCPauseRecorder | None = None
_default_lock = threading.Lock()


def default_recorder() -> GCPauseRecorder:
    """Return the process-wide recorder, installing it on first use."""
    global _default_recorder
    with _default_lock:
        if _default_recorder is None:
            _default_recorder = GCPauseRecorder()
            _default_recorder.install()
        return _default_recorder


def _after_fork_in_child() -> None:
    global _default_lock
    _default_lock = threading.Lock()
    if _default_recorder is not None:
        _default_recorder._reset_lock()


if hasattr(os, "register_at_fork"):
    os.register_at_fork(after_in_child=_after_fork_in_child)


__all__ = ["GCPauseRecorder", "PAUSE_HISTORY", "default_recorder"]
