"""Output sink capability."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.contracts.record import DiagnosticRecord


@runtime_checkable
class OutputSink(Protocol):
    """Destination that accepts diagnostic records one at a time.

    ``write`` either accepts the record or raises; the printer turns the
    exception into a ``SinkWriteError`` and stops the dump. Sinks shared
    between threads are responsible for their own locking.
    """

    def write(self, record: DiagnosticRecord) -> None: ...


__all__ = ["OutputSink"]
