"""In-memory sink."""

from __future__ import annotations

import threading

from ..core.contracts.record import DiagnosticRecord


class RecordingSink:
    """Keep every record written to it, in order.

    Handy for hosts that want to attach a dump to an error report, and for
    tests.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[DiagnosticRecord] = []

    def write(self, record: DiagnosticRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> tuple[DiagnosticRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def lines(self) -> list[str]:
        """Return the rendered text of every record."""
        return [record.text for record in self.records]

    def names(self) -> list[tuple[str, str]]:
        """Return ``(group, name)`` pairs, the stable shape of a dump."""
        return [(record.group, record.name) for record in self.records]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self.records)


__all__ = ["RecordingSink"]
