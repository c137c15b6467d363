"""Console sink backed by a ``rich`` console."""

from __future__ import annotations

from rich.console import Console

from ..core.contracts.record import DiagnosticRecord


class ConsoleSink:
    """Print each record's text as-is (no markup, no highlighting, no wrapping)."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()

    def line(self, text: str) -> None:
        """Print a free line that is not part of the record stream."""
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def write(self, record: DiagnosticRecord) -> None:
        self.line(record.text)


__all__ = ["ConsoleSink"]
