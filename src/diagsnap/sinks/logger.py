"""
Structured logger sink.

Each record becomes one ``logging`` call whose message is the rendered text
and whose ``extra`` carries ``diag_group`` / ``diag_field`` / ``diag_value``
for handlers that format key/value output.

Call-site attribution
---------------------
Without help, ``%(funcName)s`` / ``%(lineno)d`` would point at this module.
``call_depth`` says how many frames above :func:`diagsnap.printer.emit` the
record should be attributed to: ``1`` (the default) is whoever called
``emit``; wrappers around ``emit`` add one per extra layer.
"""

from __future__ import annotations

import logging

from ..core.contracts.record import DiagnosticRecord

# write() -> emit()
_FRAMES_TO_EMIT = 2


class LoggerSink:
    """Send records to a :class:`logging.Logger`."""

    def __init__(
        self,
        logger: logging.Logger,
        level: int = logging.INFO,
        call_depth: int = 1,
    ) -> None:
        if call_depth < 0:
            raise ValueError("call_depth must be >= 0")
        self.logger = logger
        self.level = level
        self.call_depth = call_depth

    @property
    def stacklevel(self) -> int:
        """The ``stacklevel`` handed to ``Logger.log``."""
        return _FRAMES_TO_EMIT + self.call_depth

    def write(self, record: DiagnosticRecord) -> None:
        self.logger.log(
            self.level,
            record.text,
            extra=record.fields(),
            stacklevel=self.stacklevel,
        )


__all__ = ["LoggerSink"]
