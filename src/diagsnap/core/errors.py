"""Error hierarchy for diagnostic dumps.

These exceptions are normally *returned* inside ``Err(...)`` by
:func:`diagsnap.printer.emit`; they are only raised when a caller opts in with
``Result.unwrap()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .contracts.record import DiagnosticRecord


class DiagnosticError(Exception):
    """Base exception for all diagsnap errors."""

    pass


class InvalidSelector(DiagnosticError):
    """Raised when a selector tag is outside the known set.

    ``value`` keeps the offending input exactly as received so it can be
    reported back to whoever configured it.
    """

    def __init__(self, value: Any, message: str | None = None):
        super().__init__(message or f"invalid debug option: {value!r}")
        self.value = value


class SinkWriteError(DiagnosticError):
    """Raised when the output sink rejects a record.

    The remaining records of the dump are not written.
    """

    def __init__(self, record: DiagnosticRecord, cause: BaseException):
        super().__init__(f"sink rejected {record.group}/{record.name} record: {cause}")
        self.record = record
        self.cause = cause
        self.__cause__ = cause


class SnapshotError(DiagnosticError):
    """Raised when the runtime stats provider fails to capture a snapshot.

    Nothing is written to the sink in that case.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"runtime snapshot failed: {cause}")
        self.cause = cause
        self.__cause__ = cause


class InvalidSettings(DiagnosticError):
    """Raised when `DIAGSNAP_*` / `LOG_LEVEL` settings fail validation."""

    def __init__(self, cause: BaseException):
        super().__init__(f"invalid diagsnap settings: {cause}")
        self.cause = cause
        self.__cause__ = cause


__all__ = [
    "DiagnosticError",
    "InvalidSelector",
    "SinkWriteError",
    "SnapshotError",
    "InvalidSettings",
]
