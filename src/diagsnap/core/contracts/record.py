"""Emitted record contract.

A dump is a sequence of :class:`DiagnosticRecord` values. Console sinks only
print ``text``; structured sinks can use ``group`` / ``name`` / ``value`` as
key/value fields.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RecordGroup = Literal["message", "stack_trace", "memory_stats", "gc_stats", "build_info"]


class DiagnosticRecord(BaseModel):
    """One line (or preformatted block) of a diagnostic dump."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    group: RecordGroup = Field(description="Stat group the record belongs to")
    name: str = Field(description="Stable field label, e.g. 'HeapAlloc'")
    value: Any = Field(default=None, description="Raw value as captured")
    text: str = Field(description="Rendered console line")

    def fields(self) -> dict[str, Any]:
        """Return the structured key/value view used by logger sinks."""
        return {"diag_group": self.group, "diag_field": self.name, "diag_value": self.value}


__all__ = ["DiagnosticRecord", "RecordGroup"]
