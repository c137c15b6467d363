"""Request values handed to the diagnostic printer."""

from __future__ import annotations

from dataclasses import dataclass

from ..selector import Selector, SelectorInput


@dataclass(frozen=True, slots=True)
class DebugRequest:
    """One dump request.

    Attributes
    ----------
    enabled : bool
        Master switch. ``False`` turns the call into a silent no-op, even when
        ``selector`` is not a valid tag.
    selector : SelectorInput
        Requested stat groups. Usually a :class:`Selector`; text tags coming
        from configuration are accepted here and validated by ``emit``.
    message : str
        Caller-supplied line that anchors the dump.
    """

    enabled: bool = True
    selector: SelectorInput = Selector.INFO
    message: str = ""


@dataclass(frozen=True, slots=True)
class DebugOptions:
    """Legacy option pair (``enabled`` + text ``level``) used by the facades."""

    enabled: bool = False
    level: SelectorInput = "INFO"

    def to_request(self, message: str) -> DebugRequest:
        """Pair these options with ``message``."""
        return DebugRequest(enabled=self.enabled, selector=self.level, message=message)


__all__ = ["DebugRequest", "DebugOptions"]
