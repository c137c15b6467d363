"""Verbosity selector: which stat groups a dump includes.

``Selector`` is a flag set. Any combination of its members is a valid
request, so typed callers never need validation:

>>> Selector.STACK_TRACE | Selector.GC_STATS
<Selector.STACK_TRACE|GC_STATS: 5>
>>> Selector.INFO in Selector.ALL
True

Text only shows up at the edges (environment variables, config files, legacy
call sites passing ``"MEM"``). :func:`parse_selector` is the single place
where such input is checked; unknown tags come back as
:class:`~diagsnap.core.errors.InvalidSelector`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Flag

from .errors import InvalidSelector
from .result import Result, err, ok


class Selector(Flag):
    """Stat groups that can be requested for a dump."""

    INFO = 0
    STACK_TRACE = 1
    MEMORY_STATS = 2
    GC_STATS = 4
    BUILD_INFO = 8
    ALL = STACK_TRACE | MEMORY_STATS | GC_STATS | BUILD_INFO

    def includes(self, group: Selector) -> bool:
        """Return True if every bit of ``group`` is requested."""
        return (self & group) == group and group is not Selector.INFO


#: Accepted text tags, matched after strip() and lower(). Short forms are
#: the historical option strings; long forms mirror the member names.
SELECTOR_TAGS: dict[str, Selector] = {
    "info": Selector.INFO,
    "stack": Selector.STACK_TRACE,
    "stacktrace": Selector.STACK_TRACE,
    "stack_trace": Selector.STACK_TRACE,
    "mem": Selector.MEMORY_STATS,
    "memorystats": Selector.MEMORY_STATS,
    "memory_stats": Selector.MEMORY_STATS,
    "gc": Selector.GC_STATS,
    "gcstats": Selector.GC_STATS,
    "gc_stats": Selector.GC_STATS,
    "build": Selector.BUILD_INFO,
    "buildinfo": Selector.BUILD_INFO,
    "build_info": Selector.BUILD_INFO,
    "all": Selector.ALL,
}

_SEPARATORS = re.compile(r"[,|+]")

SelectorInput = Selector | str | Iterable[Selector | str] | None


def _parse_tag(tag: str, original: object) -> Result[Selector, InvalidSelector]:
    key = tag.strip().lower()
    if key not in SELECTOR_TAGS:
        return err(InvalidSelector(original))
    return ok(SELECTOR_TAGS[key])


def parse_selector(value: SelectorInput) -> Result[Selector, InvalidSelector]:
    """Normalize ``value`` into a :class:`Selector`.

    Accepted inputs
    ---------------
    - a ``Selector`` (returned unchanged);
    - ``None`` or an empty sequence (``Selector.INFO``);
    - a text tag such as ``"MEM"`` or ``"GCStats"``, or several tags joined
      with ``,``, ``|`` or ``+``;
    - a sequence of tags and/or ``Selector`` values.

    An empty string, a blank component (``"MEM,,GC"``) or any unknown tag
    yields ``Err(InvalidSelector(value))`` carrying the full offending value.
    """
    if value is None:
        return ok(Selector.INFO)
    if isinstance(value, Selector):
        return ok(value)
    if isinstance(value, str):
        parts = _SEPARATORS.split(value)
    elif isinstance(value, Iterable):
        parts = list(value)
    else:
        return err(InvalidSelector(value))

    selected = Selector.INFO
    for part in parts:
        if isinstance(part, Selector):
            selected |= part
            continue
        if not isinstance(part, str):
            return err(InvalidSelector(value))
        parsed = _parse_tag(part, value)
        if parsed.is_err():
            return parsed
        selected |= parsed.unwrap()
    return ok(selected)


__all__ = ["Selector", "SelectorInput", "SELECTOR_TAGS", "parse_selector"]
