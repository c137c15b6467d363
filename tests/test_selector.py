"""Tests for selector flags and boundary parsing of text tags."""

from __future__ import annotations

import pytest

from diagsnap.core.errors import InvalidSelector
from diagsnap.core.selector import Selector, parse_selector


def test_all_is_union_of_groups() -> None:
    """ALL is sugar for every group, not a separate bit."""
    union = Selector.STACK_TRACE | Selector.MEMORY_STATS | Selector.GC_STATS | Selector.BUILD_INFO
    assert Selector.ALL == union
    for group in (Selector.STACK_TRACE, Selector.MEMORY_STATS, Selector.GC_STATS):
        assert Selector.ALL.includes(group)


def test_info_includes_nothing() -> None:
    """INFO is the empty set and never reports a group as included."""
    assert not Selector.INFO.includes(Selector.STACK_TRACE)
    assert not Selector.ALL.includes(Selector.INFO)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("INFO", Selector.INFO),
        ("STACK", Selector.STACK_TRACE),
        ("MEM", Selector.MEMORY_STATS),
        ("GC", Selector.GC_STATS),
        ("BUILD", Selector.BUILD_INFO),
        ("ALL", Selector.ALL),
        ("MemoryStats", Selector.MEMORY_STATS),
        ("gcstats", Selector.GC_STATS),
        (" build_info ", Selector.BUILD_INFO),
        (" mem ", Selector.MEMORY_STATS),
        ("Stack_Trace", Selector.STACK_TRACE),
    ],
)
def test_known_tags(tag: str, expected: Selector) -> None:
    """Short, long and snake_case spellings match ignoring case and padding."""
    assert parse_selector(tag).unwrap() == expected


def test_joined_tags_are_combined() -> None:
    """Separators ',', '|' and '+' combine tags."""
    assert parse_selector("STACK,MEM").unwrap() == Selector.STACK_TRACE | Selector.MEMORY_STATS
    assert parse_selector("gc|build").unwrap() == Selector.GC_STATS | Selector.BUILD_INFO
    assert parse_selector("INFO+GC").unwrap() == Selector.GC_STATS


def test_variadic_sequences() -> None:
    """A sequence of tags and flags is unioned; empty means INFO."""
    assert parse_selector([]).unwrap() == Selector.INFO
    assert parse_selector(None).unwrap() == Selector.INFO
    mixed = parse_selector([Selector.STACK_TRACE, "gc"]).unwrap()
    assert mixed == Selector.STACK_TRACE | Selector.GC_STATS


@pytest.mark.parametrize("bad", ["bogus", "", "MEM,,GC", "STACK,nope", 7, ["MEM", 3]])
def test_unknown_values_are_rejected_with_offending_value(bad: object) -> None:
    """Anything outside the tag set yields InvalidSelector(value)."""
    result = parse_selector(bad)  # type: ignore[arg-type]
    assert result.is_err()
    error = result.unwrap_err()
    assert isinstance(error, InvalidSelector)
    assert error.value == bad
