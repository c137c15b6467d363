"""Unit tests for the Result container returned by the printer."""

from __future__ import annotations

import pytest

from diagsnap.core.errors import InvalidSelector
from diagsnap.core.result import Err, Result, err, ok


def test_ok_map_and_flat_map() -> None:
    """`Ok` should map/flat_map and keep values typed."""
    r: Result[int, str] = ok(10)
    r2 = r.map(lambda x: x + 5).flat_map(lambda x: ok(x * 2))
    assert r2.is_ok() and r2.unwrap() == 30


def test_err_short_circuits_and_map_err() -> None:
    """`Err` passes through map/flat_map untouched; map_err rewrites it."""
    r: Result[int, str] = err("boom")
    assert r.map(lambda x: x + 1).is_err()
    assert r.flat_map(lambda x: ok(x)).unwrap_err() == "boom"
    r2 = r.map_err(lambda e: f"{e}!")
    assert isinstance(r2, Err) and r2.unwrap_err() == "boom!"


def test_unwrap_default_and_runtime_error() -> None:
    """Non-exception errors raise RuntimeError unless a default is given."""
    assert err("e").unwrap(default="fallback") == "fallback"
    with pytest.raises(RuntimeError):
        err("e").unwrap()


def test_unwrap_reraises_exception_payload() -> None:
    """Exception payloads are raised as themselves."""
    with pytest.raises(InvalidSelector):
        err(InvalidSelector("x")).unwrap()


def test_unwrap_err_on_ok_raises() -> None:
    """`unwrap_err` on Ok is a programming error."""
    with pytest.raises(RuntimeError):
        ok(None).unwrap_err()


def test_ok_none_unwraps_to_none() -> None:
    """`Ok(None)` is a success, so unwrap returns None without raising."""
    assert ok(None).unwrap() is None
