"""Unit tests for the Result container used by the non-raising lookups."""

from __future__ import annotations

import pytest

from inistore.core.result import Err, Ok, Result, catching


def test_ok_flat_map() -> None:
    """`Ok` chains through flat_map and keeps values typed."""
    r: Result[int, str] = Ok(10)
    r2 = r.flat_map(lambda x: Ok(x * 2))
    assert r2.is_ok() and r2.unwrap() == 20


def test_err_propagation() -> None:
    """`Err` propagates through flat_map untouched."""
    r: Result[int, str] = Err("boom")
    assert r.is_err()
    assert isinstance(r.flat_map(lambda x: Ok(x)), Err)
    assert r.unwrap_err() == "boom"


def test_unwrap_and_get_or() -> None:
    """`get_or` falls back on Err, including falsy defaults."""
    assert Ok("x").unwrap() == "x"
    assert Err("e").get_or("fallback") == "fallback"
    assert Err("e").get_or(0) == 0
    with pytest.raises(RuntimeError):
        Err("e").unwrap()
    with pytest.raises(RuntimeError):
        Ok(1).unwrap_err()


def test_unwrap_reraises_exception_errors() -> None:
    """An exception payload is raised as-is by `unwrap`."""
    with pytest.raises(KeyError):
        Err(KeyError("k")).unwrap()


def test_catching_converts_listed_exceptions() -> None:
    """`catching` turns the listed exceptions into Err and passes others through."""
    to_int = catching(int, ValueError)
    assert to_int("3").unwrap() == 3
    assert isinstance(to_int("x").unwrap_err(), ValueError)
    with pytest.raises(TypeError):
        to_int(None)  # type: ignore[arg-type]
