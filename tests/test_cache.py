# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the memoization helper."""

import pytest

from blueprint_catalog.cache import memoize


def test_memoize_tracks_hits_and_misses() -> None:
    calls: list[int] = []

    @memoize(maxsize=2)
    def square(value: int) -> int:
        calls.append(value)
        return value * value

    assert square(3) == 9
    assert square(3) == 9
    assert calls == [3]
    info = square.cache_metadata()  # type: ignore[attr-defined]
    assert (info.hits, info.misses, info.current_size, info.maxsize) == (1, 1, 1, 2)


def test_memoize_evicts_least_recently_used() -> None:
    calls: list[int] = []

    @memoize(maxsize=2)
    def identity(value: int) -> int:
        calls.append(value)
        return value

    identity(1)
    identity(2)
    identity(1)
    identity(3)
    identity(1)
    identity(2)
    assert calls == [1, 2, 3, 2]


def test_memoize_rejects_unhashable_arguments() -> None:
    @memoize()
    def size(values: object) -> int:
        return len(values)  # type: ignore[arg-type]

    with pytest.raises(TypeError, match="must be hashable"):
        size([1, 2])


def test_cache_clear_resets_state() -> None:
    @memoize(maxsize=None)
    def double(value: int) -> int:
        return value * 2

    double(1)
    double.cache_clear()  # type: ignore[attr-defined]
    info = double.cache_metadata()  # type: ignore[attr-defined]
    assert (info.hits, info.misses, info.current_size) == (0, 0, 0)
