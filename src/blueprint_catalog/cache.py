# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Bounded memoization keyed strictly by call arguments.

Unlike :func:`functools.lru_cache` the wrapper is meant to be created per
owner (for example one per view) so cached results never outlive the object
that produced them.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from functools import partial, update_wrapper
from typing import Final, Generic, ParamSpec, TypeVar, cast

P = ParamSpec("P")
R = TypeVar("R")

CacheKey = Hashable


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Describe cache state metadata.

    Attributes:
        current_size: Number of cached entries currently stored.
        hits: Number of cache hits that have occurred.
        misses: Number of calls that ran the wrapped callable.
        maxsize: Configured maximum cache capacity, ``None`` when unbounded.
    """

    current_size: int
    hits: int
    misses: int
    maxsize: int | None


def _build_cache_key(args: tuple[object, ...], kwargs: dict[str, object]) -> CacheKey:
    """Construct a hashable cache key, rejecting unhashable arguments.

    Args:
        args: Positional arguments supplied to the wrapped callable.
        kwargs: Keyword arguments supplied to the wrapped callable.

    Returns:
        CacheKey: Tuple-based representation suitable for dict access.

    Raises:
        TypeError: If any argument is not hashable.
    """

    for index, value in enumerate(args):
        if not isinstance(value, Hashable):
            raise TypeError(f"positional argument {index} must be hashable to participate in caching")
    for key, value in kwargs.items():
        if not isinstance(value, Hashable):
            raise TypeError(f"keyword argument '{key}' must be hashable to participate in caching")
    if not kwargs:
        return args
    return args + (tuple(sorted(kwargs.items())),)


class _MemoizedCallable(Generic[P, R]):
    """Implement an optional-size LRU cache for callables."""

    def __init__(self, func: Callable[P, R], maxsize: int | None) -> None:
        self._func = func
        self._maxsize = maxsize
        self._store: OrderedDict[CacheKey, R] = OrderedDict()
        self._hits = 0
        self._misses = 0
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """Return the cached result for the arguments, computing it on a miss."""

        cache_key = _build_cache_key(args, kwargs)
        if cache_key in self._store:
            self._store.move_to_end(cache_key)
            self._hits += 1
            return self._store[cache_key]
        self._misses += 1
        result = self._func(*args, **kwargs)
        self._store[cache_key] = result
        if self._maxsize is not None and len(self._store) > self._maxsize:
            self._store.popitem(last=False)
        return result

    def cache_clear(self) -> None:
        """Reset cached entries and hit tracking."""

        self._store.clear()
        self._hits = 0
        self._misses = 0

    def cache_metadata(self) -> CacheInfo:
        """Return cache metadata including hits and misses."""

        return CacheInfo(
            current_size=len(self._store),
            hits=self._hits,
            misses=self._misses,
            maxsize=self._maxsize,
        )


def memoize(maxsize: int | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return a decorator implementing an optional-size LRU cache.

    Args:
        maxsize: Maximum number of entries to retain. ``None`` disables the cap.

    Returns:
        Callable[[Callable[P, R]], Callable[P, R]]: Decorator preserving cache helpers.
    """

    decorator = partial(_apply_memoize, maxsize=maxsize)
    return cast(Callable[[Callable[P, R]], Callable[P, R]], decorator)


def _apply_memoize(func: Callable[P, R], *, maxsize: int | None) -> Callable[P, R]:
    memoized = _MemoizedCallable(func, maxsize)
    return cast(Callable[P, R], memoized)


__all__: Final = ["CacheInfo", "memoize"]
