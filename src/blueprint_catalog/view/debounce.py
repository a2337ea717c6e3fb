# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Debounced value stream for free-text query input."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final, Generic, TypeVar

from .scheduler import Scheduler, TimerHandle

LOGGER = logging.getLogger(__name__)

DEFAULT_DELAY: Final[float] = 0.3

ValueT = TypeVar("ValueT")
Listener = Callable[[ValueT], None]


class Debouncer(Generic[ValueT]):
    """Emit only the last value of a burst once the input has been quiet.

    The stabilised value starts out equal to ``initial`` so the first read
    needs no delay. Every :meth:`push` cancels the pending timer before
    scheduling a new one; at most one emission is ever pending.
    """

    def __init__(
        self,
        initial: ValueT,
        *,
        scheduler: Scheduler,
        delay: float = DEFAULT_DELAY,
    ) -> None:
        """Create the debouncer.

        Args:
            initial: Seed for the stabilised value.
            scheduler: Timer source, usually the running asyncio event loop.
            delay: Quiet interval in seconds required before emitting.
        """

        self._value = initial
        self._pending_value = initial
        self._scheduler = scheduler
        self._delay = delay
        self._handle: TimerHandle | None = None
        self._listeners: list[Listener[ValueT]] = []

    @property
    def value(self) -> ValueT:
        """Return the most recently emitted (stabilised) value."""

        return self._value

    @property
    def delay(self) -> float:
        """Return the quiet interval in seconds."""

        return self._delay

    @property
    def pending(self) -> bool:
        """Return ``True`` while an emission is scheduled."""

        return self._handle is not None

    def subscribe(self, listener: Listener[ValueT]) -> Callable[[], None]:
        """Register ``listener`` for emitted values.

        Args:
            listener: Callable invoked with each emitted value.

        Returns:
            Callable[[], None]: Function removing the listener again.
        """

        self._listeners.append(listener)
        return lambda: self._unsubscribe(listener)

    def push(self, value: ValueT) -> None:
        """Record a new input value and restart the quiet interval."""

        self.cancel()
        self._pending_value = value
        self._handle = self._scheduler.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Emit the pending value immediately instead of waiting."""

        if self._handle is None:
            return
        self.cancel()
        self._emit(self._pending_value)

    def cancel(self) -> None:
        """Drop the pending emission, keeping the current stabilised value."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._emit(self._pending_value)

    def _emit(self, value: ValueT) -> None:
        if value == self._value:
            return
        self._value = value
        LOGGER.debug("debounced value settled: %r", value)
        for listener in tuple(self._listeners):
            listener(value)

    def _unsubscribe(self, listener: Listener[ValueT]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


__all__ = ["DEFAULT_DELAY", "Debouncer"]
