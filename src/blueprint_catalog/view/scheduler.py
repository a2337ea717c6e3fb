# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Timer scheduling protocols used by the debouncer."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Cancellable handle returned when a callback is scheduled."""

    def cancel(self) -> None:
        """Prevent the scheduled callback from running."""


@runtime_checkable
class Scheduler(Protocol):
    """Anything able to run a callback after a delay.

    :class:`asyncio.AbstractEventLoop` satisfies this protocol, which makes the
    running event loop the natural scheduler for interactive use.
    """

    def call_later(self, delay: float, callback: Callable[[], object], /) -> TimerHandle:
        """Schedule ``callback`` to run once after ``delay`` seconds.

        Args:
            delay: Quiet interval in seconds.
            callback: Zero-argument callable to invoke.

        Returns:
            TimerHandle: Handle that cancels the pending invocation.
        """


__all__ = ["Scheduler", "TimerHandle"]
