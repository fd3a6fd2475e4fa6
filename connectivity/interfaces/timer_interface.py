"""
Timer Interface

Abstract interface for recurring timers.
IntervalScheduler depends on this abstraction so it can run against real
threads (ThreadingTimer) or a fake clock (MockTimer).
"""

import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional


class TimerHandle:
    """
    Opaque handle to one recurring timer.

    Cancelling a handle is permanent. Implementations must check
    `cancelled` immediately before invoking the tick callback so that a tick
    already scheduled (but not yet fired) is suppressed.
    """

    _ids = itertools.count(1)

    def __init__(self, interval: float):
        """
        Args:
            interval: Period between ticks in seconds
        """
        self.id = next(TimerHandle._ids)
        self.interval = interval
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Sleep until cancelled or timeout. Returns True if cancelled."""
        return self._cancelled.wait(timeout)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"TimerHandle(id={self.id}, interval={self.interval}, {state})"


class TimerInterface(ABC):
    """
    Abstract base class for recurring timer implementations.
    """

    @abstractmethod
    def schedule_interval(
        self,
        interval: float,
        callback: Callable[[], None],
    ) -> TimerHandle:
        """
        Start invoking callback every `interval` seconds.

        The first call happens after one full interval (never immediately).
        Must be NON-BLOCKING.

        Args:
            interval: Period in seconds (> 0)
            callback: Called with no arguments on each tick

        Returns:
            Handle used to cancel the timer
        """

    @abstractmethod
    def cancel(self, handle: TimerHandle) -> None:
        """
        Stop a timer. No tick may fire for the handle after this returns.
        Cancelling an already-cancelled handle is a no-op.
        """

    @abstractmethod
    def cleanup(self) -> None:
        """
        Cancel every timer this implementation still owns.
        """
