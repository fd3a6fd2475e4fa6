"""
Mock Timer Implementation

Fake-clock timer for deterministic tests.
Nothing fires on its own: tests move time forward with advance() and every
tick that falls due is invoked synchronously, in order, on the caller's thread.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from connectivity.interfaces.timer_interface import TimerHandle, TimerInterface

# Tolerance for float accumulation when comparing due times
_EPSILON = 1e-9


class _Scheduled:
    """Bookkeeping for one live handle"""

    def __init__(self, handle: TimerHandle, callback: Callable[[], None], due: float):
        self.handle = handle
        self.callback = callback
        self.due = due


class MockTimer(TimerInterface):
    """
    Timer driven by a virtual clock starting at 0.0 seconds.

    Callbacks may cancel or schedule timers while advance() runs; the
    new schedule is honoured for the remainder of the advance.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._now = 0.0
        self._scheduled: Dict[int, _Scheduled] = {}

        # Track fired ticks as (virtual_time, handle_id) for test verification
        self.fire_history: List[Tuple[float, int]] = []
        self.scheduled_count = 0
        self.cancelled_count = 0

        self.logger.debug("Mock timer initialized")

    @property
    def now(self) -> float:
        """Current virtual time in seconds"""
        return self._now

    def schedule_interval(
        self,
        interval: float,
        callback: Callable[[], None],
    ) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"Invalid interval: {interval}. Must be > 0")

        handle = TimerHandle(interval)
        self._scheduled[handle.id] = _Scheduled(handle, callback, self._now + interval)
        self.scheduled_count += 1
        self.logger.debug(
            f"[MOCK TIMER] Timer {handle.id} scheduled at t={self._now:.3f} "
            f"every {interval:.3f}s",
        )
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()
        if self._scheduled.pop(handle.id, None) is not None:
            self.cancelled_count += 1
            self.logger.debug(f"[MOCK TIMER] Timer {handle.id} cancelled at t={self._now:.3f}")

    def cleanup(self) -> None:
        for entry in list(self._scheduled.values()):
            self.cancel(entry.handle)

    # =========================================================================
    # TESTING HELPER METHODS (not part of TimerInterface)
    # =========================================================================

    def advance(self, seconds: float) -> int:
        """
        Move the virtual clock forward, firing every tick that falls due.

        Args:
            seconds: How far to move the clock

        Returns:
            Number of ticks fired
        """
        target = self._now + seconds
        fired = 0

        while True:
            entry = self._next_due(target)
            if entry is None:
                break

            self._now = entry.due
            entry.due += entry.handle.interval

            if entry.handle.cancelled:
                continue

            self.fire_history.append((self._now, entry.handle.id))
            fired += 1
            entry.callback()

        self._now = target
        return fired

    def _next_due(self, target: float) -> Optional[_Scheduled]:
        due = [
            entry for entry in self._scheduled.values()
            if entry.due <= target + _EPSILON
        ]
        if not due:
            return None
        return min(due, key=lambda entry: (entry.due, entry.handle.id))

    def get_active_handles(self) -> List[TimerHandle]:
        return [entry.handle for entry in self._scheduled.values()]

    def get_active_count(self) -> int:
        return len(self._scheduled)

    def time_until_next_tick(self) -> Optional[float]:
        """Seconds until the earliest scheduled tick, or None if idle"""
        if not self._scheduled:
            return None
        return min(entry.due for entry in self._scheduled.values()) - self._now

    def get_fire_times(self, handle_id: Optional[int] = None) -> List[float]:
        """Virtual times at which ticks fired (optionally for one handle)"""
        return [
            at for at, fired_id in self.fire_history
            if handle_id is None or fired_id == handle_id
        ]

    def get_status(self) -> Dict[str, Any]:
        return {
            "now": self._now,
            "active": len(self._scheduled),
            "scheduled": self.scheduled_count,
            "cancelled": self.cancelled_count,
            "fired": len(self.fire_history),
        }
