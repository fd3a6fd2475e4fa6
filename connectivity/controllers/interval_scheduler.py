"""
Interval Scheduler

Owns the ONE recurring timer of a monitor.

Rules:
- arm() never leaves two timers alive: a live handle is disarmed first
- Changing the period is disarm-then-arm (no in-place mutation)
- Once disarmed, no tick fires for that handle, including one already due
- Ticks are not queued and not gated on the previous tick finishing
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

from connectivity.factory import create_timer
from connectivity.interfaces.timer_interface import TimerHandle, TimerInterface
from connectivity.utils.config_utils import ms_to_seconds, validate_positive_ms


class IntervalScheduler:
    """
    Single-timer scheduler on top of a TimerInterface.

    Usage:
        scheduler = IntervalScheduler()
        scheduler.arm(1000, on_tick)   # every second, first tick after 1s
        scheduler.rearm(10000)         # same callback, new period
        scheduler.disarm()
    """

    def __init__(self, timer: Optional[TimerInterface] = None):
        """
        Args:
            timer: Timer implementation (defaults to ThreadingTimer)
        """
        self.logger = logging.getLogger(__name__)
        self.timer = timer or create_timer()

        # Guards the disarm/arm pair - mode changes and reconfigure can
        # arrive from different threads
        self._lock = threading.RLock()
        self._handle: Optional[TimerHandle] = None
        self._period_ms: Optional[int] = None
        self._on_tick: Optional[Callable[[], None]] = None

        self.arm_count = 0
        self.tick_count = 0

    @property
    def is_armed(self) -> bool:
        with self._lock:
            return self._handle is not None

    @property
    def period_ms(self) -> Optional[int]:
        """Period of the live timer, or None if disarmed"""
        with self._lock:
            return self._period_ms if self._handle is not None else None

    @property
    def active_handle(self) -> Optional[TimerHandle]:
        with self._lock:
            return self._handle

    def arm(self, period_ms: int, on_tick: Callable[[], None]) -> TimerHandle:
        """
        Start calling on_tick every period_ms milliseconds.

        Args:
            period_ms: Period in milliseconds (> 0)
            on_tick: Callback, invoked with no arguments

        Returns:
            Handle of the new timer

        Raises:
            ValueError: If period_ms is not positive
        """
        validate_positive_ms("period_ms", period_ms)

        with self._lock:
            if self._handle is not None:
                self._disarm_locked(self._handle)

            handle_ref: Dict[str, TimerHandle] = {}

            def tick() -> None:
                # Ticks from a superseded handle are dropped
                with self._lock:
                    if self._handle is not handle_ref.get("handle"):
                        return
                    self.tick_count += 1
                on_tick()

            handle = self.timer.schedule_interval(ms_to_seconds(period_ms), tick)
            handle_ref["handle"] = handle

            self._handle = handle
            self._period_ms = period_ms
            self._on_tick = on_tick
            self.arm_count += 1

        self.logger.debug(f"Scheduler armed: every {period_ms}ms (timer {handle.id})")
        return handle

    def rearm(self, period_ms: int) -> TimerHandle:
        """
        Disarm the live timer and arm a new one with the last callback.

        Raises:
            RuntimeError: If arm() was never called
        """
        with self._lock:
            if self._on_tick is None:
                raise RuntimeError("Cannot rearm - scheduler was never armed")
            return self.arm(period_ms, self._on_tick)

    def disarm(self, handle: Optional[TimerHandle] = None) -> None:
        """
        Stop a timer (the live one by default). Safe to call repeatedly.
        """
        with self._lock:
            target = handle or self._handle
            if target is None:
                return
            self._disarm_locked(target)

    def _disarm_locked(self, handle: TimerHandle) -> None:
        self.timer.cancel(handle)
        if handle is self._handle:
            self._handle = None
            self._period_ms = None
        self.logger.debug(f"Scheduler disarmed (timer {handle.id})")

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "armed": self._handle is not None,
                "period_ms": self._period_ms,
                "timer_id": self._handle.id if self._handle else None,
                "arm_count": self.arm_count,
                "tick_count": self.tick_count,
            }

    def cleanup(self) -> None:
        self.disarm()
        self.timer.cleanup()
