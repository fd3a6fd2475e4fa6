"""
Threading Timer Implementation

Concrete implementation of TimerInterface using daemon threads.

One thread per live handle sleeps on the handle's cancel event, so cancel()
wakes it immediately. Each tick is dispatched on its own short-lived thread:
a slow callback never delays or queues the next tick.
"""

import logging
import threading
import time
from typing import Callable, Dict, Tuple

from connectivity.constants import (
    TICK_THREAD_NAME,
    TIMER_JOIN_TIMEOUT,
    TIMER_THREAD_NAME,
)
from connectivity.interfaces.timer_interface import TimerHandle, TimerInterface


class ThreadingTimer(TimerInterface):
    """
    Recurring timer backed by threading.

    Ticks are scheduled against time.monotonic() so the period does not
    drift with callback duration. Missed ticks (e.g. after a system suspend)
    are skipped, not replayed.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._timers: Dict[int, Tuple[TimerHandle, threading.Thread]] = {}

    def schedule_interval(
        self,
        interval: float,
        callback: Callable[[], None],
    ) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"Invalid interval: {interval}. Must be > 0")

        handle = TimerHandle(interval)
        thread = threading.Thread(
            target=self._run,
            args=(handle, callback),
            daemon=True,
            name=f"{TIMER_THREAD_NAME}-{handle.id}",
        )
        with self._lock:
            self._timers[handle.id] = (handle, thread)
        thread.start()

        self.logger.debug(f"Timer {handle.id} started ({interval:.3f}s)")
        return handle

    def _run(self, handle: TimerHandle, callback: Callable[[], None]) -> None:
        next_fire = time.monotonic() + handle.interval

        while not handle.wait(max(0.0, next_fire - time.monotonic())):
            now = time.monotonic()
            next_fire += handle.interval
            if next_fire <= now:
                skipped = int((now - next_fire) // handle.interval) + 1
                next_fire += skipped * handle.interval
                self.logger.debug(f"Timer {handle.id} skipped {skipped} tick(s)")

            threading.Thread(
                target=self._fire,
                args=(handle, callback),
                daemon=True,
                name=f"{TICK_THREAD_NAME}-{handle.id}",
            ).start()

        self.logger.debug(f"Timer {handle.id} thread exiting")

    def _fire(self, handle: TimerHandle, callback: Callable[[], None]) -> None:
        # Suppress a tick that was dispatched just before cancel()
        if handle.cancelled:
            return
        try:
            callback()
        except Exception as e:
            # Never let a tick error kill the timer
            self.logger.error(f"Error in timer callback: {e}", exc_info=True)

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()
        with self._lock:
            entry = self._timers.pop(handle.id, None)

        if entry is None:
            return

        _, thread = entry
        if thread is not threading.current_thread():
            thread.join(timeout=TIMER_JOIN_TIMEOUT)
            if thread.is_alive():
                self.logger.warning(f"Timer {handle.id} thread did not stop in time")

        self.logger.debug(f"Timer {handle.id} cancelled")

    def get_active_count(self) -> int:
        """Number of timers started and not yet cancelled"""
        with self._lock:
            return len(self._timers)

    def cleanup(self) -> None:
        with self._lock:
            handles = [handle for handle, _ in self._timers.values()]

        if handles:
            self.logger.warning(f"Cancelling {len(handles)} timer(s) at cleanup")
        for handle in handles:
            self.cancel(handle)
