"""
Threading Timer Tests

Tests for the real (thread-backed) timer. These use short periods and
wall-clock waits, so they are marked integration.

To run:
    pytest tests/connectivity/implementations/test_threading_timer.py -v
"""

import threading
import time

import pytest

from connectivity.implementations.threading_timer import ThreadingTimer


class TickCounter:
    """Thread-safe tick counter"""

    def __init__(self, work_seconds=0.0, fail=False):
        self._lock = threading.Lock()
        self.work_seconds = work_seconds
        self.fail = fail
        self.started = 0
        self.finished = 0

    def __call__(self):
        with self._lock:
            self.started += 1
        if self.work_seconds:
            time.sleep(self.work_seconds)
        with self._lock:
            self.finished += 1
        if self.fail:
            raise RuntimeError("tick failed")


def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.005)
    return True


@pytest.fixture
def timer():
    timer = ThreadingTimer()
    yield timer
    timer.cleanup()


# =============================================================================
# SCHEDULING TESTS
# =============================================================================

@pytest.mark.integration
def test_no_immediate_tick(timer):
    """Test the first tick waits a full interval."""
    counter = TickCounter()
    timer.schedule_interval(0.3, counter)

    time.sleep(0.1)

    assert counter.started == 0


@pytest.mark.integration
def test_ticks_repeat(timer):
    """Test the timer keeps ticking."""
    counter = TickCounter()
    timer.schedule_interval(0.02, counter)

    assert _wait_for(lambda: counter.started >= 3)


@pytest.mark.integration
def test_slow_callback_does_not_delay_next_tick(timer):
    """Test ticks are dispatched without waiting for the previous one."""
    counter = TickCounter(work_seconds=0.5)
    timer.schedule_interval(0.03, counter)

    assert _wait_for(lambda: counter.started >= 3, timeout=0.4)

    # Several ticks started while the first was still running
    assert counter.finished == 0


@pytest.mark.integration
def test_callback_error_keeps_timer_alive(timer, caplog):
    """Test a failing tick is logged and the timer continues."""
    counter = TickCounter(fail=True)
    timer.schedule_interval(0.02, counter)

    assert _wait_for(lambda: counter.finished >= 2)
    assert "tick failed" in caplog.text


@pytest.mark.integration
def test_invalid_interval(timer):
    """Test interval validation."""
    with pytest.raises(ValueError):
        timer.schedule_interval(0, lambda: None)


# =============================================================================
# CANCEL TESTS
# =============================================================================

@pytest.mark.integration
def test_cancel_stops_ticks(timer):
    """Test nothing new fires after cancel."""
    counter = TickCounter()
    handle = timer.schedule_interval(0.02, counter)
    assert _wait_for(lambda: counter.started >= 1)

    timer.cancel(handle)
    time.sleep(0.05)
    ticks_after_cancel = counter.started
    time.sleep(0.15)

    assert counter.started == ticks_after_cancel
    assert handle.cancelled is True
    assert timer.get_active_count() == 0


@pytest.mark.integration
def test_cancel_wakes_sleeping_thread(timer):
    """Test cancel returns promptly even with a long interval."""
    handle = timer.schedule_interval(60.0, lambda: None)

    start = time.monotonic()
    timer.cancel(handle)

    assert time.monotonic() - start < 0.5


@pytest.mark.integration
def test_cancel_from_inside_tick(timer):
    """Test a tick may cancel its own timer."""
    handles = []
    cancelled = threading.Event()

    def tick():
        timer.cancel(handles[0])
        cancelled.set()

    handles.append(timer.schedule_interval(0.02, tick))

    assert cancelled.wait(2.0)
    assert handles[0].cancelled is True


@pytest.mark.integration
def test_cleanup_cancels_all(timer):
    """Test cleanup stops every timer."""
    first = timer.schedule_interval(0.05, lambda: None)
    second = timer.schedule_interval(0.07, lambda: None)

    timer.cleanup()

    assert first.cancelled is True
    assert second.cancelled is True
    assert timer.get_active_count() == 0
