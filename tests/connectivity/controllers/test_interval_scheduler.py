"""
Interval Scheduler Tests

Tests for the single-timer scheduler showing:
- First tick after one full period
- Re-arming replaces the timer (never two alive)
- Disarm suppresses pending ticks

To run:
    pytest tests/connectivity/controllers/test_interval_scheduler.py -v
"""

import pytest

from connectivity.controllers.interval_scheduler import IntervalScheduler
from connectivity.interfaces.timer_interface import TimerHandle, TimerInterface


class LeakyTimer(TimerInterface):
    """Timer that hands out callbacks but ignores cancel() (worst case)"""

    def __init__(self):
        self.callbacks = []

    def schedule_interval(self, interval, callback):
        self.callbacks.append(callback)
        return TimerHandle(interval)

    def cancel(self, handle):
        pass

    def cleanup(self):
        pass


# =============================================================================
# ARM TESTS
# =============================================================================

@pytest.mark.unit
def test_first_tick_after_full_period(scheduler, mock_timer, callback_tracker):
    """Test that arming does not tick immediately."""
    scheduler.arm(1000, callback_tracker.track)

    mock_timer.advance(0.999)
    assert callback_tracker.get_call_count() == 0

    mock_timer.advance(0.001)
    assert callback_tracker.get_call_count() == 1


@pytest.mark.unit
def test_ticks_recur(scheduler, mock_timer, callback_tracker):
    """Test recurring ticks at the period."""
    scheduler.arm(1000, callback_tracker.track)

    mock_timer.advance(3.0)

    assert callback_tracker.get_call_count() == 3
    assert mock_timer.get_fire_times() == pytest.approx([1.0, 2.0, 3.0])
    assert scheduler.tick_count == 3


@pytest.mark.unit
def test_arm_twice_keeps_one_timer(scheduler, mock_timer, callback_tracker):
    """Test that arming again cancels the previous timer first."""
    first = scheduler.arm(1000, callback_tracker.track)
    second = scheduler.arm(2000, callback_tracker.track)

    assert first.cancelled is True
    assert second.cancelled is False
    assert mock_timer.get_active_count() == 1
    assert scheduler.active_handle is second
    assert scheduler.period_ms == 2000


@pytest.mark.unit
def test_arm_rejects_invalid_period(scheduler):
    """Test period validation."""
    with pytest.raises(ValueError):
        scheduler.arm(0, lambda: None)

    with pytest.raises(ValueError):
        scheduler.arm(-5, lambda: None)

    assert scheduler.is_armed is False


# =============================================================================
# REARM TESTS
# =============================================================================

@pytest.mark.unit
def test_rearm_restarts_period_from_now(scheduler, mock_timer, callback_tracker):
    """Test that re-arming at t=0.5 with 5000ms next ticks at t=5.5."""
    scheduler.arm(1000, callback_tracker.track)

    mock_timer.advance(0.5)
    scheduler.rearm(5000)

    mock_timer.advance(4.9)
    assert callback_tracker.get_call_count() == 0

    mock_timer.advance(0.1)
    assert callback_tracker.get_call_count() == 1
    assert mock_timer.get_fire_times() == pytest.approx([5.5])


@pytest.mark.unit
def test_rearm_without_arm_raises(scheduler):
    """Test that rearm needs a callback from a previous arm."""
    with pytest.raises(RuntimeError):
        scheduler.rearm(1000)


# =============================================================================
# DISARM TESTS
# =============================================================================

@pytest.mark.unit
def test_disarm_stops_ticks(scheduler, mock_timer, callback_tracker):
    """Test that no tick fires after disarm."""
    scheduler.arm(1000, callback_tracker.track)
    mock_timer.advance(1.0)

    scheduler.disarm()
    mock_timer.advance(10.0)

    assert callback_tracker.get_call_count() == 1
    assert scheduler.is_armed is False
    assert scheduler.period_ms is None
    assert mock_timer.get_active_count() == 0


@pytest.mark.unit
def test_disarm_is_idempotent(scheduler, mock_timer):
    """Test disarming repeatedly (and before arming)."""
    scheduler.disarm()

    scheduler.arm(1000, lambda: None)
    scheduler.disarm()
    scheduler.disarm()

    assert mock_timer.cancelled_count == 1


@pytest.mark.unit
def test_stale_handle_ticks_are_dropped(callback_tracker):
    """Test that a superseded timer cannot reach the callback even if it still fires."""
    timer = LeakyTimer()
    scheduler = IntervalScheduler(timer=timer)

    scheduler.arm(1000, callback_tracker.track)
    scheduler.rearm(5000)

    stale_tick, live_tick = timer.callbacks

    stale_tick()
    assert callback_tracker.get_call_count() == 0

    live_tick()
    assert callback_tracker.get_call_count() == 1


@pytest.mark.unit
def test_get_status(scheduler):
    """Test scheduler status dictionary."""
    scheduler.arm(1000, lambda: None)
    scheduler.rearm(2000)

    status = scheduler.get_status()

    assert status["armed"] is True
    assert status["period_ms"] == 2000
    assert status["arm_count"] == 2
    assert status["tick_count"] == 0
