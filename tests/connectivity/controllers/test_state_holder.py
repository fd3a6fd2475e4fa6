"""
Connectivity State Holder Tests

To run:
    pytest tests/connectivity/controllers/test_state_holder.py -v
"""

import pytest

from connectivity.controllers.state_holder import ConnectivityStateHolder


@pytest.mark.unit
@pytest.mark.parametrize("initial", [True, False])
def test_initial_value(initial):
    """Test that the seed value is published before any set()."""
    holder = ConnectivityStateHolder(initial=initial)

    assert holder.get() is initial
    assert holder.value is initial


@pytest.mark.unit
def test_set_notifies_only_on_change(callback_tracker):
    """Test observers see changes, not every probe."""
    holder = ConnectivityStateHolder(initial=True)
    holder.subscribe(callback_tracker.track)

    assert holder.set(True) is False
    assert holder.set(False) is True
    assert holder.set(False) is False
    assert holder.set(True) is True

    assert callback_tracker.get_values() == [False, True]
    assert holder.update_count == 4
    assert holder.change_count == 2


@pytest.mark.unit
def test_unsubscribe(callback_tracker):
    """Test that an unsubscribed observer is no longer called."""
    holder = ConnectivityStateHolder(initial=True)
    unsubscribe = holder.subscribe(callback_tracker.track)

    unsubscribe()
    unsubscribe()  # Safe twice
    holder.set(False)

    assert callback_tracker.was_called() is False


@pytest.mark.unit
def test_observer_error_does_not_propagate(callback_tracker, caplog):
    """Test that a failing observer neither raises nor blocks other observers."""
    holder = ConnectivityStateHolder(initial=True)

    def broken(value):
        raise RuntimeError("observer bug")

    holder.subscribe(broken)
    holder.subscribe(callback_tracker.track)

    holder.set(False)

    assert holder.get() is False
    assert callback_tracker.get_values() == [False]
    assert "observer bug" in caplog.text


@pytest.mark.unit
def test_get_status():
    """Test state holder status dictionary."""
    holder = ConnectivityStateHolder(initial=False)
    holder.subscribe(lambda value: None)

    holder.set(True)
    status = holder.get_status()

    assert status["reachable"] is True
    assert status["initial"] is False
    assert status["updates"] == 1
    assert status["changes"] == 1
    assert status["last_changed"] is not None
    assert status["observers"] == 1
