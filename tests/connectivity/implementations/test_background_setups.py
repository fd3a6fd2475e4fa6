"""
Background Setup Tests

Tests for the bundled background-mode sources:
- MockBackgroundSetup (manual)
- SignalBackgroundSetup (SIGUSR1 / SIGUSR2)

To run:
    pytest tests/connectivity/implementations/test_background_setups.py -v
"""

import os
import signal
import time

import pytest

from connectivity.implementations.mock_background import MockBackgroundSetup
from connectivity.implementations.signal_background import SignalBackgroundSetup

requires_usr_signals = pytest.mark.skipif(
    not hasattr(signal, "SIGUSR1"),
    reason="SIGUSR1/SIGUSR2 not available on this platform",
)


# =============================================================================
# MOCK BACKGROUND TESTS
# =============================================================================

@pytest.mark.unit
def test_mock_background_forwards_modes(callback_tracker):
    """Test mode changes reach the registered handler."""
    background = MockBackgroundSetup()
    background(callback_tracker.track)

    assert background.set_background(True) is True
    assert background.set_background(False) is True

    assert callback_tracker.get_values() == [True, False]
    assert background.mode_history == [True, False]


@pytest.mark.unit
def test_mock_background_teardown(callback_tracker):
    """Test that after teardown nothing is delivered."""
    background = MockBackgroundSetup()
    teardown = background(callback_tracker.track)

    teardown()

    assert background.set_background(True) is False
    assert callback_tracker.was_called() is False
    assert background.get_status()["teardowns"] == 1


@pytest.mark.unit
def test_mock_background_without_teardown():
    """Test return_teardown=False returns None."""
    background = MockBackgroundSetup(return_teardown=False)

    assert background(lambda is_background: None) is None
    assert background.is_registered is True


# =============================================================================
# SIGNAL BACKGROUND TESTS
# =============================================================================

@requires_usr_signals
@pytest.mark.integration
def test_signals_switch_mode(callback_tracker):
    """Test SIGUSR1 reports background and SIGUSR2 foreground."""
    setup = SignalBackgroundSetup()
    teardown = setup(callback_tracker.track)

    try:
        os.kill(os.getpid(), signal.SIGUSR1)
        os.kill(os.getpid(), signal.SIGUSR2)

        # Python runs signal handlers between bytecodes of the main thread
        deadline = time.monotonic() + 1.0
        while callback_tracker.get_call_count() < 2 and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        teardown()

    assert callback_tracker.get_values() == [True, False]


@requires_usr_signals
@pytest.mark.integration
def test_teardown_restores_previous_handlers():
    """Test teardown puts back whatever was installed before."""
    previous_usr1 = signal.getsignal(signal.SIGUSR1)
    previous_usr2 = signal.getsignal(signal.SIGUSR2)

    teardown = SignalBackgroundSetup()(lambda is_background: None)
    assert signal.getsignal(signal.SIGUSR1) is not previous_usr1

    teardown()

    assert signal.getsignal(signal.SIGUSR1) == previous_usr1
    assert signal.getsignal(signal.SIGUSR2) == previous_usr2
