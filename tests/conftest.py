"""
Shared Test Fixtures

Fixtures used across test packages, plus marker registration.

To use pytest:
    pip install -e ".[test]"
    pytest tests/
"""

import threading

import pytest


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def callback_tracker():
    """
    Record values passed to an observer or handler.

    Thread-safe, so it can be subscribed to a monitor running on real timers.

    Usage:
        def test_changes(monitor, callback_tracker):
            monitor.subscribe(callback_tracker.track)
            ...
            assert callback_tracker.get_values() == [True, False]
    """
    class CallbackTracker:
        def __init__(self):
            self._lock = threading.Lock()
            self.values = []

        def track(self, value=None):
            with self._lock:
                self.values.append(value)

        def was_called(self) -> bool:
            return self.get_call_count() > 0

        def get_call_count(self) -> int:
            with self._lock:
                return len(self.values)

        def get_values(self):
            with self._lock:
                return list(self.values)

    return CallbackTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Register markers.

        pytest -m unit              # fake time only
        pytest -m "not integration" # skip real-thread tests
        pytest -m "not slow"
    """
    config.addinivalue_line("markers", "unit: Fast, isolated tests on fake time")
    config.addinivalue_line("markers", "integration: Tests on real threads and wall-clock waits")
    config.addinivalue_line("markers", "slow: Tests that take noticeably longer")
