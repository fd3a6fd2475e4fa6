"""
Connectivity Test Configuration and Fixtures

Shared fixtures for connectivity module tests.
Everything here runs on fake time (MockTimer) and a fake network
(MockHTTPProbe) unless a test builds its own ports.
"""

import pytest

from connectivity.controllers.connectivity_monitor import ConnectivityMonitor
from connectivity.controllers.interval_scheduler import IntervalScheduler
from connectivity.controllers.prober import Prober
from connectivity.implementations.mock_background import MockBackgroundSetup
from connectivity.implementations.mock_probe import MockHTTPProbe
from connectivity.implementations.mock_timer import MockTimer
from connectivity.models.config import ProbeConfig

TEST_URL = "https://reachability.test/generate_204"


# =============================================================================
# PORT FIXTURES
# =============================================================================

@pytest.fixture
def mock_timer():
    """
    Provide a MockTimer (virtual clock at t=0).

    Usage:
        def test_ticks(mock_timer):
            mock_timer.advance(1.0)  # fires everything due in the next second
    """
    timer = MockTimer()
    yield timer
    timer.cleanup()


@pytest.fixture
def mock_probe():
    """Provide a MockHTTPProbe answering 204 instantly."""
    probe = MockHTTPProbe(status_code=204)
    yield probe
    probe.cleanup()


@pytest.fixture
def mock_background():
    """Provide a manually triggered background setup."""
    return MockBackgroundSetup()


@pytest.fixture
def probe_config():
    """ProbeConfig pointing at the test URL, 500ms deadline, expects 204."""
    return ProbeConfig(
        url=TEST_URL,
        timeout_ms=500,
        expected_status_codes=frozenset({204}),
    )


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================

@pytest.fixture
def prober(mock_probe):
    """Provide a Prober using the mock transport."""
    return Prober(http_probe=mock_probe)


@pytest.fixture
def scheduler(mock_timer):
    """Provide an IntervalScheduler on the mock timer."""
    scheduler = IntervalScheduler(timer=mock_timer)
    yield scheduler
    scheduler.cleanup()


@pytest.fixture
def monitor(mock_probe, mock_timer):
    """
    Provide a ConnectivityMonitor on mock ports (not started).

    interval=1000ms, initial state False so a successful probe is visible.
    """
    monitor = ConnectivityMonitor(
        http_probe=mock_probe,
        timer=mock_timer,
        reachability_url=TEST_URL,
        initial_connection_state=False,
        interval=1000,
    )
    yield monitor
    monitor.cleanup()


@pytest.fixture
def background_monitor(mock_probe, mock_timer, mock_background):
    """
    Provide a monitor with a background setup (not started).

    interval=1000ms, background_interval=5000ms.
    """
    monitor = ConnectivityMonitor(
        http_probe=mock_probe,
        timer=mock_timer,
        reachability_url=TEST_URL,
        interval=1000,
        background_interval=5000,
        background_setup=mock_background,
    )
    yield monitor
    monitor.cleanup()
