"""
Network Connectivity Checker Tests

To run:
    pytest tests/core/test_network.py -v
"""

import time

import pytest

from connectivity.implementations.mock_probe import MockHTTPProbe
from connectivity.interfaces.http_probe_interface import ProbeTransportError
from core.network import check_internet_connectivity, get_network_status


@pytest.mark.unit
def test_check_reachable():
    """Test a 204 from the settings URL means connected."""
    probe = MockHTTPProbe(status_code=204)

    assert check_internet_connectivity(http_probe=probe) is True
    assert probe.get_request_count() == 1


@pytest.mark.unit
def test_check_unreachable():
    """Test a transport failure means not connected (no exception)."""
    probe = MockHTTPProbe()
    probe.set_failure(ProbeTransportError("Network is unreachable"))

    assert check_internet_connectivity(http_probe=probe) is False


@pytest.mark.unit
def test_check_timeout_override():
    """Test timeout_ms bounds the check."""
    probe = MockHTTPProbe(status_code=204, delay=1.0)

    start = time.monotonic()
    assert check_internet_connectivity(timeout_ms=50, http_probe=probe) is False
    assert time.monotonic() - start < 0.5


@pytest.mark.unit
def test_get_network_status_strings():
    """Test human-readable status."""
    assert get_network_status(http_probe=MockHTTPProbe(status_code=204)) == (
        True,
        "Internet available",
    )
    assert get_network_status(http_probe=MockHTTPProbe(status_code=511)) == (
        False,
        "No internet connection",
    )
