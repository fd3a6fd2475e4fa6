"""
Connectivity Implementations Package

Exposes concrete implementations of the engine's ports.
"""

from connectivity.implementations.mock_background import MockBackgroundSetup
from connectivity.implementations.mock_probe import MockHTTPProbe
from connectivity.implementations.mock_timer import MockTimer
from connectivity.implementations.requests_probe import RequestsHTTPProbe
from connectivity.implementations.signal_background import SignalBackgroundSetup
from connectivity.implementations.threading_timer import ThreadingTimer

# Public API (sorted alphabetically)
__all__ = [
    "MockBackgroundSetup",
    "MockHTTPProbe",
    "MockTimer",
    "RequestsHTTPProbe",
    "SignalBackgroundSetup",
    "ThreadingTimer",
]
