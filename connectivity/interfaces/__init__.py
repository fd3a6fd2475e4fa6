"""
Connectivity Interfaces Package

Exposes abstract interfaces that define contracts for the engine's ports.
"""

from connectivity.interfaces.background_interface import (
    BackgroundHandler,
    BackgroundSetup,
    BackgroundTeardown,
)
from connectivity.interfaces.http_probe_interface import (
    CancellationToken,
    HTTPProbeInterface,
    ProbeError,
    ProbeTimeoutError,
    ProbeTransportError,
    UnexpectedStatusError,
)
from connectivity.interfaces.timer_interface import TimerHandle, TimerInterface

# Public API (sorted alphabetically)
__all__ = [
    "BackgroundHandler",
    "BackgroundSetup",
    "BackgroundTeardown",
    "CancellationToken",
    "HTTPProbeInterface",
    "ProbeError",
    "ProbeTimeoutError",
    "ProbeTransportError",
    "TimerHandle",
    "TimerInterface",
    "UnexpectedStatusError",
]
