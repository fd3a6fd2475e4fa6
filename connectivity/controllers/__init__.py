"""
Connectivity Controllers Package

Exposes the engine components.
"""

from connectivity.controllers.connectivity_monitor import ConnectivityMonitor
from connectivity.controllers.interval_scheduler import IntervalScheduler
from connectivity.controllers.prober import Prober, ProbeResult
from connectivity.controllers.state_holder import ConnectivityStateHolder

# Public API (sorted alphabetically)
__all__ = [
    "ConnectivityMonitor",
    "ConnectivityStateHolder",
    "IntervalScheduler",
    "ProbeResult",
    "Prober",
]
