"""
Connectivity Module

Reliable internet reachability for applications: an engine that actively
probes a known endpoint on a timer and publishes a boolean, instead of
trusting the link state the OS reports.

Public API:
    - ConnectivityMonitor: The polling engine (start / reconfigure / stop)
    - create_monitor: Quick monitor creation (optionally fully mocked)
    - ConnectionConfig: Public options (ms units)
    - Prober: One bounded-duration probe -> bool
    - IntervalScheduler: Single recurring timer with disarm-then-arm
    - ConnectivityStateHolder: Published boolean with observers
    - ConnectivityFactory: Creates real/mock HTTP and timer ports
    - MonitorState, PollingMode, ProbeFailure: Enumerations

Usage:
    from connectivity import create_monitor

    monitor = create_monitor(interval=2000)
    monitor.subscribe(lambda online: print("online" if online else "offline"))
    ...
    monitor.stop()
"""

from connectivity.constants import MonitorState, PollingMode, ProbeFailure
from connectivity.controllers.connectivity_monitor import ConnectivityMonitor
from connectivity.controllers.interval_scheduler import IntervalScheduler
from connectivity.controllers.prober import Prober, ProbeResult
from connectivity.controllers.state_holder import ConnectivityStateHolder
from connectivity.factory import ConnectivityFactory, create_monitor
from connectivity.interfaces.background_interface import BackgroundSetup
from connectivity.interfaces.http_probe_interface import (
    HTTPProbeInterface,
    ProbeError,
)
from connectivity.interfaces.timer_interface import TimerInterface
from connectivity.models.config import ConnectionConfig, ProbeConfig, ScheduleConfig

__all__ = [
    "BackgroundSetup",
    "ConnectionConfig",
    "ConnectivityFactory",
    "ConnectivityMonitor",
    "ConnectivityStateHolder",
    "HTTPProbeInterface",
    "IntervalScheduler",
    "MonitorState",
    "PollingMode",
    "ProbeConfig",
    "ProbeError",
    "ProbeFailure",
    "ProbeResult",
    "Prober",
    "ScheduleConfig",
    "TimerInterface",
    "create_monitor",
]
