"""
Connectivity Factory

Factory for creating the engine's port implementations.
Single place to decide real vs mock transport and timer, so controllers
never import requests or threading timers directly.
"""

import logging
from typing import TYPE_CHECKING, Any, Literal, Optional

from connectivity.implementations.mock_probe import MockHTTPProbe
from connectivity.implementations.mock_timer import MockTimer
from connectivity.implementations.requests_probe import RequestsHTTPProbe
from connectivity.implementations.threading_timer import ThreadingTimer
from connectivity.interfaces.http_probe_interface import HTTPProbeInterface
from connectivity.interfaces.timer_interface import TimerInterface

if TYPE_CHECKING:
    from connectivity.controllers.connectivity_monitor import ConnectivityMonitor
    from connectivity.models.config import ConnectionConfig

# Type aliases for better type hints
PortMode = Literal["real", "mock"]


class ConnectivityFactory:
    """
    Factory for creating HTTP probe and timer implementations.

    Usage:
        # Real network and real threads
        probe = ConnectivityFactory.create_http_probe()
        timer = ConnectivityFactory.create_timer()

        # Mock everything (tests, offline development)
        probe = ConnectivityFactory.create_http_probe(mode="mock")
        timer = ConnectivityFactory.create_timer(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_http_probe(cls, mode: PortMode = "real", **kwargs: Any) -> HTTPProbeInterface:
        """
        Create an HTTP probe transport.

        Args:
            mode: "real" (requests) or "mock" (scripted, no network)
            **kwargs: Passed to the implementation constructor

        Returns:
            HTTPProbeInterface implementation

        Raises:
            ValueError: If mode is unknown
        """
        if mode == "mock":
            cls._logger.info("Creating Mock HTTP probe")
            return MockHTTPProbe(**kwargs)

        if mode == "real":
            cls._logger.debug("Creating requests HTTP probe")
            return RequestsHTTPProbe(**kwargs)

        raise ValueError(f"Unknown HTTP probe mode: {mode!r}")

    @classmethod
    def create_timer(cls, mode: PortMode = "real") -> TimerInterface:
        """
        Create a recurring timer.

        Args:
            mode: "real" (threads, wall-clock) or "mock" (virtual clock,
                  driven by MockTimer.advance())

        Returns:
            TimerInterface implementation

        Raises:
            ValueError: If mode is unknown
        """
        if mode == "mock":
            cls._logger.info("Creating Mock timer")
            return MockTimer()

        if mode == "real":
            cls._logger.debug("Creating threading timer")
            return ThreadingTimer()

        raise ValueError(f"Unknown timer mode: {mode!r}")


# Convenience functions for quick creation


def create_http_probe(force_mock: bool = False) -> HTTPProbeInterface:
    """
    Quick HTTP probe creation with simple mock override.

    Example:
        probe = create_http_probe()
        probe = create_http_probe(force_mock=True)  # testing
    """
    mode = "mock" if force_mock else "real"
    return ConnectivityFactory.create_http_probe(mode=mode)


def create_timer(force_mock: bool = False) -> TimerInterface:
    """
    Quick timer creation with simple mock override.
    """
    mode = "mock" if force_mock else "real"
    return ConnectivityFactory.create_timer(mode=mode)


def create_monitor(
    config: Optional["ConnectionConfig"] = None,
    force_mock: bool = False,
    start: bool = True,
    **options: Any,
) -> "ConnectivityMonitor":
    """
    Create (and by default start) a ConnectivityMonitor.

    Args:
        config: ConnectionConfig, or None for defaults
        force_mock: Use MockHTTPProbe and MockTimer (nothing fires until
                    monitor.scheduler.timer.advance() is called)
        start: Call start() before returning
        **options: Individual options (interval=2000, timeout=500, ...)

    Returns:
        ConnectivityMonitor

    Example:
        monitor = create_monitor(interval=5000)
        print(monitor.is_connected)
        monitor.stop()
    """
    # Imported here: controllers import this module for the port helpers
    from connectivity.controllers.connectivity_monitor import ConnectivityMonitor

    monitor = ConnectivityMonitor(
        config,
        http_probe=create_http_probe(force_mock=force_mock),
        timer=create_timer(force_mock=force_mock),
        **options,
    )
    if start:
        monitor.start()
    return monitor
