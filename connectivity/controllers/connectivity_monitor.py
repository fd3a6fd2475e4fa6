"""
Connectivity Monitor

The reachability polling engine. Wires the Prober, the IntervalScheduler,
the state holder and the optional background-mode source together.

State Flow:
    UNINITIALIZED --start()--> RUNNING(foreground) <--mode change--> RUNNING(background)
          ^                                    |
          +--------------- stop() -------------+   (terminal)

Tick Flow:
    timer tick -> Prober.probe() -> ConnectivityStateHolder.set() -> observers

Overlapping probes:
    Ticks are not gated on the previous probe. If a probe takes longer than
    the interval, two probes run at once and the last one to finish decides
    the published value.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from connectivity.constants import MonitorState, PollingMode
from connectivity.controllers.interval_scheduler import IntervalScheduler
from connectivity.controllers.prober import Prober
from connectivity.controllers.state_holder import ConnectivityStateHolder, Observer
from connectivity.interfaces.background_interface import BackgroundSetup
from connectivity.interfaces.http_probe_interface import HTTPProbeInterface
from connectivity.interfaces.timer_interface import TimerInterface
from connectivity.models.config import ConnectionConfig


def _resolve_config(
    config: Optional[ConnectionConfig],
    options: Dict[str, Any],
) -> ConnectionConfig:
    unknown = set(options) - ConnectionConfig.option_names()
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")

    if config is None:
        return ConnectionConfig(**options)
    if options:
        return config.replace(**options)
    return config


class ConnectivityMonitor:
    """
    Continuously-updated "is the internet reachable" boolean.

    Usage:
        # Explicit lifecycle
        monitor = ConnectivityMonitor(interval=2000)
        monitor.subscribe(lambda online: print("online" if online else "offline"))
        monitor.start()
        ...
        monitor.stop()

        # Or as a context manager (stop guaranteed)
        with ConnectivityMonitor() as monitor:
            print(monitor.is_connected)
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        *,
        http_probe: Optional[HTTPProbeInterface] = None,
        timer: Optional[TimerInterface] = None,
        **options: Any,
    ):
        """
        Initialize the monitor. Nothing is scheduled until start().

        Args:
            config: Full configuration (defaults to ConnectionConfig())
            http_probe: HTTP transport port (defaults to requests)
            timer: Timer port (defaults to ThreadingTimer)
            **options: Individual options, applied on top of config

        Raises:
            ValueError: If an option is unknown or invalid
        """
        self.logger = logging.getLogger(__name__)

        self.config = _resolve_config(config, options)
        self._probe_config = self.config.probe_config

        self.prober = Prober(http_probe)
        self.scheduler = IntervalScheduler(timer)
        self.state_holder = ConnectivityStateHolder(self.config.initial_connection_state)

        self._lock = threading.RLock()
        self.state = MonitorState.UNINITIALIZED
        self.mode = PollingMode.FOREGROUND
        self._mode_observers: List[Callable[[PollingMode], None]] = []
        self._background_teardown: Optional[Callable[[], None]] = None
        self._shut_down = False
        self._cleaned_up = False

        self.logger.info(
            f"Connectivity Monitor initialized "
            f"(url: {self.config.reachability_url}, interval: {self.config.interval}ms, "
            f"timeout: {self.config.timeout}ms)",
        )

    # =========================================================================
    # PUBLIC STATE
    # =========================================================================

    @property
    def is_connected(self) -> bool:
        """Latest published reachability"""
        return self.state_holder.get()

    def get(self) -> bool:
        return self.state_holder.get()

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Call observer(reachable) whenever the published value changes.

        Returns:
            Unsubscribe callable
        """
        return self.state_holder.subscribe(observer)

    def subscribe_mode(self, observer: Callable[[PollingMode], None]) -> Callable[[], None]:
        """
        Call observer(mode) after the polling period follows a mode change.

        Returns:
            Unsubscribe callable
        """
        with self._lock:
            self._mode_observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._mode_observers:
                    self._mode_observers.remove(observer)

        return unsubscribe

    @property
    def is_running(self) -> bool:
        return self.state == MonitorState.RUNNING

    @property
    def current_period_ms(self) -> Optional[int]:
        """Period of the live timer, or None when not running"""
        return self.scheduler.period_ms

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> bool:
        """
        Arm the foreground timer and register the background source.

        Returns:
            True if running after the call, False if the monitor was stopped
            (stop is terminal - create a new monitor instead)

        Raises:
            Exception: Whatever the background setup raised (the timer is
                       disarmed again before re-raising)
        """
        with self._lock:
            if self._shut_down:
                self.logger.warning("Cannot start - monitor was already stopped")
                return False

            if self.state == MonitorState.RUNNING:
                self.logger.debug("Monitor already running")
                return True

            self.mode = PollingMode.FOREGROUND
            self.scheduler.arm(self.config.interval, self._on_tick)
            self.state = MonitorState.RUNNING

            # Registered AFTER arming: a setup that reports the current mode
            # synchronously re-arms the live timer instead of racing it
            try:
                self._register_background(self.config.background_setup)
            except Exception as e:
                self.logger.error(f"Background setup failed: {e}", exc_info=True)
                self.scheduler.disarm()
                self.state = MonitorState.UNINITIALIZED
                raise

        self.logger.info(
            f"Connectivity Monitor started "
            f"(initial state: {'reachable' if self.is_connected else 'unreachable'})",
        )
        return True

    def reconfigure(self, config: Optional[ConnectionConfig] = None, **options: Any) -> None:
        """
        Replace the configuration and fully re-arm.

        - Probe settings apply to the next tick (a probe in flight finishes
          with the settings it started with)
        - The timer is re-armed with the period of the current mode
        - A different background setup is torn down and the new one
          registered; the mode resets to foreground
        - initial_connection_state is only used at construction

        Raises:
            ValueError: If an option is unknown or invalid
        """
        new_config = _resolve_config(config or self.config, options)

        with self._lock:
            old_config = self.config
            self.config = new_config
            self._probe_config = new_config.probe_config

            if self.state != MonitorState.RUNNING:
                self.logger.info("Configuration updated (monitor not running)")
                return

            background_changed = new_config.background_setup is not old_config.background_setup
            mode_reset = background_changed and self.mode != PollingMode.FOREGROUND
            if background_changed:
                self._unregister_background()
                self.mode = PollingMode.FOREGROUND

            period = new_config.schedule_config.interval_for(self.mode)
            self.scheduler.rearm(period)

            if background_changed:
                self._register_background(new_config.background_setup)

        self.logger.info(
            f"Connectivity Monitor reconfigured ({self.mode.value}, every {period}ms)",
        )
        if mode_reset:
            self._notify_mode(PollingMode.FOREGROUND)

    def stop(self) -> None:
        """
        Disarm the timer and tear down the background registration.

        Safe to call repeatedly; only the first call does anything.
        Teardown runs even if disarming fails.
        """
        with self._lock:
            if self._shut_down:
                self.logger.debug("Monitor already stopped")
                return

            self._shut_down = True
            was_running = self.state == MonitorState.RUNNING
            self.state = MonitorState.UNINITIALIZED

            try:
                self.scheduler.disarm()
            finally:
                self._unregister_background()

        if was_running:
            self.logger.info("Connectivity Monitor stopped")

    def cleanup(self) -> None:
        """
        Stop and release the ports (HTTP transport, timer threads).
        """
        if self._cleaned_up:
            return
        self._cleaned_up = True

        self.stop()
        self.scheduler.cleanup()
        self.prober.cleanup()
        self.logger.debug("Connectivity Monitor cleanup complete")

    def __enter__(self) -> "ConnectivityMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cleanup()

    # =========================================================================
    # EVENT HANDLERS
    # =========================================================================

    def _on_tick(self) -> None:
        """Timer callback - one probe, one state update"""
        probe_config = self._probe_config
        reachable = self.prober.probe(probe_config)

        if self.state != MonitorState.RUNNING:
            self.logger.debug("Probe finished after stop - result discarded")
            return

        self.state_holder.set(reachable)

    def _on_mode_change(self, is_background: bool) -> None:
        """
        Background source callback - re-arm with the period for the new mode.

        Does not touch a probe already in flight.
        """
        with self._lock:
            if self.state != MonitorState.RUNNING:
                self.logger.debug("Mode change ignored - monitor not running")
                return

            mode = PollingMode.BACKGROUND if is_background else PollingMode.FOREGROUND
            self.mode = mode
            period = self.config.schedule_config.interval_for(mode)
            self.scheduler.rearm(period)

        self.logger.info(f"Polling mode: {mode.value} (every {period}ms)")
        self._notify_mode(mode)

    def _notify_mode(self, mode: PollingMode) -> None:
        with self._lock:
            observers = list(self._mode_observers)

        for observer in observers:
            try:
                observer(mode)
            except Exception as e:
                self.logger.error(f"Error in polling mode observer: {e}", exc_info=True)

    def _register_background(self, setup: Optional[BackgroundSetup]) -> None:
        if setup is None:
            return

        teardown = setup(self._on_mode_change)
        if teardown is not None and not callable(teardown):
            self.logger.warning(
                f"Background setup returned non-callable teardown "
                f"({type(teardown).__name__}) - ignored",
            )
            teardown = None

        self._background_teardown = teardown
        self.logger.debug("Background mode source registered")

    def _unregister_background(self) -> None:
        teardown, self._background_teardown = self._background_teardown, None
        if teardown is None:
            return
        try:
            teardown()
            self.logger.debug("Background mode source unregistered")
        except Exception as e:
            self.logger.error(f"Error tearing down background source: {e}", exc_info=True)

    # =========================================================================
    # STATUS
    # =========================================================================

    def get_status(self) -> Dict[str, Any]:
        """
        Get monitor status for logging and diagnostics.

        Returns:
            Dictionary with lifecycle state, mode, period, published value,
            configuration and component statistics
        """
        with self._lock:
            return {
                "state": self.state.value,
                "mode": self.mode.value,
                "period_ms": self.scheduler.period_ms,
                "reachable": self.state_holder.get(),
                "background_registered": self._background_teardown is not None,
                "config": self.config.to_dict(),
                "scheduler": self.scheduler.get_status(),
                "prober": self.prober.get_status(),
                "state_holder": self.state_holder.get_status(),
            }
