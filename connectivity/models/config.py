"""
Connectivity Configuration Models

Data classes describing how the monitor probes and how often.
All durations are in milliseconds, like the public options.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Optional

from connectivity.constants import (
    DEFAULT_BACKGROUND_INTERVAL_MS,
    DEFAULT_EXPECTED_RESPONSE_STATUS,
    DEFAULT_INITIAL_CONNECTION_STATE,
    DEFAULT_INTERVAL_MS,
    DEFAULT_REACHABILITY_URL,
    DEFAULT_TIMEOUT_MS,
    SETTINGS_DEFAULTS,
    PollingMode,
)
from connectivity.interfaces.background_interface import BackgroundSetup
from connectivity.utils.config_utils import (
    parse_status_codes,
    validate_positive_ms,
    validate_status_codes,
    validate_url,
)


@dataclass(frozen=True)
class ProbeConfig:
    """What a single probe requests and what counts as reachable."""

    url: str
    timeout_ms: int
    expected_status_codes: FrozenSet[int]

    def is_expected(self, status_code: int) -> bool:
        return status_code in self.expected_status_codes


@dataclass(frozen=True)
class ScheduleConfig:
    """The two polling periods."""

    foreground_interval_ms: int
    background_interval_ms: int

    def interval_for(self, mode: PollingMode) -> int:
        """Period to use for a polling mode"""
        if mode == PollingMode.BACKGROUND:
            return self.background_interval_ms
        return self.foreground_interval_ms


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Public options of a ConnectivityMonitor.

    Validated on construction - invalid values raise ValueError.

    Example:
        config = ConnectionConfig(interval=2000, expected_response_status={200, 204})
        monitor = ConnectivityMonitor(config)
    """

    initial_connection_state: bool = DEFAULT_INITIAL_CONNECTION_STATE
    timeout: int = DEFAULT_TIMEOUT_MS  # Probe deadline (ms)
    reachability_url: str = DEFAULT_REACHABILITY_URL
    expected_response_status: FrozenSet[int] = DEFAULT_EXPECTED_RESPONSE_STATUS
    interval: int = DEFAULT_INTERVAL_MS  # Foreground period (ms)
    background_interval: int = DEFAULT_BACKGROUND_INTERVAL_MS  # Background period (ms)
    background_setup: Optional[BackgroundSetup] = field(default=None, compare=False)

    def __post_init__(self):
        # Accept lists/sets/strings for status codes, store a frozenset
        object.__setattr__(
            self,
            "expected_response_status",
            parse_status_codes(self.expected_response_status),
        )
        object.__setattr__(
            self,
            "initial_connection_state",
            bool(self.initial_connection_state),
        )

        validate_positive_ms("timeout", self.timeout)
        validate_positive_ms("interval", self.interval)
        validate_positive_ms("background_interval", self.background_interval)
        validate_url(self.reachability_url)
        validate_status_codes(self.expected_response_status)

        if self.background_setup is not None and not callable(self.background_setup):
            raise ValueError(
                f"background_setup must be callable, got {type(self.background_setup).__name__}",
            )

    @classmethod
    def from_settings(cls, **overrides: Any) -> "ConnectionConfig":
        """
        Build a config from config/settings.py (environment / .env driven).

        Args:
            **overrides: Options that take precedence over settings

        Example:
            # REACHABILITY_URL=http://captive.apple.com/hotspot-detect.html in .env
            config = ConnectionConfig.from_settings(interval=5000)
        """
        values: Dict[str, Any] = dict(SETTINGS_DEFAULTS)
        values.update(overrides)
        return cls(**values)

    @classmethod
    def option_names(cls) -> FrozenSet[str]:
        return frozenset(f.name for f in fields(cls))

    def replace(self, **overrides: Any) -> "ConnectionConfig":
        """Return a copy with some options changed (validated again)"""
        return replace(self, **overrides)

    @property
    def probe_config(self) -> ProbeConfig:
        return ProbeConfig(
            url=self.reachability_url,
            timeout_ms=self.timeout,
            expected_status_codes=self.expected_response_status,
        )

    @property
    def schedule_config(self) -> ScheduleConfig:
        return ScheduleConfig(
            foreground_interval_ms=self.interval,
            background_interval_ms=self.background_interval,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict for logging and status output"""
        return {
            "initial_connection_state": self.initial_connection_state,
            "timeout": self.timeout,
            "reachability_url": self.reachability_url,
            "expected_response_status": sorted(self.expected_response_status),
            "interval": self.interval,
            "background_interval": self.background_interval,
            "background_setup": self.background_setup is not None,
        }
