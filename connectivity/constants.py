"""
Connectivity Constants

Enums and timing values shared by the reachability engine.

Note: user-tunable values (URL, timeout, intervals) live in config/settings.py.
This file re-exports them as DEFAULT_* names and adds the enums and internal
thread/timing constants that are not meant to be configured.
"""

from enum import Enum

from config.settings import (
    BACKGROUND_CHECK_INTERVAL_MS,
    CHECK_INTERVAL_MS,
    EXPECTED_RESPONSE_STATUS,
    INITIAL_CONNECTION_STATE,
    REACHABILITY_TIMEOUT_MS,
    REACHABILITY_URL,
)

# =============================================================================
# PUBLIC OPTION DEFAULTS
# =============================================================================
# These are the documented library defaults. They are NOT read from the
# environment: ConnectionConfig() always means the same thing everywhere.
# Use ConnectionConfig.from_settings() for environment-driven values.

DEFAULT_INITIAL_CONNECTION_STATE = True
DEFAULT_TIMEOUT_MS = 3000
DEFAULT_REACHABILITY_URL = "https://clients3.google.com/generate_204"
DEFAULT_EXPECTED_RESPONSE_STATUS = frozenset({204})
DEFAULT_INTERVAL_MS = 1000
DEFAULT_BACKGROUND_INTERVAL_MS = 10000

# Environment-driven values (config/settings.py), used by from_settings()
SETTINGS_DEFAULTS = {
    "initial_connection_state": INITIAL_CONNECTION_STATE,
    "timeout": REACHABILITY_TIMEOUT_MS,
    "reachability_url": REACHABILITY_URL,
    "expected_response_status": frozenset(EXPECTED_RESPONSE_STATUS),
    "interval": CHECK_INTERVAL_MS,
    "background_interval": BACKGROUND_CHECK_INTERVAL_MS,
}


# =============================================================================
# HTTP PROBE CONSTANTS
# =============================================================================

# Headers that stop any intermediate cache from answering for the network
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, max-age=0",
    "Pragma": "no-cache",
}

USER_AGENT = "connectivity-monitor/1.0"

ALLOWED_URL_SCHEMES = ("http", "https")


# =============================================================================
# THREADING CONSTANTS
# =============================================================================

PROBE_THREAD_NAME = "ReachabilityProbe"
TIMER_THREAD_NAME = "IntervalTimer"
TICK_THREAD_NAME = "IntervalTick"

# How long cancel() waits for a timer thread to notice its stop event (seconds)
TIMER_JOIN_TIMEOUT = 1.0


# =============================================================================
# ENUMS
# =============================================================================


class MonitorState(Enum):
    """Lifecycle of a ConnectivityMonitor."""

    UNINITIALIZED = "uninitialized"
    RUNNING = "running"


class PollingMode(Enum):
    """Which polling period is active."""

    FOREGROUND = "foreground"
    BACKGROUND = "background"


class ProbeFailure(Enum):
    """Why a probe reported the network as unreachable."""

    TIMEOUT = "timeout"
    TRANSPORT_FAILURE = "transport_failure"
    UNEXPECTED_STATUS = "unexpected_status"
