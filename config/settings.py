"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Every value can be overridden from the environment or a .env file
- Import these settings in modules: from config.settings import REACHABILITY_URL
- Time values for the reachability engine are in MILLISECONDS
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# REACHABILITY PROBE CONFIGURATION
# =============================================================================

# Seed value published until the first probe resolves
INITIAL_CONNECTION_STATE = _env_bool("INITIAL_CONNECTION_STATE", "true")

# Probe target - returns an empty 204 when the internet is really reachable.
# Captive portals answer it with a redirect or a 200 login page instead.
REACHABILITY_URL = os.getenv(
    "REACHABILITY_URL",
    "https://clients3.google.com/generate_204",
)

# Deadline for a single probe (milliseconds)
REACHABILITY_TIMEOUT_MS = int(os.getenv("REACHABILITY_TIMEOUT_MS", "3000"))

# Status codes counted as reachable (comma separated in the environment)
EXPECTED_RESPONSE_STATUS = tuple(
    int(code)
    for code in os.getenv("EXPECTED_RESPONSE_STATUS", "204").split(",")
    if code.strip()
)

# =============================================================================
# POLLING CONFIGURATION
# =============================================================================

# Foreground polling period (milliseconds)
CHECK_INTERVAL_MS = int(os.getenv("CHECK_INTERVAL_MS", "1000"))

# Background polling period (milliseconds) - only used with a background setup
BACKGROUND_CHECK_INTERVAL_MS = int(
    os.getenv("BACKGROUND_CHECK_INTERVAL_MS", "10000"),
)

# =============================================================================
# MONITOR SERVICE CONFIGURATION
# =============================================================================

# Current connectivity written as JSON on every change
# /tmp is intentional - readable by status bars and scripts without setup
STATUS_FILE = os.getenv(
    "CONNECTIVITY_STATUS_FILE",
    "/tmp/connectivity_status.json",  # noqa: S108
)

# How often the service main loop wakes up to check for shutdown (seconds)
SERVICE_LOOP_INTERVAL = float(os.getenv("SERVICE_LOOP_INTERVAL", "0.5"))

# Logging Configuration
LOG_DIR = os.getenv("CONNECTIVITY_LOG_DIR", "/var/log/connectivity")
LOG_SERVICE_FILE = "service.log"
LOG_FALLBACK_DIR = "logs"
LOG_BACKUP_COUNT = 7  # Days of rotated logs to keep
