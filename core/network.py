"""
One-Shot Reachability Check

One-shot reachability check for scripts and startup code that need an
answer now rather than a continuously-updated value.

Uses the same Prober and settings as ConnectivityMonitor, so "reachable"
means the same thing everywhere: the configured URL answered with an
expected status within the timeout.
"""

import logging
from typing import Optional, Tuple

from connectivity.controllers.prober import Prober
from connectivity.interfaces.http_probe_interface import HTTPProbeInterface
from connectivity.models.config import ConnectionConfig


def check_internet_connectivity(
    timeout_ms: Optional[int] = None,
    http_probe: Optional[HTTPProbeInterface] = None,
) -> bool:
    """
    Check if the internet is reachable right now.

    Args:
        timeout_ms: Override REACHABILITY_TIMEOUT_MS for this check
        http_probe: Transport override (tests)

    Returns:
        True if the reachability URL answered as expected, False otherwise

    Note:
        - Blocks for at most the timeout
        - Never raises; failures are logged by the Prober
    """
    logger = logging.getLogger(__name__)

    overrides = {"timeout": timeout_ms} if timeout_ms is not None else {}
    config = ConnectionConfig.from_settings(**overrides)

    prober = Prober(http_probe)
    try:
        reachable = prober.probe(config.probe_config)
    finally:
        prober.cleanup()

    logger.debug(f"Internet check: {'available' if reachable else 'unavailable'}")
    return reachable


def get_network_status(
    http_probe: Optional[HTTPProbeInterface] = None,
) -> Tuple[bool, str]:
    """
    Probe once and describe the result for logs and CLI output.

    Returns:
        (reachable, "Internet available" | "No internet connection")
    """
    reachable = check_internet_connectivity(http_probe=http_probe)
    return reachable, "Internet available" if reachable else "No internet connection"
