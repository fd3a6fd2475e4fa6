"""
Mock HTTP Probe Implementation

Simulated reachability transport for development and testing.
Returns scripted status codes or failures instead of touching the network.

Perfect for:
- Unit tests of the Prober and the monitor
- Simulating timeouts (delays that honour cancellation)
- Running the monitor service offline (--mock)
"""

import logging
import threading
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Union

from connectivity.interfaces.http_probe_interface import (
    CancellationToken,
    HTTPProbeInterface,
    ProbeError,
    ProbeTimeoutError,
)

# A scripted outcome: a status code, or a ProbeError to raise
Outcome = Union[int, ProbeError]


class MockHTTPProbe(HTTPProbeInterface):
    """
    Mock transport that answers from a script.

    Outcomes queued with queue_outcomes() are consumed first (one per call);
    once the queue is empty every call returns the default outcome.
    """

    def __init__(self, status_code: int = 204, delay: float = 0.0):
        """
        Initialize mock probe.

        Args:
            status_code: Default status returned when nothing is queued
            delay: Seconds each request "takes" (interrupted by cancellation)
        """
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._default: Outcome = status_code
        self._queued: Deque[Outcome] = deque()
        self.delay = delay

        # Tracking (useful for testing)
        self.request_history: List[str] = []
        self.cancelled_count = 0
        self.in_flight = 0
        self.max_in_flight = 0

        self.logger.info(
            f"Mock HTTP probe initialized (status: {status_code}, delay: {delay}s)",
        )

    def get_status(
        self,
        url: str,
        timeout: float,
        cancel_token: CancellationToken,
    ) -> int:
        with self._lock:
            self.request_history.append(url)
            outcome = self._queued.popleft() if self._queued else self._default
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)

        self.logger.debug(f"[MOCK PROBE] GET {url} -> {outcome!r}")

        try:
            if self.delay > 0 and cancel_token.wait(self.delay):
                with self._lock:
                    self.cancelled_count += 1
                raise ProbeTimeoutError(
                    f"Reachability request aborted: {cancel_token.reason}",
                )

            if isinstance(outcome, ProbeError):
                raise outcome
            return outcome
        finally:
            with self._lock:
                self.in_flight -= 1

    def is_available(self) -> bool:
        """Mock probe is always available"""
        return True

    def cleanup(self) -> None:
        """Clean up (nothing to do for mock)"""
        self.logger.debug("[MOCK PROBE] Cleanup called")

    # =========================================================================
    # TESTING HELPER METHODS (not part of HTTPProbeInterface)
    # =========================================================================

    def set_status(self, status_code: int) -> None:
        """Set the default status code"""
        with self._lock:
            self._default = status_code

    def set_failure(self, error: ProbeError) -> None:
        """Make every unscripted request fail with error"""
        with self._lock:
            self._default = error

    def queue_outcomes(self, outcomes: List[Outcome]) -> None:
        """Script the next outcomes, consumed one per request"""
        with self._lock:
            self._queued.extend(outcomes)

    def get_request_count(self) -> int:
        return len(self.request_history)

    def get_status_info(self) -> Dict[str, Any]:
        """
        Get mock state (for test verification).

        Returns:
            Dictionary with request count, in-flight counters and cancellations
        """
        with self._lock:
            return {
                "requests": len(self.request_history),
                "in_flight": self.in_flight,
                "max_in_flight": self.max_in_flight,
                "cancelled": self.cancelled_count,
                "queued": len(self._queued),
                "delay": self.delay,
            }
