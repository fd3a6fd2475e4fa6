"""
HTTP Probe Interface

Abstract interface for the network side of a reachability probe.
The Prober depends on this abstraction, not on requests directly, so the
engine can be driven by MockHTTPProbe in tests without any real I/O.

Also defines the per-attempt CancellationToken and the probe error taxonomy.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from connectivity.constants import ProbeFailure


class CancellationToken:
    """
    Cancellation signal scoped to ONE probe attempt.

    The Prober cancels the token when the deadline elapses. HTTP probe
    implementations register cleanup callbacks (closing a session, dropping
    a connection) that run exactly once on cancel.

    Tokens are never reused across attempts.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []
        self.reason: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> bool:
        """
        Cancel the attempt and run registered callbacks.

        Returns:
            True if this call cancelled the token, False if it already was
        """
        with self._lock:
            if self._event.is_set():
                return False
            self.reason = reason
            self._event.set()
            callbacks = self._callbacks
            self._callbacks = []

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                self.logger.debug(f"Cancellation callback failed: {e}")
        return True

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register cleanup to run on cancel (runs now if already cancelled)."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout. Returns True if cancelled."""
        return self._event.wait(timeout)


class HTTPProbeInterface(ABC):
    """
    Abstract base class for HTTP reachability transports.

    Any implementation must provide these methods to work with the Prober.
    """

    @abstractmethod
    def get_status(
        self,
        url: str,
        timeout: float,
        cancel_token: CancellationToken,
    ) -> int:
        """
        Issue one GET request with caching disabled and return its status code.

        This is a BLOCKING call. The Prober runs it on a worker thread and
        cancels the token when the deadline elapses; implementations should
        register a callback on the token that aborts the in-flight request.

        Args:
            url: Probe target
            timeout: Deadline in seconds
            cancel_token: Token for this attempt only

        Returns:
            HTTP status code of the response

        Raises:
            ProbeTimeoutError: Request did not complete in time
            ProbeTransportError: DNS, connection, TLS or other transport failure
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this transport can be used on this system.

        Returns:
            True if the transport is ready, False otherwise
        """

    @abstractmethod
    def cleanup(self) -> None:
        """
        Release transport resources.
        Called when the owning monitor shuts down.
        """


class ProbeError(Exception):
    """
    Base exception for failed reachability probes.

    Never leaves the Prober: every ProbeError is logged and folded into a
    False result.
    """

    failure = ProbeFailure.TRANSPORT_FAILURE

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProbeTimeoutError(ProbeError):
    """The probe deadline elapsed before the response arrived."""

    failure = ProbeFailure.TIMEOUT


class ProbeTransportError(ProbeError):
    """
    The request failed below HTTP.

    Examples:
    - DNS lookup failed
    - Connection refused or reset
    - TLS handshake failed
    """

    failure = ProbeFailure.TRANSPORT_FAILURE


class UnexpectedStatusError(ProbeError):
    """The response status is not one of the expected codes."""

    failure = ProbeFailure.UNEXPECTED_STATUS
