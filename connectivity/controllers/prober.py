"""
Prober

Runs one reachability probe with a hard deadline and reduces the outcome
to reachable / unreachable.

Outcome rules:
- status in expected codes            -> True
- any other status                    -> False (logged)
- deadline elapsed                    -> False (logged, request cancelled)
- transport failure (DNS, TLS, ...)   -> False (logged)

probe() never raises. Failure IS the unreachable signal.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from connectivity.constants import PROBE_THREAD_NAME, ProbeFailure
from connectivity.factory import create_http_probe
from connectivity.interfaces.http_probe_interface import (
    CancellationToken,
    HTTPProbeInterface,
    ProbeError,
    ProbeTimeoutError,
    ProbeTransportError,
    UnexpectedStatusError,
)
from connectivity.models.config import ProbeConfig
from connectivity.utils.config_utils import ms_to_seconds


@dataclass(frozen=True)
class ProbeResult:
    """Detailed outcome of one probe"""

    reachable: bool
    elapsed: float  # seconds
    status_code: Optional[int] = None
    failure: Optional[ProbeFailure] = None
    message: str = ""


class Prober:
    """
    Issues bounded-duration reachability probes through an HTTP port.

    The blocking request runs on a worker thread; the calling thread waits
    at most timeout_ms for it. On deadline the attempt's CancellationToken
    is cancelled so the transport can drop the connection.

    Usage:
        prober = Prober()
        if prober.probe(config.probe_config):
            print("online")
    """

    def __init__(self, http_probe: Optional[HTTPProbeInterface] = None):
        """
        Args:
            http_probe: Transport to use (defaults to requests)
        """
        self.logger = logging.getLogger(__name__)
        self.http = http_probe or create_http_probe()

        # Stats (read by get_status)
        self._lock = threading.Lock()
        self._probe_count = 0
        self._failure_counts: Dict[ProbeFailure, int] = {kind: 0 for kind in ProbeFailure}
        self.last_result: Optional[ProbeResult] = None

    def probe(self, config: ProbeConfig) -> bool:
        """
        Probe config.url once.

        Returns:
            True if the response status is expected, False otherwise
        """
        return self.probe_detailed(config).reachable

    def probe_detailed(self, config: ProbeConfig) -> ProbeResult:
        """
        Probe config.url once and describe the outcome.

        Returns:
            ProbeResult (never raises)
        """
        timeout = ms_to_seconds(config.timeout_ms)
        token = CancellationToken()
        outcome: Dict[str, Any] = {}
        start = time.monotonic()

        worker = threading.Thread(
            target=self._fetch,
            args=(config.url, timeout, token, outcome),
            daemon=True,
            name=PROBE_THREAD_NAME,
        )
        worker.start()
        worker.join(timeout)

        if worker.is_alive():
            token.cancel("Reachability timed out.")
            error: Optional[ProbeError] = ProbeTimeoutError(
                f"Reachability timed out after {config.timeout_ms}ms.",
            )
        else:
            error = outcome.get("error")

        elapsed = time.monotonic() - start

        if error is None:
            status = outcome["status"]
            if config.is_expected(status):
                result = ProbeResult(reachable=True, elapsed=elapsed, status_code=status)
                self.logger.debug(
                    f"Reachability OK: {config.url} -> {status} ({elapsed * 1000:.0f}ms)",
                )
                return self._record(result)

            error = UnexpectedStatusError(
                f"Reachability returned status {status}, that is not expected.",
                status_code=status,
            )

        self.logger.warning(str(error))
        return self._record(
            ProbeResult(
                reachable=False,
                elapsed=elapsed,
                status_code=error.status_code,
                failure=error.failure,
                message=str(error),
            ),
        )

    def _fetch(
        self,
        url: str,
        timeout: float,
        token: CancellationToken,
        outcome: Dict[str, Any],
    ) -> None:
        """Worker thread body - stores either 'status' or 'error' in outcome"""
        try:
            outcome["status"] = self.http.get_status(url, timeout, token)
        except ProbeError as e:
            outcome["error"] = e
        except Exception as e:
            # Anything unexpected from a transport is still just "unreachable"
            outcome["error"] = ProbeTransportError(f"Reachability request failed: {e}")
            self.logger.debug("Unexpected error in HTTP probe", exc_info=True)

    def _record(self, result: ProbeResult) -> ProbeResult:
        with self._lock:
            self._probe_count += 1
            if result.failure is not None:
                self._failure_counts[result.failure] += 1
            self.last_result = result
        return result

    def get_status(self) -> Dict[str, Any]:
        """
        Get probe statistics.

        Returns:
            Dictionary with total probes, failures per kind and last result
        """
        with self._lock:
            last = self.last_result
            return {
                "probes": self._probe_count,
                "failures": {
                    kind.value: count for kind, count in self._failure_counts.items()
                },
                "last_reachable": last.reachable if last else None,
                "last_status_code": last.status_code if last else None,
                "last_failure": last.failure.value if last and last.failure else None,
            }

    def cleanup(self) -> None:
        self.http.cleanup()
