"""
requests HTTP Probe Implementation

Concrete implementation of HTTPProbeInterface using the requests library.

Each call uses a fresh requests.Session so that:
- no pooled keep-alive connection can answer for a network that went away
- cancelling the attempt only closes THIS attempt's connections

Cancellation shuts down the socket the request is blocked on.
Session.close() alone only drops idle pooled connections, and the
(connect, read) timeouts bound each socket operation, not the request.
"""

import logging
import socket
import threading
from functools import partial
from typing import Callable, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool

from connectivity.constants import NO_CACHE_HEADERS, USER_AGENT
from connectivity.interfaces.http_probe_interface import (
    CancellationToken,
    HTTPProbeInterface,
    ProbeTimeoutError,
    ProbeTransportError,
)


# =============================================================================
# CANCELLABLE TRANSPORT ADAPTER
# =============================================================================


class _TrackingPoolMixin:
    """Connection pool that reports every connection it hands out"""

    def __init__(self, *args, on_connection: Optional[Callable] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._on_connection = on_connection

    def _get_conn(self, timeout=None):
        conn = super()._get_conn(timeout=timeout)
        if self._on_connection is not None:
            self._on_connection(conn)
        return conn


class _TrackingHTTPConnectionPool(_TrackingPoolMixin, HTTPConnectionPool):
    pass


class _TrackingHTTPSConnectionPool(_TrackingPoolMixin, HTTPSConnectionPool):
    pass


class CancellableHTTPAdapter(HTTPAdapter):
    """
    HTTPAdapter whose in-flight connections can be torn down from another thread.

    Usage:
        adapter = CancellableHTTPAdapter()
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        cancel_token.add_callback(adapter.abort)
    """

    def __init__(self, *args, **kwargs):
        # Set before super().__init__, which calls init_poolmanager()
        self.logger = logging.getLogger(__name__)
        self._conn_lock = threading.Lock()
        self._connections: List = []
        self._aborted = False
        super().__init__(*args, **kwargs)

    def init_poolmanager(self, *args, **kwargs):
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = {
            "http": partial(_TrackingHTTPConnectionPool, on_connection=self._track),
            "https": partial(_TrackingHTTPSConnectionPool, on_connection=self._track),
        }

    def _track(self, conn) -> None:
        with self._conn_lock:
            self._connections.append(conn)
            aborted = self._aborted
        if aborted:
            self._shutdown(conn)

    @property
    def aborted(self) -> bool:
        with self._conn_lock:
            return self._aborted

    def abort(self) -> None:
        """
        Shut down every socket this adapter handed out.

        A thread blocked reading the response wakes up with a connection error.
        """
        with self._conn_lock:
            self._aborted = True
            connections, self._connections = self._connections, []

        for conn in connections:
            self._shutdown(conn)

        if connections:
            self.logger.debug(f"Aborted {len(connections)} in-flight connection(s)")

    def _shutdown(self, conn) -> None:
        sock = getattr(conn, "sock", None)
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                # Already closed by the peer or by the worker
                pass
        conn.close()


# =============================================================================
# HTTP PROBE
# =============================================================================


class RequestsHTTPProbe(HTTPProbeInterface):
    """
    Reachability transport backed by requests.

    The request is sent with stream=True: only the status line and headers
    are read, the body is never downloaded.
    """

    def __init__(self, verify_tls: bool = True):
        """
        Args:
            verify_tls: Verify server certificates (disable only for testing
                        against self-signed endpoints)
        """
        self.logger = logging.getLogger(__name__)
        self.verify_tls = verify_tls
        self.logger.debug(f"requests HTTP probe configured (verify_tls: {verify_tls})")

    def get_status(
        self,
        url: str,
        timeout: float,
        cancel_token: CancellationToken,
    ) -> int:
        session = requests.Session()
        session.headers.update(NO_CACHE_HEADERS)
        session.headers["User-Agent"] = USER_AGENT

        adapter = CancellableHTTPAdapter()
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # Runs on the Prober's thread at the deadline: kill the live socket,
        # then release the pool
        cancel_token.add_callback(adapter.abort)
        cancel_token.add_callback(session.close)

        try:
            # (connect, read) - both bounded by the probe deadline
            response = session.get(
                url,
                timeout=(timeout, timeout),
                stream=True,
                verify=self.verify_tls,
            )
            status = response.status_code
            response.close()
            return status

        except requests.Timeout as e:
            raise ProbeTimeoutError(f"Reachability timed out: {e}") from e

        except requests.RequestException as e:
            if cancel_token.is_cancelled:
                raise ProbeTimeoutError(
                    f"Reachability request aborted: {cancel_token.reason}",
                ) from e
            raise ProbeTransportError(f"Reachability request failed: {e}") from e

        finally:
            session.close()

    def is_available(self) -> bool:
        """requests is a hard dependency - always available once imported"""
        return True

    def cleanup(self) -> None:
        """Nothing pooled between calls"""
        self.logger.debug("requests HTTP probe cleanup called")
