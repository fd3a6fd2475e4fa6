"""
Connectivity Monitor Service

Standalone process that keeps a ConnectivityMonitor running and exposes its
value to the rest of the machine.

Architecture:
- One ConnectivityMonitor (real requests transport, threading timer)
- Status file rewritten atomically on every reachability change
- SIGUSR1 / SIGUSR2 switch between background and foreground polling
- SIGTERM / SIGINT shut down cleanly (timer disarmed, signals restored)

State Flow:
    STARTING → RUNNING → STOPPING

Usage:
    python monitor_service.py
    python monitor_service.py --interval 2000 --background-interval 30000
    python monitor_service.py --mock          # scripted network (always 204)

    kill -USR1 <pid>   # poll slowly (user away)
    kill -USR2 <pid>   # poll normally
"""

import argparse
import json
import logging
import logging.handlers
import os
import signal
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config.settings import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_FALLBACK_DIR,
    LOG_SERVICE_FILE,
    SERVICE_LOOP_INTERVAL,
    STATUS_FILE,
)
from connectivity import ConnectionConfig, ConnectivityMonitor, PollingMode
from connectivity.factory import create_http_probe, create_timer
from connectivity.implementations.signal_background import SignalBackgroundSetup
from connectivity.utils.config_utils import parse_bool, parse_status_codes


class ConnectivityService:
    """
    Service wrapper around ConnectivityMonitor.

    Usage:
        service = ConnectivityService(ConnectionConfig.from_settings())
        service.run()  # Blocks until shutdown signal
    """

    def __init__(
        self,
        config: ConnectionConfig,
        status_file: Optional[Path] = None,
        force_mock: bool = False,
    ):
        """Create the monitor and wire the status file observer."""
        self.logger = logging.getLogger(__name__)
        self.logger.info("Initializing Connectivity Service...")

        self.running = False
        self.start_time = time.time()
        self.status_file = Path(status_file or STATUS_FILE)

        if config.background_setup is None:
            config = config.replace(background_setup=SignalBackgroundSetup())

        self.monitor = ConnectivityMonitor(
            config,
            http_probe=create_http_probe(force_mock=force_mock),
            timer=create_timer(),
        )
        self.monitor.subscribe(self._on_connectivity_change)
        self.monitor.subscribe_mode(self._on_mode_change)

        self.logger.info("Connectivity Service initialized successfully")

    def run(self) -> None:
        """
        Main service loop.

        Runs until a shutdown signal is received.
        """
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        self.running = True
        self.monitor.start()

        # Publish the seed value so readers never see a missing file
        self._write_status()

        self.logger.info(f"Connectivity Service running (pid {os.getpid()})")

        try:
            while self.running:
                time.sleep(SERVICE_LOOP_INTERVAL)
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        finally:
            self._shutdown()

    def _on_connectivity_change(self, reachable: bool) -> None:
        """Observer - runs on the probe's tick thread"""
        if reachable:
            self.logger.info("Internet: available")
        else:
            self.logger.warning("Internet: unavailable")
        self._write_status()

    def _on_mode_change(self, mode: PollingMode) -> None:
        """Mode observer - keeps mode and period_ms in the status file current"""
        self.logger.info(f"Status file updated for {mode.value} polling")
        self._write_status()

    def _write_status(self) -> None:
        """
        Write current connectivity as JSON.

        Atomic write (temp file + rename) so readers never see partial JSON.
        """
        try:
            status = self.monitor.get_status()
            payload = {
                "timestamp": datetime.now().isoformat(),
                "reachable": status["reachable"],
                "mode": status["mode"],
                "period_ms": status["period_ms"],
                "url": status["config"]["reachability_url"],
                "uptime_seconds": time.time() - self.start_time,
                "pid": os.getpid(),
            }

            tmp_file = self.status_file.with_suffix(".tmp")
            tmp_file.write_text(json.dumps(payload, indent=2))
            tmp_file.replace(self.status_file)

        except Exception as e:
            # Status file is for consumers, never worth crashing over
            self.logger.warning(f"Failed to write status file: {e}")

    def _signal_handler(self, signum, _frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            _frame: Current stack frame (unused, required by signal API)
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received signal {signal_name}, shutting down...")
        self.running = False

    def _shutdown(self) -> None:
        """Graceful shutdown - disarm timer, restore signal handlers."""
        self.logger.info("Shutting down Connectivity Service...")
        self.monitor.cleanup()
        self.logger.info("Connectivity Service shutdown complete")


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep LOG_BACKUP_COUNT days of logs
    - Falls back to ./logs when LOG_DIR is not writable
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s | %(name)s"))
    logger.addHandler(console_handler)

    file_format = logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s | %(name)s",
    )

    log_file = Path(LOG_DIR) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        logs_dir = Path(LOG_FALLBACK_DIR)
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / "connectivity-service.log"
        logger.warning(
            f"Cannot write to {log_file}, using fallback: {fallback_log}",
        )
        logger.info(
            f"To fix: sudo mkdir -p {LOG_DIR} && "
            f"sudo chown $(whoami) {LOG_DIR}",
        )

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )

    file_handler.setLevel(level)
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Continuously check whether the internet is really reachable.",
    )
    parser.add_argument("--url", dest="reachability_url", help="Probe target URL")
    parser.add_argument("--timeout", type=int, help="Probe deadline (ms)")
    parser.add_argument("--interval", type=int, help="Foreground polling period (ms)")
    parser.add_argument(
        "--background-interval",
        type=int,
        help="Polling period after SIGUSR1 (ms)",
    )
    parser.add_argument(
        "--expect",
        dest="expected_response_status",
        type=parse_status_codes,
        help="Comma separated status codes counted as reachable (e.g. 200,204)",
    )
    parser.add_argument(
        "--initial-state",
        dest="initial_connection_state",
        type=parse_bool,
        help="Value published before the first probe (true/false)",
    )
    parser.add_argument("--status-file", type=Path, help="Where to write status JSON")
    parser.add_argument("--mock", action="store_true", help="Use the mock HTTP probe (no network)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> ConnectionConfig:
    """Settings (env / .env) first, then any flag given on the command line"""
    options = {
        name: getattr(args, name)
        for name in (
            "reachability_url",
            "timeout",
            "interval",
            "background_interval",
            "expected_response_status",
            "initial_connection_state",
        )
        if getattr(args, name) is not None
    }
    return ConnectionConfig.from_settings(**options)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the service.

    Sets up logging and runs the service.
    """
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Connectivity Monitor Service Starting")
    logger.info("=" * 60)

    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(2)

    try:
        service = ConnectivityService(
            config,
            status_file=args.status_file,
            force_mock=args.mock,
        )
        service.run()
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
