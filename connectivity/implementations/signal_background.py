"""
Signal Background Setup

Background-mode source driven by POSIX signals.

Lets a process supervisor (systemd, a desktop session script, a status bar)
tell a running monitor that the user is away:

    kill -USR1 <pid>   # background - poll slowly
    kill -USR2 <pid>   # foreground - poll at the normal interval

Note: Python only allows installing signal handlers from the main thread.
"""

import logging
import signal
from typing import Callable

from connectivity.interfaces.background_interface import BackgroundHandler


class SignalBackgroundSetup:
    """
    Callable background setup: setup(handler) -> teardown.

    Installs handlers for the two signals and returns a teardown that
    restores whatever handlers were there before.
    """

    def __init__(
        self,
        background_signal: int = signal.SIGUSR1,
        foreground_signal: int = signal.SIGUSR2,
    ):
        self.logger = logging.getLogger(__name__)
        self.background_signal = background_signal
        self.foreground_signal = foreground_signal

    def __call__(self, handler: BackgroundHandler) -> Callable[[], None]:
        def on_background(signum, frame):
            self.logger.info("Background signal received")
            handler(True)

        def on_foreground(signum, frame):
            self.logger.info("Foreground signal received")
            handler(False)

        previous_background = signal.signal(self.background_signal, on_background)
        previous_foreground = signal.signal(self.foreground_signal, on_foreground)

        self.logger.info(
            f"Background mode signals registered "
            f"(background: {signal.Signals(self.background_signal).name}, "
            f"foreground: {signal.Signals(self.foreground_signal).name})",
        )

        def teardown() -> None:
            signal.signal(self.background_signal, previous_background)
            signal.signal(self.foreground_signal, previous_foreground)
            self.logger.info("Background mode signals unregistered")

        return teardown
