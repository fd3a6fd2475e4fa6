"""
Mock Background Setup

Manually triggered background-mode source.

Useful for:
- Tests that need to flip foreground/background on demand
- Host applications that already know their visibility and just want to
  push it into the monitor
"""

import logging
from typing import Any, Dict, List, Optional

from connectivity.interfaces.background_interface import BackgroundHandler


class MockBackgroundSetup:
    """
    Callable background setup that records registrations and teardowns.

    Usage:
        background = MockBackgroundSetup()
        monitor = ConnectivityMonitor(background_setup=background)
        monitor.start()
        background.set_background(True)   # monitor re-arms with background interval
    """

    def __init__(self, return_teardown: bool = True):
        """
        Args:
            return_teardown: If False, the setup returns None (no teardown),
                             which the monitor must accept
        """
        self.logger = logging.getLogger(__name__)
        self.return_teardown = return_teardown

        self._handler: Optional[BackgroundHandler] = None

        # Tracking (useful for testing)
        self.setup_count = 0
        self.teardown_count = 0
        self.mode_history: List[bool] = []

    def __call__(self, handler: BackgroundHandler):
        self._handler = handler
        self.setup_count += 1
        self.logger.debug("[MOCK BACKGROUND] Handler registered")

        if not self.return_teardown:
            return None
        return self._teardown

    def _teardown(self) -> None:
        self._handler = None
        self.teardown_count += 1
        self.logger.debug("[MOCK BACKGROUND] Handler unregistered")

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    @property
    def is_registered(self) -> bool:
        return self._handler is not None

    def set_background(self, is_background: bool) -> bool:
        """
        Report a visibility change to the registered handler.

        Returns:
            True if a handler received it, False if nothing is registered
        """
        if self._handler is None:
            self.logger.debug("[MOCK BACKGROUND] No handler registered - ignored")
            return False
        self.mode_history.append(is_background)
        self._handler(is_background)
        return True

    def get_status(self) -> Dict[str, Any]:
        return {
            "registered": self.is_registered,
            "setups": self.setup_count,
            "teardowns": self.teardown_count,
            "modes": list(self.mode_history),
        }
