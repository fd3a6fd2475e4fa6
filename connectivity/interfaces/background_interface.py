"""
Background Mode Interface

Contract for the external foreground/background signal.

A background setup is any callable that receives the monitor's handler,
registers it with whatever platform mechanism reports visibility changes,
and returns a teardown callable (or None) that undoes the registration.

Usage:
    def visibility_setup(handler):
        window.on_hide(lambda: handler(True))
        window.on_show(lambda: handler(False))
        return window.clear_visibility_listeners

    monitor = ConnectivityMonitor(background_setup=visibility_setup)
"""

from typing import Callable, Optional

# handler(is_background) - called on every foreground/background transition
BackgroundHandler = Callable[[bool], None]

# Optional teardown returned by a setup
BackgroundTeardown = Optional[Callable[[], None]]

# setup(handler) -> teardown
BackgroundSetup = Callable[[BackgroundHandler], BackgroundTeardown]
