"""
Connectivity State Holder

Holds the published reachable / unreachable value and notifies observers
when it changes.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

Observer = Callable[[bool], None]


class ConnectivityStateHolder:
    """
    Thread-safe boolean with change notification.

    Only the monitor calls set(); everyone else reads with get() or
    subscribe().

    Usage:
        holder = ConnectivityStateHolder(initial=True)
        unsubscribe = holder.subscribe(lambda online: print(online))
        holder.set(False)   # prints False
        unsubscribe()
    """

    def __init__(self, initial: bool = True):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._value = bool(initial)
        self._observers: List[Observer] = []

        self.initial = bool(initial)
        self.update_count = 0
        self.change_count = 0
        self.last_updated: Optional[float] = None  # time.time() of last set()
        self.last_changed: Optional[float] = None

    @property
    def value(self) -> bool:
        return self.get()

    def get(self) -> bool:
        with self._lock:
            return self._value

    def set(self, value: bool) -> bool:
        """
        Publish a probe outcome.

        Observers are notified only when the value actually changes.

        Returns:
            True if the value changed
        """
        value = bool(value)
        now = time.time()

        with self._lock:
            changed = value != self._value
            self._value = value
            self.update_count += 1
            self.last_updated = now
            if changed:
                self.change_count += 1
                self.last_changed = now
            observers = list(self._observers)

        if changed:
            self.logger.info(
                f"Connectivity changed: {'reachable' if value else 'unreachable'}",
            )
            for observer in observers:
                self._notify(observer, value)

        return changed

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer called with the new value on every change.

        Returns:
            Callable that removes the observer (safe to call twice)
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, observer: Observer, value: bool) -> None:
        try:
            observer(value)
        except Exception as e:
            # Never let an observer error reach the probe loop
            self.logger.error(f"Error in connectivity observer: {e}", exc_info=True)

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "reachable": self._value,
                "initial": self.initial,
                "updates": self.update_count,
                "changes": self.change_count,
                "last_updated": self.last_updated,
                "last_changed": self.last_changed,
                "observers": len(self._observers),
            }
