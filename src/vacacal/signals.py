"""In-process "data changed" broadcast between mutation sites and views."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class DataChangedSignal:
    """
    Lightweight notification that the remote data was changed.

    Mutation call sites emit; views subscribe and re-fetch on their own.
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self) -> None:
        """Notify every listener. A failing listener doesn't stop the others."""
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception(f"Data changed listener {listener!r} failed")

    def __len__(self) -> int:
        return len(self._listeners)


data_changed = DataChangedSignal()
