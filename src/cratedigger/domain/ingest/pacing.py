"""Blocking pauses that a shutdown request can cut short."""

from __future__ import annotations

import threading
from logging import getLogger

log = getLogger(__name__)


class Pacer:
    """Owns every sleep of the import loop.

    All waiting goes through :meth:`pause`, so setting the stop event wakes
    the loop at whichever pause it is currently in.
    """

    def __init__(self, stop_event: threading.Event | None = None) -> None:
        self._stop_event = stop_event or threading.Event()

    @property
    def stop_event(self) -> threading.Event:
        return self._stop_event

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        if not self._stop_event.is_set():
            log.info("Stop requested; finishing the current item")
        self._stop_event.set()

    def pause(self, seconds: float) -> bool:
        """Sleep for ``seconds``; return ``False`` if a stop was requested."""

        if seconds <= 0:
            return not self.stopped
        return not self._stop_event.wait(seconds)
