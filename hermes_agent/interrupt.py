"""A thread-safe flag used to ask a running conversation to stop."""

from __future__ import annotations

import threading


class InterruptFlag:
    """A shareable on/off flag; set it to interrupt work that polls it."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def check(self) -> bool:
        return self._event.is_set()

    def clear(self) -> None:
        self._event.clear()

    def __bool__(self) -> bool:
        return self.check()