"""A shared budget limiting how many model iterations may be spent."""

from __future__ import annotations

import threading


class IterationBudget:
    """Counts consumed iterations against a fixed maximum."""

    def __init__(self, max_total: int) -> None:
        self.max_total = max_total
        self._used = 0
        self._lock = threading.Lock()

    def consume(self) -> bool:
        """Use one iteration; return False if the budget is already spent."""
        with self._lock:
            if self._used >= self.max_total:
                return False
            self._used += 1
            return True

    def refund(self) -> None:
        """Give back one iteration, if any have been used."""
        with self._lock:
            if self._used > 0:
                self._used -= 1

    def remaining(self) -> int:
        with self._lock:
            return max(self.max_total - self._used, 0)