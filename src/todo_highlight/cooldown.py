from __future__ import annotations

import time
from typing import Optional

__all__ = ["CooldownGate"]


class CooldownGate:
    """Time-based gate that throttles repeated failure reports.

    - trip(): start a cooldown window (now -> now + seconds)
    - in_cooldown(): True if now is still within the cooldown window
    - should_report(): True once per window; trips the gate when it says yes
    - last_error: message recorded on the last trip
    - suppressed: failures swallowed since the last reported one
    """

    def __init__(self, seconds: float = 5.0) -> None:
        self.seconds: float = max(0.0, float(seconds))
        self._until: float = 0.0
        self.last_error: Optional[str] = None
        self.suppressed: int = 0

    def in_cooldown(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.monotonic()
        return now < self._until

    def trip(self, now: Optional[float] = None, message: Optional[str] = None) -> None:
        if now is None:
            now = time.monotonic()
        self._until = now + self.seconds
        if message is not None:
            self.last_error = str(message)

    def should_report(self, message: Optional[str] = None, now: Optional[float] = None) -> bool:
        if self.in_cooldown(now):
            self.suppressed += 1
            if message is not None:
                self.last_error = str(message)
            return False
        self.trip(now, message)
        self.suppressed = 0
        return True

    def reset(self) -> None:
        self._until = 0.0
        self.suppressed = 0
