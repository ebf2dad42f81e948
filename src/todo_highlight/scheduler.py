from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

__all__ = ["UpdateScheduler"]


class UpdateScheduler(QObject):
    """Debounced, last-call-wins scheduling on the Qt event loop.

    - schedule(fn): (re)start the single-shot timer; fn replaces any pending call
    - cancel(): drop the pending call, if any
    - flush(): run the pending call now instead of waiting for the timer
    - pending: True while a call is waiting for the timer
    """

    def __init__(self, delay_ms: int = 0, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending: Optional[Callable[[], None]] = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(delay_ms)))
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    def set_delay(self, delay_ms: int) -> None:
        self._timer.setInterval(max(0, int(delay_ms)))

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, fn: Callable[[], None]) -> None:
        self._pending = fn
        # start() on an active timer restarts it, superseding the earlier request
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._pending = None

    def flush(self) -> bool:
        if self._pending is None:
            return False
        self._timer.stop()
        self._fire()
        return True

    def _fire(self) -> None:
        fn, self._pending = self._pending, None
        if fn is not None:
            fn()
