from __future__ import annotations

from typing import Any, Callable, List

from src.logging_config import setup_logger

__all__ = ["Subscription", "SubscriptionSet"]

logger = setup_logger(__name__)


class Subscription:
    """A live event hookup; dispose() undoes it exactly once."""

    def __init__(self, disposer: Callable[[], None], name: str = "") -> None:
        self._disposer: Callable[[], None] | None = disposer
        self.name = name

    @classmethod
    def connect(cls, signal: Any, slot: Callable[..., Any], name: str = "") -> "Subscription":
        """Connect a Qt signal to ``slot`` and return the matching disposer."""
        signal.connect(slot)

        def _disconnect() -> None:
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError) as e:
                # Sender already destroyed by Qt
                logger.debug(f"Disconnect of {name or slot!r} skipped: {e}")

        return cls(_disconnect, name)

    @property
    def active(self) -> bool:
        return self._disposer is not None

    def dispose(self) -> None:
        disposer, self._disposer = self._disposer, None
        if disposer is not None:
            disposer()


class SubscriptionSet:
    def __init__(self) -> None:
        self._items: List[Subscription] = []

    def add(self, sub: Subscription) -> Subscription:
        self._items.append(sub)
        return sub

    def dispose_all(self) -> None:
        items, self._items = self._items, []
        for sub in reversed(items):
            sub.dispose()

    def __len__(self) -> int:
        return len(self._items)
