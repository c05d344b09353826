"""
Change Notification Bus
Version: 1.0.0
Date: 2026-10-12

Purpose: Tell observers that the store was mutated and persisted.

Delivery is synchronous and in registration order. Events carry no diff:
listeners re-read the repositories they care about. The listener list is
snapshotted before each round, so a listener subscribed during ``notify`` is
first called on the next round, and unsubscribing (even from inside a
listener, even twice) is always safe.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from .utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreChanged:
    """Emitted after every committed mutation."""
    revision: int
    reason: str = ""
    emitted_at: datetime = field(default_factory=datetime.now)


Listener = Callable[[StoreChanged], None]


class StoreEventBus:
    """Subscribe/notify channel for ``StoreChanged`` events."""

    def __init__(self):
        self._listeners: List[Listener] = []
        self.revision = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a function that removes it."""
        self._listeners.append(listener)
        active = True

        def unsubscribe() -> None:
            nonlocal active
            if not active:
                return
            active = False
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self, reason: str = "", event: Optional[StoreChanged] = None) -> StoreChanged:
        """Deliver one event to every listener registered before this call."""
        self.revision += 1
        if event is None:
            event = StoreChanged(revision=self.revision, reason=reason)

        for listener in list(self._listeners):
            # Skip listeners removed earlier in this round.
            if listener not in self._listeners:
                continue
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Store listener {listener!r} failed on revision {event.revision}: {e}")
        return event
