"""
In-process change notifications for database tables.

Controllers publish a :class:`ChangeEvent` after each committed mutation and
subscribers react to the tables they care about. Subscribing to ``"*"``
receives every table.
"""

import logging
import threading
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Optional

from pydantic import BaseModel, Field

from app.models.enums import ChangeEventType

logger = logging.getLogger(__name__)

ALL_TABLES = "*"


class ChangeEvent(BaseModel):
    table: str
    event_type: ChangeEventType
    record_id: Optional[str] = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


ChangeCallback = Callable[[ChangeEvent], None]


class Subscription:
    def __init__(self, channel: "ChangeChannel", table: str, callback: ChangeCallback):
        self.channel = channel
        self.table = table
        self.callback = callback

    def matches(self, event: ChangeEvent) -> bool:
        return self.table == ALL_TABLES or self.table == event.table

    def unsubscribe(self) -> None:
        self.channel.remove(self)


class ChangeChannel:
    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, table: str, callback: ChangeCallback) -> Subscription:
        subscription = Subscription(self, table, callback)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.info("Subscribed to %s changes", table)
        return subscription

    def remove(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to matching subscribers and return how many received it."""
        with self._lock:
            targets = [s for s in self._subscriptions if s.matches(event)]

        delivered = 0
        for subscription in targets:
            try:
                subscription.callback(event)
            except Exception:
                logger.exception("Change subscriber for %s failed on %s", subscription.table, event.event_type.value)
                continue
            delivered += 1
        return delivered

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)


@lru_cache(maxsize=1)
def get_change_channel() -> ChangeChannel:
    return ChangeChannel()
