"""
Scorecard Broadcaster.

============================================================
PURPOSE
============================================================
Fans committed scorecards out to WebSocket subscribers.

The store calls publish() from whichever thread committed
the scorecard (request threadpool or scheduler loop). Each
subscription belongs to one event loop and receives its
messages through an asyncio.Queue on that loop.

============================================================
"""

import asyncio
import logging
import threading
from typing import Any, Dict, FrozenSet, Iterable, List

from bias_scorecard import CurrencyScorecard
from core.types import Currency


logger = logging.getLogger(__name__)


class Subscription:
    """One WebSocket connection's view of the scorecard stream."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop
        self.queue: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue()
        self.currencies: FrozenSet[Currency] = frozenset()

    def subscribe(self, currencies: Iterable[Currency]) -> None:
        self.currencies = self.currencies | frozenset(currencies)

    def unsubscribe(self, currencies: Iterable[Currency]) -> None:
        self.currencies = self.currencies - frozenset(currencies)

    def send(self, message: Dict[str, Any]) -> None:
        """Queue a message; safe from any thread."""
        self.loop.call_soon_threadsafe(self.queue.put_nowait, message)


class ScorecardBroadcaster:
    """Thread-safe registry of scorecard subscriptions."""

    def __init__(self):
        self._subscriptions: List[Subscription] = []
        self._lock = threading.Lock()

    def register(self, loop: asyncio.AbstractEventLoop) -> Subscription:
        subscription = Subscription(loop)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(f"WebSocket subscriber registered ({self.subscriber_count} active)")
        return subscription

    def unregister(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
        logger.debug(f"WebSocket subscriber removed ({self.subscriber_count} active)")

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, scorecard: CurrencyScorecard) -> None:
        """Store listener: push a committed scorecard to interested subscribers."""
        with self._lock:
            subscriptions = list(self._subscriptions)

        message = {"type": "scorecard_update", "scorecard": scorecard.to_dict()}

        for subscription in subscriptions:
            if scorecard.currency not in subscription.currencies:
                continue
            try:
                subscription.send(message)
            except RuntimeError as e:
                # Loop already closed
                logger.warning(f"Dropping WebSocket subscriber: {e}")
                self.unregister(subscription)
