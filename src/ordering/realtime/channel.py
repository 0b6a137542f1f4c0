"""In-process change channel carrying contentless invalidation signals.

Subscribers register a callback per topic and refetch whatever they display
when it fires. Signals carry no payload, so delivering one twice or out of
order is harmless.
"""

import threading
from dataclasses import dataclass, field
from uuid import uuid4

import structlog

logger = structlog.get_logger(__name__)

ORDERS_TOPIC = "orders"


@dataclass(frozen=True)
class Subscription:
    topic: str
    subscription_id: str = field(default_factory=lambda: uuid4().hex)


class ChangeChannel:
    def __init__(self):
        self._subscribers: dict[Subscription, object] = {}
        self._lock = threading.Lock()

    def subscribe(self, on_signal, topic: str = ORDERS_TOPIC) -> Subscription:
        handle = Subscription(topic=topic)
        with self._lock:
            self._subscribers[handle] = on_signal
        logger.info("Subscriber added", topic=topic, subscription_id=handle.subscription_id)
        return handle

    def unsubscribe(self, handle: Subscription | None) -> None:
        """Stop delivery to ``handle``. Unknown or repeated handles are ignored."""
        if handle is None:
            return
        with self._lock:
            removed = self._subscribers.pop(handle, None)
        if removed is not None:
            logger.info("Subscriber removed", topic=handle.topic, subscription_id=handle.subscription_id)

    def subscriber_count(self, topic: str = ORDERS_TOPIC) -> int:
        with self._lock:
            return sum(1 for handle in self._subscribers if handle.topic == topic)

    def publish(self, topic: str = ORDERS_TOPIC) -> int:
        """Signal every subscriber of ``topic``; returns how many were called.

        Iterates over a copy so callbacks may unsubscribe themselves (or
        others) while the signal is being delivered.
        """
        with self._lock:
            targets = [(h, cb) for h, cb in self._subscribers.items() if h.topic == topic]

        delivered = 0
        for handle, callback in targets:
            with self._lock:
                if handle not in self._subscribers:
                    continue
            try:
                callback()
                delivered += 1
            except Exception as e:
                logger.error(
                    "Subscriber callback failed",
                    topic=topic,
                    subscription_id=handle.subscription_id,
                    error=str(e),
                )
        return delivered


_channel_instance: ChangeChannel | None = None


def get_change_channel() -> ChangeChannel:
    """Return the process-wide change channel (singleton)."""
    global _channel_instance
    if _channel_instance is None:
        _channel_instance = ChangeChannel()
    return _channel_instance


def reset_change_channel():
    """Drop every subscription (useful for testing)."""
    global _channel_instance
    _channel_instance = None
