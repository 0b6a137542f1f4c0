"""Broadcast an invalidation signal whenever an order is created or changes status.

Runs after the change is committed. A failed broadcast is logged and never
fails the command that stored the change.
"""

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.order.events import (
    OrderAccepted,
    OrderCompleted,
    OrderDispatched,
    OrderPlaced,
    OrderRejected,
)
from ordering.order.order import Order
from ordering.realtime.channel import ORDERS_TOPIC, get_change_channel

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Order)
class OrderChangeBroadcaster:
    def _broadcast(self, event):
        try:
            delivered = get_change_channel().publish(ORDERS_TOPIC)
        except Exception as e:
            logger.error(
                "Order change broadcast failed",
                order_id=str(event.order_id),
                event_type=type(event).__name__,
                error=str(e),
            )
            return

        logger.debug(
            "Order change broadcast",
            order_id=str(event.order_id),
            event_type=type(event).__name__,
            subscribers=delivered,
        )

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        self._broadcast(event)

    @handle(OrderAccepted)
    def on_order_accepted(self, event: OrderAccepted) -> None:
        self._broadcast(event)

    @handle(OrderRejected)
    def on_order_rejected(self, event: OrderRejected) -> None:
        self._broadcast(event)

    @handle(OrderDispatched)
    def on_order_dispatched(self, event: OrderDispatched) -> None:
        self._broadcast(event)

    @handle(OrderCompleted)
    def on_order_completed(self, event: OrderCompleted) -> None:
        self._broadcast(event)
