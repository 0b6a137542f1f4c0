"""Hand-off dispatcher: sends the order summary once an order is placed.

Runs after the order is committed. A failed hand-off is logged and never
undoes or fails the checkout.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.errors import HandoffFailure
from ordering.handoff import get_handoff
from ordering.handoff.summary import format_order_summary
from ordering.order.events import OrderPlaced
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Order)
class OrderHandoffDispatcher:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        try:
            order = current_domain.repository_for(Order).get(event.order_id)
            result = get_handoff().send(format_order_summary(order))
            if result.get("status") != "sent":
                raise HandoffFailure(result.get("error", "Unknown hand-off error"))
        except Exception as e:
            logger.error(
                "Order hand-off failed",
                order_id=str(event.order_id),
                error=str(e),
            )
            return

        logger.info(
            "Order handed off",
            order_id=str(event.order_id),
            handoff_id=result.get("handoff_id"),
        )
