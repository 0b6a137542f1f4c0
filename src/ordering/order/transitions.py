"""Order status transitions: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import InvalidTransition
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class TransitionOrder:
    """Move an order to a new status on behalf of a staff member."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    requested_by = String(max_length=100)


@ordering.command_handler(part_of=Order)
class TransitionOrderHandler:
    @handle(TransitionOrder)
    def transition_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status

        try:
            changed = order.transition_to(command.status)
        except InvalidTransition:
            logger.warning(
                "Order transition rejected",
                order_id=str(command.order_id),
                current=previous,
                requested=command.status,
                requested_by=command.requested_by,
            )
            raise

        if not changed:
            logger.info("Order already in requested status, transition skipped", order_id=str(order.id), status=order.status)
            return order.status

        repo.add(order)
        logger.info(
            "Order transition applied",
            order_id=str(order.id),
            previous=previous,
            status=order.status,
            requested_by=command.requested_by,
        )
        return order.status
