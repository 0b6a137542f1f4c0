"""Checkout: turn an active cart into a pending order."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.checkout.fulfilment import fulfilment_for
from ordering.domain import ordering
from ordering.order.order import Order, PaymentMethod

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    """Check out a cart. ``delivery_address`` is required only for deliveries."""

    cart_id = Identifier(required=True)
    customer_name = String(max_length=150)
    customer_phone = String(max_length=30)
    delivery_type = String(required=True, max_length=20)
    delivery_address = String(max_length=500)
    payment_method = String(required=True, max_length=20)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(command.cart_id)

        # Nothing is written unless every check passes
        cart.ensure_ready_for_checkout()
        if command.payment_method not in {method.value for method in PaymentMethod}:
            raise ValidationError({"payment_method": [f"Unknown payment method '{command.payment_method}'"]})
        fulfilment = fulfilment_for(command.delivery_type, command.delivery_address)

        order = Order.place(
            customer_name=command.customer_name,
            customer_phone=command.customer_phone,
            fulfilment=fulfilment,
            payment_method=command.payment_method,
            candidates=cart.line_candidates(),
        )
        cart.convert_to_order(order.id)

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            cart_id=str(cart.id),
            delivery_type=order.delivery_type,
            total=order.total,
        )
        return str(order.id)
