"""Order aggregate (CQRS): a placed order and its fulfilment lifecycle.

State machine::

    pending → preparing → delivering → completed
    pending → cancelled

An order is created once as ``pending`` and afterwards changes only through
``transition_to``. Lines and totals are snapshots taken at checkout.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from ordering.cart.pricing import compute_cart_total, round_money
from ordering.domain import ordering
from ordering.errors import InvalidTransition
from ordering.order.events import (
    OrderAccepted,
    OrderCompleted,
    OrderDispatched,
    OrderPlaced,
    OrderRejected,
)


class OrderStatus(Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    DELIVERING = "delivering"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliveryType(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


class PaymentMethod(Enum):
    PIX = "pix"
    CREDIT = "credit"
    DEBIT = "debit"
    CASH = "cash"


# State machine transition map; anything not listed is rejected
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.DELIVERING},
    OrderStatus.DELIVERING: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Statuses that are only ever entered through a transition
_REACHABLE = set().union(*_VALID_TRANSITIONS.values())

_TRANSITION_EVENTS = {
    OrderStatus.PREPARING: OrderAccepted,
    OrderStatus.CANCELLED: OrderRejected,
    OrderStatus.DELIVERING: OrderDispatched,
    OrderStatus.COMPLETED: OrderCompleted,
}


def allowed_targets(status) -> set:
    return set(_VALID_TRANSITIONS.get(OrderStatus(status), set()))


@ordering.entity(part_of="Order")
class OrderLine:
    """A line frozen at checkout; never re-derived from the catalog."""

    product_name = String(required=True, max_length=150)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    options_summary = Text()
    line_total = Float(required=True, min_value=0.0)
    position = Integer(default=0)


@ordering.aggregate
class Order:
    customer_name = String(required=True, max_length=150)
    customer_phone = String(required=True, max_length=30)
    delivery_type = String(required=True, choices=DeliveryType)
    delivery_address = String(max_length=500)
    payment_method = String(required=True, choices=PaymentMethod)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    lines = HasMany(OrderLine)
    subtotal = Float(default=0.0)
    delivery_fee = Float(default=0.0)
    total = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def address_present_only_for_delivery(self):
        if self.delivery_type == DeliveryType.DELIVERY.value and not self.delivery_address:
            raise ValidationError({"delivery_address": ["Delivery address is required for delivery orders"]})
        if self.delivery_type == DeliveryType.PICKUP.value and self.delivery_address:
            raise ValidationError({"delivery_address": ["Pickup orders cannot carry a delivery address"]})

    @invariant.post
    def total_must_match_lines(self):
        if not self.lines:
            return
        expected = round_money(self.subtotal) + round_money(self.delivery_fee)
        if round_money(self.total) != expected:
            raise ValidationError({"total": [f"Order total {self.total} does not equal subtotal plus delivery fee"]})
        # Each stored line total is rounded on its own, the subtotal only once
        drift = abs(round_money(sum(line.line_total for line in self.lines)) - round_money(self.subtotal))
        if drift > Decimal("0.01") * len(self.lines):
            raise ValidationError({"subtotal": [f"Order subtotal {self.subtotal} does not match its lines"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_name, customer_phone, fulfilment, payment_method, candidates):
        """Create a pending order from checkout data.

        Args:
            fulfilment: ``Delivery`` or ``Pickup`` from ``ordering.checkout.fulfilment``.
            candidates: ``LineCandidate`` list produced by the cart.
        """
        errors = {}
        if not (customer_name or "").strip():
            errors["customer_name"] = ["Customer name is required"]
        if not (customer_phone or "").strip():
            errors["customer_phone"] = ["Customer phone is required"]
        if not candidates:
            errors["lines"] = ["An order needs at least one line"]
        if errors:
            raise ValidationError(errors)

        subtotal = compute_cart_total(c.line_price for c in candidates)
        fee = fulfilment.fee
        now = datetime.now(UTC)

        order = cls(
            customer_name=customer_name.strip(),
            customer_phone=customer_phone.strip(),
            delivery_type=fulfilment.delivery_type.value,
            delivery_address=fulfilment.address,
            payment_method=payment_method,
            status=OrderStatus.PENDING.value,
            subtotal=float(subtotal),
            delivery_fee=float(fee),
            total=float(subtotal + fee),
            created_at=now,
            updated_at=now,
        )

        with atomic_change(order):
            for position, candidate in enumerate(candidates):
                order.add_lines(
                    OrderLine(
                        product_name=candidate.product_name,
                        unit_price=float(candidate.unit_price),
                        quantity=candidate.quantity,
                        options_summary=candidate.options_summary,
                        line_total=float(round_money(candidate.line_price)),
                        position=position,
                    )
                )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_name=order.customer_name,
                customer_phone=order.customer_phone,
                delivery_type=order.delivery_type,
                delivery_address=order.delivery_address,
                payment_method=order.payment_method,
                lines=order.lines_json(),
                subtotal=order.subtotal,
                delivery_fee=order.delivery_fee,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    def ordered_lines(self):
        return sorted(self.lines, key=lambda line: line.position or 0)

    def lines_json(self) -> str:
        return json.dumps(
            [
                {
                    "product_name": line.product_name,
                    "unit_price": line.unit_price,
                    "quantity": line.quantity,
                    "options_summary": line.options_summary or "",
                    "line_total": line.line_total,
                }
                for line in self.ordered_lines()
            ]
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def transition_to(self, requested) -> bool:
        """Move the order to ``requested``.

        Returns ``False`` without touching state when the order already sits
        in ``requested`` having reached it through a transition, so a
        re-issued or raced transition is harmless. Raises
        ``InvalidTransition`` for every pair outside the transition map.
        """
        current = OrderStatus(self.status)
        try:
            target = OrderStatus(requested)
        except ValueError:
            raise InvalidTransition(self.id, current.value, requested) from None

        if target == current and target in _REACHABLE:
            return False
        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(self.id, current.value, target.value)

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            _TRANSITION_EVENTS[target](
                order_id=str(self.id),
                previous_status=current.value,
                status=target.value,
                changed_at=now,
            )
        )
        return True
