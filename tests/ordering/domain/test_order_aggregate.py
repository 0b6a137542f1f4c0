"""Tests for placing an Order: totals, snapshots and checkout field rules."""

import json
from decimal import Decimal

import pytest
from ordering.cart.assembly import LineCandidate
from ordering.checkout.fulfilment import Delivery, Pickup
from ordering.order.events import OrderPlaced
from ordering.order.order import DeliveryType, Order, OrderStatus
from protean.exceptions import ValidationError


def _candidates():
    return [
        LineCandidate(
            product_name="Classic Burger",
            unit_price=Decimal("10.00"),
            quantity=2,
            options_summary="Brioche",
            line_price=Decimal("24.00"),
        )
    ]


def _place(fulfilment=None, **overrides):
    data = {
        "customer_name": "Ana Lima",
        "customer_phone": "85988887777",
        "fulfilment": fulfilment or Pickup(),
        "payment_method": "pix",
        "candidates": _candidates(),
    }
    data.update(overrides)
    return Order.place(**data)


class TestPlaceOrder:
    def test_pickup_order_total(self):
        order = _place(Pickup())

        assert order.status == OrderStatus.PENDING.value
        assert order.delivery_type == DeliveryType.PICKUP.value
        assert order.delivery_address is None
        assert order.subtotal == 24.0
        assert order.delivery_fee == 0.0
        assert order.total == 24.0

    def test_delivery_order_adds_fee(self):
        order = _place(Delivery("Rua das Flores, Nº 42"))

        assert order.delivery_type == DeliveryType.DELIVERY.value
        assert order.delivery_address == "Rua das Flores, Nº 42"
        assert order.delivery_fee == 5.0
        assert order.total == 29.0

    def test_lines_are_snapshots(self):
        order = _place()
        [line] = order.ordered_lines()

        assert line.product_name == "Classic Burger"
        assert line.unit_price == 10.0
        assert line.quantity == 2
        assert line.options_summary == "Brioche"
        assert line.line_total == 24.0

    def test_lines_keep_cart_order(self):
        candidates = [
            LineCandidate("Lemonade", Decimal("4"), 1, "", Decimal("4")),
            LineCandidate("Fries", Decimal("6.5"), 2, "Large", Decimal("17")),
        ]
        order = _place(candidates=candidates)
        assert [line.product_name for line in order.ordered_lines()] == ["Lemonade", "Fries"]
        assert order.total == 21.0

    def test_total_is_summed_before_rounding(self):
        candidates = [
            LineCandidate("Tea", Decimal("0.335"), 1, "", Decimal("0.335")),
            LineCandidate("Tea", Decimal("0.335"), 1, "", Decimal("0.335")),
        ]
        order = _place(candidates=candidates)
        assert Decimal(str(order.total)) == Decimal("0.67")

    def test_raises_order_placed(self):
        order = _place(Delivery("Rua das Flores, Nº 42"))
        event = order._events[-1]

        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.total == 29.0
        assert json.loads(event.lines)[0]["product_name"] == "Classic Burger"


class TestCheckoutFieldRules:
    def test_name_and_phone_are_required(self):
        with pytest.raises(ValidationError) as exc:
            _place(customer_name="  ", customer_phone="")
        assert "customer_name" in exc.value.messages
        assert "customer_phone" in exc.value.messages

    def test_order_needs_lines(self):
        with pytest.raises(ValidationError) as exc:
            _place(candidates=[])
        assert "lines" in exc.value.messages

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError):
            _place(payment_method="bitcoin")

    def test_delivery_without_address_is_impossible(self):
        with pytest.raises(ValidationError) as exc:
            _place(Delivery(""))
        assert "delivery_address" in exc.value.messages
