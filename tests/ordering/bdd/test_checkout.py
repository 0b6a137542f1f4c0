"""BDD tests for checkout."""

from ordering.cart.lines import AddCartLine
from ordering.cart.management import CreateCart
from ordering.checkout.placement import PlaceOrder
from ordering.commands import submit
from ordering.handoff import get_handoff
from ordering.order.order import Order
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/checkout.feature")


def _checkout(cart_id, error, delivery_type, payment_method, address=None):
    try:
        return submit(
            PlaceOrder(
                cart_id=cart_id,
                customer_name="Ana Lima",
                customer_phone="85988887777",
                delivery_type=delivery_type,
                delivery_address=address,
                payment_method=payment_method,
            )
        )
    except ValidationError as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a cart with a burger that has no bread", target_fixture="cart_id")
def cart_with_incomplete_burger(burger):
    cart_id = submit(CreateCart(session_id="bdd-session"))
    submit(AddCartLine(cart_id=cart_id, product_id=str(burger.id)))
    return cart_id


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer checks out for pickup paying "{method}"'), target_fixture="order_id")
def checkout_for_pickup(cart_id, error, method):
    return _checkout(cart_id, error, "pickup", method)


@when(
    parsers.cfparse('the customer checks out for delivery to "{street}" number "{number}" paying "{method}"'),
    target_fixture="order_id",
)
def checkout_for_delivery(cart_id, error, street, number, method):
    return _checkout(cart_id, error, "delivery", method, address=f"{street}, Nº {number}")


@when("the customer checks out for delivery without an address", target_fixture="order_id")
def checkout_for_delivery_without_address(cart_id, error):
    return _checkout(cart_id, error, "delivery", "pix")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {amount:f}"))
def order_total_is(order_id, amount):
    assert current_domain.repository_for(Order).get(order_id).total == amount


@then(parsers.cfparse("the order delivery fee is {amount:f}"))
def order_delivery_fee_is(order_id, amount):
    assert current_domain.repository_for(Order).get(order_id).delivery_fee == amount


@then(parsers.cfparse('the order address is "{address}"'))
def order_address_is(order_id, address):
    assert current_domain.repository_for(Order).get(order_id).delivery_address == address


@then(parsers.cfparse('the hand-off summary contains "{text}"'))
def handoff_summary_contains(text):
    [sent] = get_handoff().sent_summaries
    assert text in sent["summary"].splitlines()


@then("no hand-off is sent")
def no_handoff_is_sent():
    assert get_handoff().sent_summaries == []
