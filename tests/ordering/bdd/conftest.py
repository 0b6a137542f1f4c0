"""Shared BDD fixtures and step definitions for the ordering context."""

import json

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.lines import AddCartLine
from ordering.cart.management import CreateCart
from ordering.checkout.placement import PlaceOrder
from ordering.commands import submit
from ordering.errors import InvalidTransition
from ordering.order.order import Order
from ordering.order.transitions import TransitionOrder
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Transitions that take a fresh order to each status
_PATH_TO_STATUS = {
    "pending": [],
    "preparing": ["preparing"],
    "delivering": ["preparing", "delivering"],
    "completed": ["preparing", "delivering", "completed"],
    "cancelled": ["cancelled"],
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


def _bread_selection(burger, bread):
    group = burger.snapshot().groups[0]
    option = next(m for m in group.modifiers if m.name == bread)
    return {group.group_id: [option.modifier_id]}


def _cart_with_burgers(burger, quantity, bread):
    cart_id = submit(CreateCart(session_id="bdd-session"))
    submit(
        AddCartLine(
            cart_id=cart_id,
            product_id=str(burger.id),
            quantity=quantity,
            selections=json.dumps(_bread_selection(burger, bread)),
        )
    )
    return cart_id


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cart with {quantity:d} "{bread}" burgers'), target_fixture="cart_id")
def cart_with_burgers(burger, quantity, bread):
    return _cart_with_burgers(burger, quantity, bread)


@given(parsers.cfparse('a pending pickup order for "{customer}"'), target_fixture="order_id")
def pending_pickup_order(burger, customer):
    cart_id = _cart_with_burgers(burger, 1, "Brioche")
    return submit(
        PlaceOrder(
            cart_id=cart_id,
            customer_name=customer,
            customer_phone="85988887777",
            delivery_type="pickup",
            payment_method="pix",
        )
    )


@given(parsers.cfparse('the order is "{status}"'))
def order_is_in_status(order_id, status):
    for step in _PATH_TO_STATUS[status]:
        submit(TransitionOrder(order_id=order_id, status=step, requested_by="setup"))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the transition is rejected")
def transition_is_rejected(error):
    assert isinstance(error["exc"], InvalidTransition)


@then(parsers.cfparse('the cart status is "{status}"'))
def cart_status_is(cart_id, status):
    assert current_domain.repository_for(ShoppingCart).get(cart_id).status == status
