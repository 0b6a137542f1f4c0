"""Pricing engine: pure money arithmetic for cart lines and order totals.

Amounts are ``Decimal`` with two fraction digits. Line prices are kept exact
and only the summed result is rounded, so totals never drift by a cent per
line.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal

from protean.exceptions import ValidationError

from ordering.menu.snapshot import ProductSnapshot, to_decimal

MONEY_QUANTUM = Decimal("0.01")
DELIVERY_FEE = Decimal("5.00")
ZERO = Decimal("0.00")


def round_money(amount) -> Decimal:
    return to_decimal(amount).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def modifier_total(product: ProductSnapshot, selections: Mapping[str, Iterable[str]]) -> Decimal:
    """Sum of the price deltas of every selected modifier; a repeated id counts once."""
    total = Decimal("0")
    for group_id, modifier_ids in (selections or {}).items():
        group = product.group(group_id)
        if group is None:
            raise ValidationError({"selections": [f"Unknown modifier group {group_id} for {product.name}"]})
        for modifier_id in dict.fromkeys(str(m) for m in modifier_ids):
            option = group.option(modifier_id)
            if option is None:
                raise ValidationError({"selections": [f"Unknown modifier {modifier_id} in group {group.name}"]})
            total += option.price
    return total


def compute_line_price(product: ProductSnapshot, selections: Mapping[str, Iterable[str]], quantity: int) -> Decimal:
    """``(unit price + selected modifier deltas) * quantity``, unrounded."""
    if quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})
    return (product.price + modifier_total(product, selections)) * quantity


def compute_cart_total(line_prices: Iterable[Decimal]) -> Decimal:
    return round_money(sum((to_decimal(price) for price in line_prices), Decimal("0")))


def delivery_fee_for(is_delivery: bool) -> Decimal:
    return DELIVERY_FEE if is_delivery else ZERO


def compute_order_total(line_prices: Iterable[Decimal], is_delivery: bool) -> Decimal:
    return compute_cart_total(line_prices) + delivery_fee_for(is_delivery)


def format_money(amount, symbol="$") -> str:
    return f"{symbol}{round_money(amount):.2f}"
