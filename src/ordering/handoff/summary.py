"""Plain-text order summary handed to the store after checkout."""

from ordering import settings
from ordering.cart.pricing import format_money
from ordering.order.order import DeliveryType


def format_order_summary(order, store_name=None, symbol=None) -> str:
    store_name = store_name or settings.store_name()
    symbol = symbol or settings.currency_symbol()
    is_delivery = order.delivery_type == DeliveryType.DELIVERY.value

    parts = [
        f"*NEW ORDER - {store_name.upper()}*",
        "",
        f"*Customer:* {order.customer_name}",
        f"*Phone:* {order.customer_phone}",
        f"*Type:* {'Delivery' if is_delivery else 'Pickup'}",
    ]
    if is_delivery:
        parts.append(f"*Address:* {order.delivery_address}")

    parts += ["", "*---------------- ORDER ----------------*"]
    for line in order.ordered_lines():
        parts.append(f"*{line.quantity}x {line.product_name}*")
        if line.options_summary:
            parts.append(f"   + {line.options_summary}")

    parts += [
        "",
        "*---------------- TOTALS ----------------*",
        f"Subtotal: {format_money(order.subtotal, symbol)}",
        f"Delivery: {format_money(order.delivery_fee, symbol)}",
        f"*TOTAL: {format_money(order.total, symbol)}*",
        f"Payment: *{order.payment_method.upper()}*",
        "",
        "_Sent from the ordering app_",
    ]
    return "\n".join(parts)
