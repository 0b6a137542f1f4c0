"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer checked out; the order starts out pending."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    customer_phone = String(required=True)
    delivery_type = String(required=True)
    delivery_address = String()
    payment_method = String(required=True)
    lines = Text(required=True)  # JSON: [{product_name, unit_price, quantity, options_summary, line_total}]
    subtotal = Float(required=True)
    delivery_fee = Float(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderAccepted:
    """Staff accepted the order and the kitchen started preparing it."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderRejected:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDispatched:
    """The order left the kitchen for delivery (or is ready at the counter)."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCompleted:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)
