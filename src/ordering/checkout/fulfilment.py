"""How an order reaches the customer: ``Delivery(address)`` or ``Pickup()``.

The address exists only on the delivery variant, so a pickup order can never
carry one and a delivery order can never lack one.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from ordering.cart.pricing import delivery_fee_for
from ordering.order.order import DeliveryType


@dataclass(frozen=True)
class Delivery:
    address: str

    delivery_type = DeliveryType.DELIVERY

    def __post_init__(self):
        if not (self.address or "").strip():
            raise ValidationError({"delivery_address": ["Delivery address is required for delivery orders"]})

    @property
    def is_delivery(self) -> bool:
        return True

    @property
    def fee(self):
        return delivery_fee_for(True)


@dataclass(frozen=True)
class Pickup:
    delivery_type = DeliveryType.PICKUP

    @property
    def address(self):
        return None

    @property
    def is_delivery(self) -> bool:
        return False

    @property
    def fee(self):
        return delivery_fee_for(False)


def compose_address(street, number, complement=None) -> str:
    """Render ``"Main St, Nº 42 (apt 3)"``; street and number are mandatory."""
    errors = {}
    if not (street or "").strip():
        errors["street"] = ["Street is required for delivery"]
    if not str(number or "").strip():
        errors["number"] = ["Number is required for delivery"]
    if errors:
        raise ValidationError(errors)

    address = f"{street.strip()}, Nº {str(number).strip()}"
    if complement and complement.strip():
        address = f"{address} ({complement.strip()})"
    return address


def fulfilment_for(delivery_type, address=None):
    """Build the variant for a requested delivery type."""
    try:
        kind = DeliveryType(delivery_type)
    except ValueError:
        raise ValidationError({"delivery_type": [f"Unknown delivery type '{delivery_type}'"]}) from None

    if kind == DeliveryType.DELIVERY:
        return Delivery(address=address or "")
    return Pickup()
