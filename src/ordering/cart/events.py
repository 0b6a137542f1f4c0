"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product instance was added to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineModifiersChanged:
    """The modifier selection of a cart line changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    group_id = Identifier(required=True)
    selected = Text()  # JSON list of modifier ids now selected in the group


@ordering.event(part_of="ShoppingCart")
class CartLineQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartConverted:
    """The cart was checked out and became an order."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartAbandoned:
    __version__ = 1

    cart_id = Identifier(required=True)
    abandoned_at = DateTime(required=True)
