"""Cart management: commands and handler for the cart's session lifecycle."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class CreateCart:
    """Start a cart for a customer session."""

    session_id = String(max_length=255)


@ordering.command(part_of="ShoppingCart")
class AbandonCart:
    """Tear the cart down without placing an order."""

    cart_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(session_id=command.session_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(AbandonCart)
    def abandon_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.abandon()
        repo.add(cart)
