"""Cart line management: commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.menu.product import Product


@ordering.command(part_of="ShoppingCart")
class AddCartLine:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)
    selections = Text()  # JSON: {group_id: [modifier_id, ...]}


@ordering.command(part_of="ShoppingCart")
class SelectModifier:
    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    group_id = Identifier(required=True)
    modifier_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class UpdateCartLineQuantity:
    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    new_quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class RemoveCartLine:
    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddCartLine)
    def add_cart_line(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        product = current_domain.repository_for(Product).get(command.product_id)

        selections = json.loads(command.selections) if command.selections else {}
        line_id = cart.add_line(product.snapshot(), quantity=command.quantity or 1, selections=selections)
        repo.add(cart)
        return line_id

    @handle(SelectModifier)
    def select_modifier(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        selected = cart.select_modifier(
            line_id=command.line_id,
            group_id=command.group_id,
            modifier_id=command.modifier_id,
        )
        repo.add(cart)
        return selected

    @handle(UpdateCartLineQuantity)
    def update_cart_line_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.update_line_quantity(line_id=command.line_id, new_quantity=command.new_quantity)
        repo.add(cart)

    @handle(RemoveCartLine)
    def remove_cart_line(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_line(line_id=command.line_id)
        repo.add(cart)
