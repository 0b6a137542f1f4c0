"""Shopping Cart aggregate (CQRS): the session-scoped state of a checkout.

A cart is created when a customer session starts and ends either converted
into an Order or abandoned. Each line freezes the product it was built from,
so the catalog stays immutable for the rest of the session.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from ordering.cart.assembly import (
    LineCandidate,
    apply_selection,
    normalize_selections,
    options_summary,
    selection_errors,
)
from ordering.cart.events import (
    CartAbandoned,
    CartConverted,
    CartLineAdded,
    CartLineModifiersChanged,
    CartLineQuantityUpdated,
    CartLineRemoved,
)
from ordering.cart.pricing import compute_cart_total, compute_line_price
from ordering.domain import ordering
from ordering.menu.snapshot import ProductSnapshot


class CartStatus(Enum):
    ACTIVE = "Active"
    CONVERTED = "Converted"
    ABANDONED = "Abandoned"


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    """One product instance with its own modifier selections.

    ``product`` is the JSON snapshot taken when the line was added and
    ``selections`` maps group id to the list of selected modifier ids.
    """

    product_id = Identifier(required=True)
    product = Text(required=True)
    quantity = Integer(required=True, min_value=1)
    selections = Text()
    added_at = DateTime()

    def product_snapshot(self) -> ProductSnapshot:
        return ProductSnapshot.from_json(self.product)

    def selected(self) -> dict[str, list[str]]:
        return json.loads(self.selections) if self.selections else {}

    def total_price(self) -> Decimal:
        """Always recomputed from the snapshot, selections and quantity."""
        return compute_line_price(self.product_snapshot(), self.selected(), self.quantity)

    def modifier_summary(self) -> str:
        return options_summary(self.product_snapshot(), self.selected())


@ordering.aggregate
class ShoppingCart:
    session_id = String(max_length=255)
    lines = HasMany(CartLine)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    order_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def converted_cart_must_reference_an_order(self):
        if self.status == CartStatus.CONVERTED.value and not self.order_id:
            raise ValidationError({"order_id": ["A converted cart must reference its order"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )

    def _assert_active(self, action):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": [f"Cannot {action}: cart is {self.status}"]})

    def _line(self, line_id) -> CartLine:
        line = next((line for line in self.lines if str(line.id) == str(line_id)), None)
        if line is None:
            raise ValidationError({"line_id": ["Line not found in cart"]})
        return line

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_line(self, product: ProductSnapshot, quantity=1, selections=None):
        """Add a product instance and return the new line's id."""
        self._assert_active("add a line")

        normalized = normalize_selections(product, selections)
        # Rejects unknown groups or modifiers and quantities below one
        compute_line_price(product, normalized, quantity)

        now = datetime.now(UTC)
        line = CartLine(
            product_id=product.product_id,
            product=product.to_json(),
            quantity=quantity,
            selections=json.dumps(normalized),
            added_at=now,
        )
        self.add_lines(line)
        self.updated_at = now

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                line_id=str(line.id),
                product_id=product.product_id,
                product_name=product.name,
                quantity=quantity,
            )
        )
        return str(line.id)

    def select_modifier(self, line_id, group_id, modifier_id):
        """Select (or, in multi-choice groups, toggle) one modifier on a line."""
        self._assert_active("change modifiers")
        line = self._line(line_id)

        product = line.product_snapshot()
        group = product.group(group_id)
        if group is None:
            raise ValidationError({"group_id": [f"Unknown modifier group for {product.name}"]})
        if group.option(modifier_id) is None:
            raise ValidationError({"modifier_id": [f"Unknown modifier in group {group.name}"]})

        selections = line.selected()
        selections[group.group_id] = apply_selection(group, selections.get(group.group_id, []), modifier_id)
        line.selections = json.dumps(selections)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineModifiersChanged(
                cart_id=str(self.id),
                line_id=str(line.id),
                group_id=group.group_id,
                selected=json.dumps(selections[group.group_id]),
            )
        )
        return selections[group.group_id]

    def update_line_quantity(self, line_id, new_quantity):
        self._assert_active("update a quantity")
        if new_quantity is None or new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        line = self._line(line_id)

        previous_quantity = line.quantity
        line.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityUpdated(
                cart_id=str(self.id),
                line_id=str(line.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_line(self, line_id):
        self._assert_active("remove a line")
        line = self._line(line_id)

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartLineRemoved(cart_id=str(self.id), line_id=str(line_id)))

    # -------------------------------------------------------------------
    # Totals and checkout readiness
    # -------------------------------------------------------------------
    def subtotal(self) -> Decimal:
        return compute_cart_total(line.total_price() for line in self.lines)

    def line_candidates(self) -> list[LineCandidate]:
        candidates = []
        for line in self.lines:
            product = line.product_snapshot()
            candidates.append(
                LineCandidate(
                    product_name=product.name,
                    unit_price=product.price,
                    quantity=line.quantity,
                    options_summary=line.modifier_summary(),
                    line_price=line.total_price(),
                )
            )
        return candidates

    def checkout_errors(self) -> list[str]:
        if not self.lines:
            return ["Cart is empty"]
        errors = []
        for line in self.lines:
            errors.extend(selection_errors(line.product_snapshot(), line.selected()))
        return errors

    def ensure_ready_for_checkout(self):
        """Raise ``ValidationError`` unless every line satisfies its modifier groups."""
        self._assert_active("check out")
        errors = self.checkout_errors()
        if errors:
            raise ValidationError({"lines": errors})

    # -------------------------------------------------------------------
    # Cart lifecycle
    # -------------------------------------------------------------------
    def convert_to_order(self, order_id):
        self._assert_active("convert")

        self.order_id = order_id
        self.status = CartStatus.CONVERTED.value
        self.updated_at = datetime.now(UTC)

        self.raise_(CartConverted(cart_id=str(self.id), order_id=str(order_id)))

    def abandon(self):
        self._assert_active("abandon")

        now = datetime.now(UTC)
        self.status = CartStatus.ABANDONED.value
        self.updated_at = now

        self.raise_(CartAbandoned(cart_id=str(self.id), abandoned_at=now))
