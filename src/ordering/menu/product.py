"""Product aggregate: a menu item with ordered modifier groups.

Products are static catalog metadata. Carts never read them after a line is
added; they hold a ``ProductSnapshot`` instead.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from ordering.domain import ordering
from ordering.menu.snapshot import GroupSnapshot, ModifierOption, ProductSnapshot, to_decimal
from ordering.utils.paging import fetch_all


@ordering.entity(part_of="Product")
class ModifierGroup:
    """A named set of modifiers with a selection range.

    ``modifiers`` holds a JSON list of ``{"modifier_id", "name", "price"}``.
    """

    name = String(required=True, max_length=100)
    min_selection = Integer(default=0, min_value=0)
    max_selection = Integer(default=1, min_value=1)
    position = Integer(default=0)
    modifiers = Text()

    @invariant.post
    def selection_range_must_be_consistent(self):
        if self.max_selection is not None and self.min_selection is not None:
            if self.max_selection < self.min_selection:
                raise ValidationError(
                    {"max_selection": ["Maximum selection cannot be lower than minimum selection"]}
                )

    @invariant.post
    def modifier_prices_must_not_be_negative(self):
        for option in json.loads(self.modifiers) if self.modifiers else []:
            if float(option.get("price", 0)) < 0:
                raise ValidationError({"modifiers": [f"Modifier '{option.get('name')}' has a negative price"]})

    def options(self) -> tuple[ModifierOption, ...]:
        raw = json.loads(self.modifiers) if self.modifiers else []
        return tuple(
            ModifierOption(
                modifier_id=str(option["modifier_id"]),
                name=option["name"],
                price=to_decimal(option.get("price", 0)),
            )
            for option in raw
        )


@ordering.aggregate
class Product:
    name = String(required=True, max_length=150)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(max_length=50)
    image_url = String(max_length=500)
    available = Boolean(default=True)
    groups = HasMany(ModifierGroup)
    created_at = DateTime()

    @classmethod
    def register(cls, name, price, category=None, description=None, image_url=None, groups=None):
        """Build a product and its modifier groups from plain data.

        ``groups`` is a list of dicts with ``name``, ``min_selection``,
        ``max_selection`` and ``modifiers`` (list of ``{"name", "price"}``,
        optionally with ``modifier_id``).
        """
        product = cls(
            name=name,
            price=price,
            category=category,
            description=description,
            image_url=image_url,
            created_at=datetime.now(UTC),
        )
        for position, group in enumerate(groups or []):
            options = [
                {
                    "modifier_id": str(option.get("modifier_id") or f"{position}-{index}"),
                    "name": option["name"],
                    "price": float(option.get("price", 0)),
                }
                for index, option in enumerate(group.get("modifiers", []))
            ]
            product.add_groups(
                ModifierGroup(
                    name=group["name"],
                    min_selection=group.get("min_selection", 0),
                    max_selection=group.get("max_selection", 1),
                    position=position,
                    modifiers=json.dumps(options),
                )
            )
        return product

    def ordered_groups(self):
        return sorted(self.groups, key=lambda g: g.position or 0)

    def snapshot(self) -> ProductSnapshot:
        """Freeze the product as it is right now."""
        return ProductSnapshot(
            product_id=str(self.id),
            name=self.name,
            price=to_decimal(self.price),
            category=self.category or "",
            groups=tuple(
                GroupSnapshot(
                    group_id=str(group.id),
                    name=group.name,
                    min_selection=group.min_selection,
                    max_selection=group.max_selection,
                    modifiers=group.options(),
                )
                for group in self.ordered_groups()
            ),
        )


@ordering.repository(part_of=Product)
class ProductRepository:
    def list_menu(self, category=None):
        """Available products ordered by name, optionally within one category."""
        query = self._dao.query.filter(available=True)
        if category:
            query = query.filter(category=category)
        return fetch_all(query.order_by("name"))
