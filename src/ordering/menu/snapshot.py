"""Frozen catalog snapshots used by cart assembly and pricing.

A snapshot is taken when a product is added to a cart. Everything priced or
summarised afterwards reads the snapshot, so catalog edits made during a
checkout session never leak into it.
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal


def to_decimal(value) -> Decimal:
    """Convert a stored amount to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value or 0))


@dataclass(frozen=True)
class ModifierOption:
    modifier_id: str
    name: str
    price: Decimal = Decimal("0")


@dataclass(frozen=True)
class GroupSnapshot:
    group_id: str
    name: str
    min_selection: int
    max_selection: int
    modifiers: tuple[ModifierOption, ...] = ()

    @property
    def is_single_choice(self) -> bool:
        return self.max_selection == 1

    @property
    def is_required(self) -> bool:
        return self.min_selection > 0

    def option(self, modifier_id) -> ModifierOption | None:
        return next((m for m in self.modifiers if m.modifier_id == str(modifier_id)), None)


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    name: str
    price: Decimal
    category: str = ""
    groups: tuple[GroupSnapshot, ...] = field(default_factory=tuple)

    def group(self, group_id) -> GroupSnapshot | None:
        return next((g for g in self.groups if g.group_id == str(group_id)), None)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "category": self.category,
            "groups": [
                {
                    "group_id": g.group_id,
                    "name": g.name,
                    "min_selection": g.min_selection,
                    "max_selection": g.max_selection,
                    "modifiers": [
                        {"modifier_id": m.modifier_id, "name": m.name, "price": str(m.price)} for m in g.modifiers
                    ],
                }
                for g in self.groups
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "ProductSnapshot":
        return cls(
            product_id=str(data["product_id"]),
            name=data["name"],
            price=to_decimal(data["price"]),
            category=data.get("category") or "",
            groups=tuple(
                GroupSnapshot(
                    group_id=str(g["group_id"]),
                    name=g["name"],
                    min_selection=int(g["min_selection"]),
                    max_selection=int(g["max_selection"]),
                    modifiers=tuple(
                        ModifierOption(
                            modifier_id=str(m["modifier_id"]),
                            name=m["name"],
                            price=to_decimal(m["price"]),
                        )
                        for m in g.get("modifiers", [])
                    ),
                )
                for g in data.get("groups", [])
            ),
        )

    @classmethod
    def from_json(cls, payload: str) -> "ProductSnapshot":
        return cls.from_dict(json.loads(payload))
