"""Seed the menu from a JSON file.

The file holds a list of products::

    [{"name": "Classic Burger", "price": 10.0, "category": "burgers",
      "groups": [{"name": "Bread", "min_selection": 1, "max_selection": 1,
                  "modifiers": [{"name": "Brioche", "price": 2.0}]}]}]
"""

import json
from pathlib import Path

import structlog
from protean.utils.globals import current_domain

from ordering.menu.product import Product

logger = structlog.get_logger(__name__)


def read_menu(path) -> list[dict]:
    with Path(path).open(encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, list):
        raise ValueError(f"Menu file {path} must contain a JSON list of products")
    return data


def seed_menu(entries: list[dict]) -> list[str]:
    """Register every entry as a Product. Must run inside a domain context."""
    repo = current_domain.repository_for(Product)
    product_ids = []
    for entry in entries:
        product = Product.register(
            name=entry["name"],
            price=entry["price"],
            category=entry.get("category"),
            description=entry.get("description"),
            image_url=entry.get("image_url"),
            groups=entry.get("groups"),
        )
        repo.add(product)
        product_ids.append(str(product.id))

    logger.info("Menu seeded", products=len(product_ids))
    return product_ids


def seed_menu_file(path) -> list[str]:
    return seed_menu(read_menu(path))
