"""Cart assembly rules: modifier selection, cardinality checks and summaries."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from ordering.menu.snapshot import GroupSnapshot, ProductSnapshot


@dataclass(frozen=True)
class LineCandidate:
    """An order line as it will be persisted, frozen at checkout."""

    product_name: str
    unit_price: Decimal
    quantity: int
    options_summary: str
    line_price: Decimal


def apply_selection(group: GroupSnapshot, current: Iterable[str], modifier_id) -> list[str]:
    """Return the group's selection after the customer taps ``modifier_id``.

    Single-choice groups replace the selection. Multi-choice groups toggle
    membership, so tapping a selected modifier deselects it.
    """
    modifier_id = str(modifier_id)
    selected = [str(m) for m in current]

    if group.is_single_choice:
        return [modifier_id]

    if modifier_id in selected:
        return [m for m in selected if m != modifier_id]
    return selected + [modifier_id]


def normalize_selections(product: ProductSnapshot, selections: Mapping[str, Iterable[str]]) -> dict[str, list[str]]:
    """Stringify ids, drop repeats and keep only the last pick in single-choice groups.

    Unknown groups pass through untouched so pricing can reject them.
    """
    normalized = {}
    for group_id, modifier_ids in (selections or {}).items():
        ids = list(dict.fromkeys(str(m) for m in modifier_ids))
        group = product.group(str(group_id))
        if group is not None and group.is_single_choice:
            ids = ids[-1:]
        normalized[str(group_id)] = ids
    return normalized


def validate_selections(group: GroupSnapshot, selected_ids: Iterable[str]) -> bool:
    """True when the number of selected modifiers lies within the group's range
    and every id belongs to the group."""
    selected = set(str(m) for m in selected_ids)
    if any(group.option(m) is None for m in selected):
        return False
    return group.min_selection <= len(selected) <= group.max_selection


def selection_errors(product: ProductSnapshot, selections: Mapping[str, Iterable[str]]) -> list[str]:
    """Human-readable problems with ``selections`` for ``product``; empty when valid."""
    errors = []
    selections = selections or {}

    for group_id in selections:
        if product.group(group_id) is None:
            errors.append(f"{product.name}: unknown modifier group {group_id}")

    for group in product.groups:
        chosen = selections.get(group.group_id, [])
        if validate_selections(group, chosen):
            continue
        if group.min_selection == group.max_selection:
            expected = f"exactly {group.min_selection}"
        else:
            expected = f"between {group.min_selection} and {group.max_selection}"
        errors.append(f"{product.name}: choose {expected} option(s) for {group.name}")

    return errors


def selected_options(product: ProductSnapshot, selections: Mapping[str, Iterable[str]]):
    """Selected modifiers in menu order (group order, then option order)."""
    selections = selections or {}
    for group in product.groups:
        chosen = set(str(m) for m in selections.get(group.group_id, []))
        for option in group.modifiers:
            if option.modifier_id in chosen:
                yield option


def options_summary(product: ProductSnapshot, selections: Mapping[str, Iterable[str]]) -> str:
    """Flatten selected modifier names into ``"Brioche, Bacon"``."""
    return ", ".join(option.name for option in selected_options(product, selections))
