"""Tests for modifier selection rules and cart-line validation."""

from decimal import Decimal

from ordering.cart.assembly import (
    apply_selection,
    normalize_selections,
    options_summary,
    selection_errors,
    validate_selections,
)
from ordering.menu.snapshot import GroupSnapshot, ModifierOption, ProductSnapshot

BREAD = GroupSnapshot(
    group_id="bread",
    name="Bread",
    min_selection=1,
    max_selection=1,
    modifiers=(
        ModifierOption("brioche", "Brioche", Decimal("2.00")),
        ModifierOption("sesame", "Sesame", Decimal("0.00")),
    ),
)

EXTRAS = GroupSnapshot(
    group_id="extras",
    name="Extras",
    min_selection=0,
    max_selection=2,
    modifiers=(
        ModifierOption("bacon", "Bacon", Decimal("3.00")),
        ModifierOption("egg", "Egg", Decimal("1.50")),
        ModifierOption("cheese", "Cheese", Decimal("2.50")),
    ),
)

BURGER = ProductSnapshot(product_id="prod-1", name="Burger", price=Decimal("10.00"), groups=(BREAD, EXTRAS))


class TestApplySelection:
    def test_single_choice_selects(self):
        assert apply_selection(BREAD, [], "brioche") == ["brioche"]

    def test_single_choice_replaces_previous_selection(self):
        selected = apply_selection(BREAD, ["brioche"], "sesame")
        assert selected == ["sesame"]

    def test_single_choice_reselecting_keeps_exactly_one(self):
        assert apply_selection(BREAD, ["brioche"], "brioche") == ["brioche"]

    def test_multi_choice_adds(self):
        assert apply_selection(EXTRAS, ["bacon"], "egg") == ["bacon", "egg"]

    def test_multi_choice_toggles_off_selected_modifier(self):
        assert apply_selection(EXTRAS, ["bacon", "egg"], "bacon") == ["egg"]

    def test_multi_choice_toggle_twice_restores_selection(self):
        once = apply_selection(EXTRAS, ["bacon"], "egg")
        assert apply_selection(EXTRAS, once, "egg") == ["bacon"]


class TestNormalizeSelections:
    def test_repeated_ids_collapse(self):
        assert normalize_selections(BURGER, {"extras": ["bacon", "bacon", "egg"]}) == {"extras": ["bacon", "egg"]}

    def test_single_choice_keeps_last_pick(self):
        assert normalize_selections(BURGER, {"bread": ["sesame", "brioche"]}) == {"bread": ["brioche"]}

    def test_unknown_group_passes_through(self):
        assert normalize_selections(BURGER, {"sauce": ["mayo"]}) == {"sauce": ["mayo"]}


class TestValidateSelections:
    def test_within_bounds(self):
        assert validate_selections(BREAD, ["brioche"]) is True
        assert validate_selections(EXTRAS, []) is True
        assert validate_selections(EXTRAS, ["bacon", "egg"]) is True

    def test_below_minimum(self):
        assert validate_selections(BREAD, []) is False

    def test_above_maximum(self):
        assert validate_selections(BREAD, ["brioche", "sesame"]) is False
        assert validate_selections(EXTRAS, ["bacon", "egg", "cheese"]) is False

    def test_foreign_modifier_is_invalid(self):
        assert validate_selections(BREAD, ["bacon"]) is False


class TestSelectionErrors:
    def test_valid_selection_has_no_errors(self):
        assert selection_errors(BURGER, {"bread": ["sesame"]}) == []

    def test_missing_required_group(self):
        errors = selection_errors(BURGER, {})
        assert errors == ["Burger: choose exactly 1 option(s) for Bread"]

    def test_too_many_extras(self):
        errors = selection_errors(BURGER, {"bread": ["sesame"], "extras": ["bacon", "egg", "cheese"]})
        assert errors == ["Burger: choose between 0 and 2 option(s) for Extras"]

    def test_unknown_group(self):
        errors = selection_errors(BURGER, {"bread": ["sesame"], "sauces": ["mayo"]})
        assert errors == ["Burger: unknown modifier group sauces"]


class TestOptionsSummary:
    def test_names_in_menu_order(self):
        selections = {"extras": ["egg", "bacon"], "bread": ["brioche"]}
        assert options_summary(BURGER, selections) == "Brioche, Bacon, Egg"

    def test_empty_when_nothing_selected(self):
        assert options_summary(BURGER, {}) == ""
