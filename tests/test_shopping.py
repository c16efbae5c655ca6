"""Tests for shopping list categorization, aggregation and toggling."""

import copy

from fitcoach.tools.shopping import (
    aggregate_shopping_list,
    categorize_ingredient,
    parse_quantity,
    shopping_list_from_diet,
    sort_by_category,
    toggle_shopping_item,
)


def _recipe(*ingredients):
    return {"ingredients": [{"name": n, "quantity": q, "unit": u} for n, q, u in ingredients]}


# ── Categorization ──────────────────────────────────────────────────

class TestCategorize:

    def test_known_categories(self):
        assert categorize_ingredient("Pechuga de pollo") == "meat"
        assert categorize_ingredient("Tomates cherry") == "produce"
        assert categorize_ingredient("Yogur griego") == "dairy"
        assert categorize_ingredient("Arroz integral") == "grains"
        assert categorize_ingredient("Aceite de oliva") == "other"

    def test_unmatched_is_other(self):
        assert categorize_ingredient("Salsa misteriosa") == "other"

    def test_keywords_match_word_starts_only(self):
        # "bajo" contains "ajo" but is not garlic
        assert categorize_ingredient("Queso bajo en grasa") == "dairy"

    def test_precedence_follows_category_order(self):
        # produce is checked before meat
        assert categorize_ingredient("Ensalada de pollo") == "produce"

    def test_cured_pork_is_meat_not_bread(self):
        assert categorize_ingredient("Panceta ahumada") == "meat"
        assert categorize_ingredient("Bacon") == "meat"
        assert categorize_ingredient("Pan de molde") == "grains"


# ── Aggregation ─────────────────────────────────────────────────────

class TestAggregate:

    def test_case_insensitive_merge(self):
        items = aggregate_shopping_list([
            _recipe(("Pollo", 200, "g")),
            _recipe(("pollo", 150, "g")),
        ])
        assert len(items) == 1
        assert items[0]["ingredient"] == "Pollo"
        assert items[0]["quantity"] == 350
        assert items[0]["category"] == "meat"
        assert items[0]["checked"] is False

    def test_different_units_stay_separate(self):
        items = aggregate_shopping_list([_recipe(("Leche", 250, "ml"), ("Leche", 1, "l"))])
        assert len(items) == 2

    def test_grouped_by_category_order(self):
        items = aggregate_shopping_list([_recipe(
            ("Sal", 1, "pizca"),
            ("Arroz", 100, "g"),
            ("Queso", 50, "g"),
            ("Pollo", 200, "g"),
            ("Tomate", 2, "unidades"),
        )])
        assert [i["category"] for i in items] == ["produce", "meat", "dairy", "grains", "other"]

    def test_stable_within_group(self):
        items = aggregate_shopping_list([_recipe(("Pollo", 1, "g"), ("Atún", 1, "g"), ("Pavo", 1, "g"))])
        assert [i["ingredient"] for i in items] == ["Pollo", "Atún", "Pavo"]

    def test_input_not_mutated(self):
        recipes = [_recipe(("Pollo", 200, "g")), _recipe(("pollo", 150, "g"))]
        before = copy.deepcopy(recipes)
        aggregate_shopping_list(recipes)
        assert recipes == before

    def test_empty(self):
        assert aggregate_shopping_list([]) == []

    def test_sort_by_category_unknown_last(self):
        items = sort_by_category([{"category": "weird"}, {"category": "other"}, {"category": "produce"}])
        assert [i["category"] for i in items] == ["produce", "other", "weird"]


# ── Toggle ──────────────────────────────────────────────────────────

class TestToggle:

    def test_flips_one_item(self):
        items = [{"ingredient": "A", "checked": False}, {"ingredient": "B", "checked": False}]
        result = toggle_shopping_item(items, 1)
        assert result[1]["checked"] is True
        assert result[0]["checked"] is False
        assert items[1]["checked"] is False

    def test_twice_restores(self):
        items = [{"ingredient": "A", "checked": False}]
        assert toggle_shopping_item(toggle_shopping_item(items, 0), 0) == items

    def test_out_of_range_returns_equal_copy(self):
        items = [{"ingredient": "A", "checked": False}]
        result = toggle_shopping_item(items, 5)
        assert result == items
        assert result is not items


# ── Diet-derived list ───────────────────────────────────────────────

class TestParseQuantity:

    def test_grams(self):
        assert parse_quantity("80g") == (80.0, "g")

    def test_slices(self):
        assert parse_quantity("2 rebanadas") == (2.0, "rebanadas")

    def test_liters_not_confused(self):
        assert parse_quantity("2 litros") == (2.0, "litros")
        assert parse_quantity("1 lata") == (1.0, "unidades")

    def test_number_without_unit(self):
        assert parse_quantity("3 huevos") == (3.0, "unidades")

    def test_no_number(self):
        assert parse_quantity("al gusto") == (1.0, "unidad")

    def test_decimal_comma(self):
        assert parse_quantity("1,5 kg") == (1.5, "kg")


class TestShoppingFromDiet:

    def _diet(self, *foods):
        return {"days": [{"meals": [{"foods": [{"name": n, "quantity": q} for n, q in foods]}]}]}

    def test_sums_and_rounds_up(self):
        diet = {"days": [
            {"meals": [{"foods": [{"name": "Avena", "quantity": "80g"}]}]},
            {"meals": [{"foods": [{"name": "avena", "quantity": "70.5g"}]}]},
        ]}
        items = shopping_list_from_diet(diet)
        oats = next(i for i in items if i["ingredient"] == "Avena")
        assert oats["quantity"] == 151
        assert oats["unit"] == "g"
        assert oats["category"] == "grains"

    def test_unit_spellings_merge(self):
        items = shopping_list_from_diet(self._diet(("Plátano", "1 unidad"), ("Plátano", "2 unidades")))
        banana = next(i for i in items if i["ingredient"] == "Plátano")
        assert banana["quantity"] == 3

    def test_pantry_basics_appended(self):
        items = shopping_list_from_diet(self._diet(("Pollo", "200g")))
        names = [i["ingredient"] for i in items]
        assert "Aceite de oliva virgen extra" in names
        assert "Pimienta" in names

    def test_existing_oil_not_duplicated(self):
        items = shopping_list_from_diet(self._diet(("Aceite de oliva", "15ml")))
        assert sum(1 for i in items if i["ingredient"].lower().startswith("aceite")) == 1
