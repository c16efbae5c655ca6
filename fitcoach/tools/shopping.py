"""Shopping list operations: categorize, aggregate, toggle.

All functions return new lists; the inputs are left untouched.
"""

import re

CATEGORY_ORDER = ("produce", "meat", "dairy", "grains", "other")

# Checked in CATEGORY_ORDER; first match wins, no match -> "other"
CATEGORY_KEYWORDS = {
    "produce": (
        "tomate", "lechuga", "espinaca", "brócoli", "brocoli", "zanahoria", "cebolla",
        "ajo", "pimiento", "aguacate", "plátano", "platano", "manzana", "naranja",
        "limón", "limon", "fresa", "arándano", "arandano", "espárrago", "esparrago",
        "patata", "boniato", "kiwi", "piña", "pera", "uva", "frambuesa", "fruta",
        "verdura", "ensalada", "champiñón", "champiñon", "calabacín", "calabacin",
        "berenjena", "pepino", "calabaza", "rúcula", "rucula", "brotes",
    ),
    "meat": (
        "pollo", "pavo", "ternera", "cerdo", "salmón", "salmon", "atún", "atun",
        "merluza", "lubina", "dorada", "pescado", "gambas", "jamón", "jamon",
        "lomo", "carne", "entrecot", "panceta", "bacon", "beicon", "chorizo",
    ),
    "dairy": (
        "leche", "yogur", "queso", "huevo", "claras", "nata", "mantequilla",
        "requesón", "requeson", "kéfir", "kefir",
    ),
    "grains": (
        "arroz", "pasta", "pan", "avena", "quinoa", "cereales", "harina",
        "tortita", "tostada", "fideos", "granola", "tortillas de maíz",
    ),
    "other": (
        "aceite", "sal", "pimienta", "miel", "nueces", "almendras", "cacahuete",
        "semillas", "especias", "canela", "proteína", "proteina", "hummus",
    ),
}

# Keywords match at the start of a word: "tomates" hits "tomate",
# "bajo en grasa" does not hit "ajo".
_CATEGORY_PATTERNS = {
    category: re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + ")")
    for category, words in CATEGORY_KEYWORDS.items()
}

PANTRY_BASICS = (
    {"ingredient": "Aceite de oliva virgen extra", "quantity": 1, "unit": "litro", "category": "other"},
    {"ingredient": "Sal", "quantity": 1, "unit": "paquete", "category": "other"},
    {"ingredient": "Pimienta", "quantity": 1, "unit": "bote", "category": "other"},
)

_UNIT_PATTERN = r"(?:(kg|g|ml|litros?|l|unidades?|u\.|piezas?|rebanadas?|cucharadas?|tazas?)(?![a-záéíóúñ]))?"
_QUANTITY_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*" + _UNIT_PATTERN, re.IGNORECASE)


def categorize_ingredient(name: str) -> str:
    """Assign a shopping category by keyword lookup on the ingredient name."""
    lower = name.lower()
    for category in CATEGORY_ORDER:
        if _CATEGORY_PATTERNS[category].search(lower):
            return category
    return "other"


def sort_by_category(items: list[dict]) -> list[dict]:
    """Group items by category precedence, keeping order inside a group."""
    rank = {c: i for i, c in enumerate(CATEGORY_ORDER)}
    return sorted(items, key=lambda item: rank.get(item.get("category"), len(CATEGORY_ORDER)))


def aggregate_shopping_list(recipes: list[dict]) -> list[dict]:
    """Consolidate the ingredients of ``recipes`` into one shopping list.

    Ingredients whose names match case-insensitively and share a unit are
    summed into a single entry that keeps the first spelling seen. The
    category is inferred from the name. Output is grouped produce, meat,
    dairy, grains, other.
    """
    merged: dict[tuple[str, str], dict] = {}
    for recipe in recipes:
        for ing in recipe.get("ingredients") or []:
            name = str(ing.get("name", "")).strip()
            if not name:
                continue
            unit = str(ing.get("unit") or "").strip()
            key = (_normalize(name), unit.lower())
            quantity = _as_number(ing.get("quantity"))
            if key in merged:
                merged[key]["quantity"] += quantity
            else:
                merged[key] = {
                    "ingredient": name,
                    "quantity": quantity,
                    "unit": unit,
                    "category": categorize_ingredient(name),
                    "checked": False,
                }
    return sort_by_category(list(merged.values()))


def toggle_shopping_item(items: list[dict], index: int) -> list[dict]:
    """Flip ``checked`` on the item at ``index``.

    An out-of-range index returns an unchanged copy.
    """
    return [
        {**item, "checked": not item.get("checked", False)} if i == index else dict(item)
        for i, item in enumerate(items)
    ]


def parse_quantity(text: str) -> tuple[float, str]:
    """Parse "80g", "250ml", "2 rebanadas" into (quantity, unit).

    Falls back to (1, "unidad") when there is no number, and to the unit
    "unidades" when there is a number but no recognized unit.
    """
    match = _QUANTITY_RE.search(text or "")
    if not match:
        return 1.0, "unidad"
    quantity = float(match.group(1).replace(",", "."))
    unit = (match.group(2) or "unidades").lower()
    return quantity, unit


def shopping_list_from_diet(diet_plan: dict) -> list[dict]:
    """Build the weekly shopping list from every food in a diet week.

    Quantities are summed per normalized name when units agree (any
    "unidad"/"unidades" spelling counts as the same unit), rounded up, and
    pantry basics are appended if nothing similar is already listed.
    """
    merged: dict[str, dict] = {}

    def add(name: str, quantity: float, unit: str):
        key = _normalize(name)
        if not key:
            return
        existing = merged.get(key)
        if existing is None:
            merged[key] = {"quantity": quantity, "unit": unit, "category": categorize_ingredient(name)}
        elif existing["unit"] == unit or (existing["unit"].startswith("unidad") and unit.startswith("unidad")):
            existing["quantity"] += quantity

    for day in diet_plan.get("days") or []:
        for meal in day.get("meals") or []:
            for food in meal.get("foods") or []:
                quantity, unit = parse_quantity(str(food.get("quantity", "")))
                add(str(food.get("name", "")), quantity, unit)

    items = [
        {
            "ingredient": name[:1].upper() + name[1:],
            "quantity": _round_up(data["quantity"]),
            "unit": data["unit"],
            "category": data["category"],
            "checked": False,
        }
        for name, data in merged.items()
    ]
    items = sort_by_category(items)

    for basic in PANTRY_BASICS:
        first_word = basic["ingredient"].lower().split(" ")[0]
        if not any(first_word in item["ingredient"].lower() for item in items):
            items.append({**basic, "checked": False})
    return items


def _normalize(name: str) -> str:
    return re.sub(r"\s+", " ", name.strip().lower())


def _as_number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(number) if number.is_integer() else number


def _round_up(value: float) -> int:
    whole = int(value)
    return whole if whole == value else whole + 1
