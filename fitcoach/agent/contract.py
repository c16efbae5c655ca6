"""Parse LLM responses into FitCoach's plan, recipe and shopping structures.

Every parser accepts either raw response text or an already decoded dict.
Missing optional fields are filled with defaults and numbers are coerced.
A response that can't be used at all (no JSON object, no days, wrong day
count) raises ValueError so the caller can fall back to demo data.
"""

from fitcoach.agent.json_utils import extract_json
from fitcoach.tools.metrics import calculate_macros
from fitcoach.tools.reconcile import DAY_NAMES
from fitcoach.tools.shopping import CATEGORY_ORDER, categorize_ingredient


def _load(raw) -> dict:
    if isinstance(raw, dict):
        return raw
    return extract_json(raw)


def _to_int(value, default: int = 0) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


def _to_number(value, default: float = 0):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return int(number) if number.is_integer() else number


def _str_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v not in (None, "")]


def _seven_days(data: dict, what: str) -> list[dict]:
    days = data.get("days")
    if not isinstance(days, list) or not days:
        raise ValueError(f"{what} has no days")
    if len(days) != 7:
        raise ValueError(f"{what} must have 7 days, got {len(days)}")
    if not all(isinstance(d, dict) for d in days):
        raise ValueError(f"{what} days must be objects")
    return days


# ── Workout recommendation ──────────────────────────────────────────


def parse_workout_recommendation(raw) -> dict:
    """Parse a single-workout recommendation. Requires a title and content."""
    data = _load(raw)
    title = str(data.get("title") or "").strip()
    content = str(data.get("content") or "").strip()
    if not title or not content:
        raise ValueError("Workout recommendation is missing title or content")
    return {
        "type": "workout",
        "title": title,
        "content": content,
        "reasoning": str(data.get("reasoning") or ""),
    }


# ── Workout week ────────────────────────────────────────────────────


def _parse_exercise(raw: dict) -> dict:
    exercise = {
        "name": str(raw.get("name") or "Ejercicio"),
        "sets": max(1, _to_int(raw.get("sets"), 3)),
        "reps": str(raw.get("reps") or "10"),
        "rest_seconds": _to_int(raw.get("rest_seconds"), 60),
    }
    if raw.get("weight_recommendation"):
        exercise["weight_recommendation"] = str(raw["weight_recommendation"])
    if raw.get("notes"):
        exercise["notes"] = str(raw["notes"])
    alternatives = _str_list(raw.get("alternatives"))
    if alternatives:
        exercise["alternatives"] = alternatives
    return exercise


def _parse_workout_day(raw: dict, index: int, default_type: str) -> dict:
    is_rest = bool(raw.get("is_rest_day"))
    exercises = [] if is_rest else [
        _parse_exercise(e) for e in raw.get("exercises") or [] if isinstance(e, dict)
    ]
    return {
        "day": index,
        "day_name": DAY_NAMES[index],
        "workout_type": str(raw.get("workout_type") or default_type),
        "title": str(raw.get("title") or ("Descanso" if is_rest else "Entrenamiento")),
        "duration_minutes": 0 if is_rest else _to_int(raw.get("duration_minutes"), 60),
        "is_rest_day": is_rest,
        "exercises": exercises,
        "notes": str(raw.get("notes") or ""),
    }


def parse_workout_week(raw, training_types: list[str] | None = None) -> dict:
    """Parse a 7-day workout plan.

    ``day`` and ``day_name`` are forced from the position in the list, rest
    days get an empty exercise list, and ``rest_days`` is derived from the
    ``is_rest_day`` flags.
    """
    data = _load(raw)
    default_type = (training_types or ["gym"])[0]
    days = [
        _parse_workout_day(d, i, default_type)
        for i, d in enumerate(_seven_days(data, "Workout plan"))
    ]
    return {
        "name": str(data.get("name") or "Plan de entrenamiento"),
        "description": str(data.get("description") or ""),
        "days": days,
        "rest_days": [d["day"] for d in days if d["is_rest_day"]],
        "estimated_calories_burned_weekly": _to_int(data.get("estimated_calories_burned_weekly")),
    }


# ── Diet week ───────────────────────────────────────────────────────


def _parse_meal(raw: dict) -> dict:
    meal = {
        "meal_type": str(raw.get("meal_type") or "meal"),
        "name": str(raw.get("name") or "Comida"),
        "time_suggestion": str(raw.get("time_suggestion") or ""),
        "foods": [
            {
                "name": str(f.get("name") or ""),
                "quantity": str(f.get("quantity") or ""),
                "calories": _to_number(f.get("calories")),
                "protein": _to_number(f.get("protein")),
                "carbs": _to_number(f.get("carbs")),
                "fat": _to_number(f.get("fat")),
            }
            for f in raw.get("foods") or []
            if isinstance(f, dict) and f.get("name")
        ],
    }
    for key in ("calories", "protein", "carbs", "fat"):
        meal[key] = _to_number(raw.get(key))
    recipe = raw.get("recipe")
    if isinstance(recipe, dict):
        meal["recipe"] = {
            "ingredients": _str_list(recipe.get("ingredients")),
            "instructions": _str_list(recipe.get("instructions")),
            "prep_time": _to_int(recipe.get("prep_time")),
        }
    return meal


def parse_diet_week(raw, daily_calories: int) -> dict:
    """Parse a 7-day diet plan targeting ``daily_calories``.

    Macros missing from the response are computed from the calorie target.
    """
    data = _load(raw)
    calories = _to_int(data.get("daily_calories"), daily_calories) or daily_calories

    macros = data.get("macros") if isinstance(data.get("macros"), dict) else {}
    computed = calculate_macros(calories)
    macros = {key: _to_int(macros.get(key)) or value for key, value in computed.items()}

    days = []
    for i, raw_day in enumerate(_seven_days(data, "Diet plan")):
        meals = [_parse_meal(m) for m in raw_day.get("meals") or [] if isinstance(m, dict)]
        days.append({
            "day": i,
            "day_name": DAY_NAMES[i],
            "meals": meals,
            "total_calories": _to_int(raw_day.get("total_calories"), calories) or calories,
        })

    return {
        "name": str(data.get("name") or "Plan nutricional"),
        "description": str(data.get("description") or ""),
        "daily_calories": calories,
        "macros": macros,
        "days": days,
    }


# ── Recipe ──────────────────────────────────────────────────────────


def parse_recipe(raw, fallback_name: str = "") -> dict:
    """Parse a single recipe. Requires at least one ingredient."""
    data = _load(raw)
    ingredients = [
        {
            "name": str(i.get("name")),
            "quantity": _to_number(i.get("quantity"), 1),
            "unit": str(i.get("unit") or ""),
        }
        for i in data.get("ingredients") or []
        if isinstance(i, dict) and i.get("name")
    ]
    if not ingredients:
        raise ValueError("Recipe has no ingredients")

    return {
        "name": str(data.get("name") or fallback_name or "Receta"),
        "description": str(data.get("description") or ""),
        "ingredients": ingredients,
        "instructions": _str_list(data.get("instructions")),
        "prep_time_minutes": _to_int(data.get("prep_time_minutes")),
        "cook_time_minutes": _to_int(data.get("cook_time_minutes")),
        "servings": max(1, _to_int(data.get("servings"), 1)),
        "calories_per_serving": _to_int(data.get("calories_per_serving")),
        "protein_per_serving": _to_int(data.get("protein_per_serving")),
        "carbs_per_serving": _to_int(data.get("carbs_per_serving")),
        "fat_per_serving": _to_int(data.get("fat_per_serving")),
        "tags": _str_list(data.get("tags")),
    }


# ── Shopping list ───────────────────────────────────────────────────


def parse_shopping_list(raw) -> list[dict]:
    """Parse ``{"items": [...]}`` into unchecked ShoppingListItems.

    An unknown or missing category is inferred from the ingredient name.
    Raises ValueError when no usable item is present.
    """
    data = _load(raw)
    items = []
    for entry in data.get("items") or []:
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("ingredient") or entry.get("name") or "").strip()
        if not name:
            continue
        category = entry.get("category")
        if category not in CATEGORY_ORDER:
            category = categorize_ingredient(name)
        items.append({
            "ingredient": name,
            "quantity": _to_number(entry.get("quantity"), 1),
            "unit": str(entry.get("unit") or "unidad"),
            "category": category,
            "checked": False,
        })
    if not items:
        raise ValueError("Shopping list has no items")
    return items
