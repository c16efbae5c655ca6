"""Energy and nutrition metrics: BMR, daily calorie target, macro split."""

# Defaults used when onboarding left a field empty
DEFAULT_WEIGHT_KG = 70
DEFAULT_HEIGHT_CM = 170
DEFAULT_AGE = 30

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,      # desk job, no exercise
    "light": 1.375,        # 1-2 days/week
    "moderate": 1.55,      # 3-4 days/week
    "active": 1.725,       # 5-6 days/week
    "very_active": 1.9,    # hard training 6-7 days/week
}

GOAL_ADJUSTMENTS = {
    "lose_weight": -500,
    "gain_muscle": 300,
    "maintain": 0,
    "improve_endurance": 0,
}

# kcal per hour for a 70 kg athlete, scaled by body weight
SPORT_KCAL_PER_HOUR = {
    "gym": 400,
    "crossfit": 600,
    "hyrox": 650,
    "hybrid": 550,
    "running": 700,
    "swimming": 500,
    "cycling": 450,
    "yoga": 200,
    "other": 350,
}

# Share of calories per macro and kcal per gram
MACRO_SPLIT = {
    "protein": (0.30, 4),
    "carbs": (0.40, 4),
    "fat": (0.30, 9),
}


def calculate_bmr(
    weight_kg: float = DEFAULT_WEIGHT_KG,
    height_cm: float = DEFAULT_HEIGHT_CM,
    age: float = DEFAULT_AGE,
) -> float:
    """Basal metabolic rate with the Mifflin-St Jeor equation.

    BMR = 10 * weight + 6.25 * height - 5 * age + 5

    70 kg / 170 cm / 30 years -> 1617.5 kcal.
    """
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5


def weekly_sport_calories(sports_frequency: dict | None, weight_kg: float = DEFAULT_WEIGHT_KG) -> float:
    """Extra kcal burned per week from the sports declared at onboarding.

    ``sports_frequency`` maps sport -> {"days": int, "duration": minutes}.
    Entries without a ``days`` value are ignored.
    """
    if not sports_frequency:
        return 0.0

    total = 0.0
    for sport, data in sports_frequency.items():
        if not isinstance(data, dict) or "days" not in data:
            continue
        days = data.get("days") or 0
        hours = (data.get("duration") or 60) / 60
        kcal_per_hour = SPORT_KCAL_PER_HOUR.get(sport, SPORT_KCAL_PER_HOUR["other"])
        total += days * hours * kcal_per_hour * (weight_kg / DEFAULT_WEIGHT_KG)
    return total


def calculate_daily_calories(goals: dict, profile_data: dict | None = None) -> int:
    """Daily calorie target for the user's goals.

    An explicit ``daily_calories`` in the goals wins. Otherwise:
    BMR * activity multiplier, plus the daily average of declared sport
    expenditure, plus the goal adjustment (-500 to lose weight, +300 to
    gain muscle), rounded to the nearest kcal.
    """
    if goals.get("daily_calories"):
        return int(round(goals["daily_calories"]))

    weight = goals.get("current_weight") or DEFAULT_WEIGHT_KG
    height = goals.get("height") or DEFAULT_HEIGHT_CM
    age = goals.get("age") or DEFAULT_AGE

    bmr = calculate_bmr(weight, height, age)
    multiplier = ACTIVITY_MULTIPLIERS.get(goals.get("activity_level"), ACTIVITY_MULTIPLIERS["moderate"])
    tdee = bmr * multiplier

    sports = (profile_data or {}).get("sports_frequency")
    tdee += weekly_sport_calories(sports, weight) / 7

    tdee += GOAL_ADJUSTMENTS.get(goals.get("primary"), 0)
    return int(round(tdee))


def calculate_macros(daily_calories: int) -> dict:
    """Split calories 30/40/30 into protein/carbs/fat grams."""
    macros = {}
    for name, (share, kcal_per_gram) in MACRO_SPLIT.items():
        macros[f"{name}_grams"] = round(daily_calories * share / kcal_per_gram)
    return macros
