"""User goals and secondary profile data, plus the backend row adapter.

Goals and profile data are two separate top-level values everywhere in the
package. Older ``profiles`` rows keep ``profile_data`` nested inside the
``goals`` JSON; ``split_profile_row`` and ``to_backend_goals`` translate at
the backend boundary only.
"""

from fitcoach.memory.local_storage import PROFILE_KEY, LocalStorage

PRIMARY_GOALS = ("lose_weight", "gain_muscle", "maintain", "improve_endurance")
ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very_active")
WORKOUT_TIMES = ("morning", "afternoon", "evening", "flexible")
DIET_TYPES = ("omnivore", "vegetarian", "vegan", "pescatarian", "keto", "paleo")
EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced")
SPORT_SESSION_TYPES = ("class", "open")

TRAINING_TYPES = (
    "crossfit", "hyrox", "hybrid", "gym", "running", "swimming", "yoga",
    "pilates", "cycling", "hiking", "martial_arts", "tennis", "padel",
    "basketball", "football", "calisthenics", "boxing", "dance", "other",
)


def create_goals(
    primary: str = "maintain",
    activity_level: str = "moderate",
    current_weight: float | None = None,
    target_weight: float | None = None,
    height: float | None = None,
    age: int | None = None,
    daily_calories: int | None = None,
) -> dict:
    """Build a UserGoals dict. Raises ValueError on unknown enum values."""
    if primary not in PRIMARY_GOALS:
        raise ValueError(f"Unknown primary goal: {primary}")
    if activity_level not in ACTIVITY_LEVELS:
        raise ValueError(f"Unknown activity level: {activity_level}")

    goals = {"primary": primary, "activity_level": activity_level}
    optional = {
        "current_weight": current_weight,
        "target_weight": target_weight,
        "height": height,
        "age": age,
        "daily_calories": daily_calories,
    }
    goals.update({k: v for k, v in optional.items() if v is not None})
    return goals


def create_profile_data(
    work_days: list[int] | None = None,
    work_start: str | None = None,
    work_end: str | None = None,
    preferred_workout_time: str = "flexible",
    workout_duration_preference: int | None = None,
    sports_frequency: dict | None = None,
    diet_type: str = "omnivore",
    allergies: list[str] | None = None,
    food_dislikes: list[str] | None = None,
    favorite_foods: list[str] | None = None,
    meals_per_day: int = 4,
    injuries: list[str] | None = None,
    fitness_experience: str = "intermediate",
    gender: str | None = None,
    initial_photos: dict | None = None,
) -> dict:
    """Build a UserProfileData dict from onboarding answers.

    Empty lists and unset fields are left out, so "has allergies" can be
    tested with ``profile.get("allergies")``. The placeholder injury
    "Ninguna" (none) is dropped.
    """
    if preferred_workout_time not in WORKOUT_TIMES:
        raise ValueError(f"Unknown workout time: {preferred_workout_time}")
    if diet_type not in DIET_TYPES:
        raise ValueError(f"Unknown diet type: {diet_type}")
    if fitness_experience not in EXPERIENCE_LEVELS:
        raise ValueError(f"Unknown fitness experience: {fitness_experience}")
    if not 1 <= meals_per_day <= 6:
        raise ValueError(f"meals_per_day must be between 1 and 6, got {meals_per_day}")

    data: dict = {
        "preferred_workout_time": preferred_workout_time,
        "diet_type": diet_type,
        "meals_per_day": meals_per_day,
        "fitness_experience": fitness_experience,
    }
    if work_start and work_end:
        data["work_schedule"] = {
            "days": sorted(set(work_days or [])),
            "start_time": work_start,
            "end_time": work_end,
        }
    if workout_duration_preference:
        data["workout_duration_preference"] = workout_duration_preference
    if sports_frequency:
        data["sports_frequency"] = _clean_sports_frequency(sports_frequency)

    for key, values in (
        ("allergies", allergies),
        ("food_dislikes", food_dislikes),
        ("favorite_foods", favorite_foods),
        ("injuries", injuries),
    ):
        cleaned = [v.strip() for v in values or [] if v and v.strip() and v.strip().lower() != "ninguna"]
        if cleaned:
            data[key] = cleaned

    if gender:
        data["gender"] = gender
    if initial_photos:
        data["initial_photos"] = {k: v for k, v in initial_photos.items() if v}
    return data


def _clean_sports_frequency(sports_frequency: dict) -> dict:
    cleaned = {}
    for sport, entry in sports_frequency.items():
        entry = dict(entry or {})
        session_type = entry.get("type")
        if session_type is not None and session_type not in SPORT_SESSION_TYPES:
            raise ValueError(f"Unknown session type for {sport}: {session_type}")
        cleaned[sport.lower()] = entry
    return cleaned


def parse_csv_list(text: str | None) -> list[str]:
    """Split a comma-separated answer ("pollo, arroz") into clean items."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


# ── Backend boundary ────────────────────────────────────────────────


def split_profile_row(row: dict | None) -> dict:
    """Normalize a ``profiles`` row into separate goals / profile data.

    Accepts both the legacy shape (``profile_data`` nested in ``goals``)
    and the flat one (sibling column). A sibling column wins over a nested
    copy. Returns {"id", "goals", "training_types", "profile_data",
    "generated_plan"}.
    """
    row = row or {}
    goals = dict(row.get("goals") or {})
    nested = goals.pop("profile_data", None)
    profile_data = row.get("profile_data") or nested or {}

    if not goals.get("primary"):
        goals["primary"] = "maintain"
    if not goals.get("activity_level"):
        goals["activity_level"] = "moderate"

    return {
        "id": row.get("id"),
        "goals": goals,
        "training_types": list(row.get("training_types") or []),
        "profile_data": dict(profile_data),
        "generated_plan": row.get("generated_plan"),
    }


def to_backend_goals(goals: dict, profile_data: dict | None = None) -> dict:
    """Re-nest profile data under ``goals`` for the stored row shape."""
    payload = {k: v for k, v in goals.items() if k != "profile_data"}
    if profile_data:
        payload["profile_data"] = profile_data
    return payload


# ── Local cache ─────────────────────────────────────────────────────


def save_profile(
    storage: LocalStorage,
    goals: dict,
    training_types: list[str],
    profile_data: dict | None = None,
):
    """Cache the user's goals, training types and profile data locally."""
    return storage.set(PROFILE_KEY, {
        "goals": goals,
        "training_types": list(training_types),
        "profile_data": profile_data or {},
    })


def load_profile(storage: LocalStorage) -> dict | None:
    """Load the cached profile, or None if onboarding hasn't happened."""
    cached = storage.get(PROFILE_KEY)
    if not cached:
        return None
    return split_profile_row(cached)
