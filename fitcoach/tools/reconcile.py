"""Plan reconciliation: day swaps and per-day WOD note edits.

Every operation is pure: it returns a new object and never mutates its
input. A rejected operation returns the input unchanged and logs why, so
nothing here raises into the caller for bad indices or unknown days.
"""

import copy
import logging
import unicodedata

logger = logging.getLogger(__name__)

# Index 0 = Sunday, matching the plan's day numbering
DAY_NAMES = ("Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado")
WEEKDAY_KEYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

# WOD editors list the week starting on Monday
WOD_WEEK = WEEKDAY_KEYS[1:] + WEEKDAY_KEYS[:1]
WOD_FIELDS = ("strength", "wod", "notes")

# Fields that stay with the weekday when content moves
_DAY_LABEL_FIELDS = ("day", "day_name")

_DAY_ALIASES = {
    **{_name: i for i, _name in enumerate(WEEKDAY_KEYS)},
    "domingo": 0, "lunes": 1, "martes": 2, "miercoles": 3,
    "jueves": 4, "viernes": 5, "sabado": 6,
}


def _fold(text: str) -> str:
    """Lowercase and strip accents ("Miércoles" -> "miercoles")."""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def day_index(name: str) -> int | None:
    """Map a Spanish or English weekday name to its 0-6 index."""
    return _DAY_ALIASES.get(_fold(name.strip()))


def find_days_in_text(text: str) -> list[int]:
    """Weekday indices mentioned in ``text``, in order, without repeats."""
    found = []
    for word in _fold(text).replace(",", " ").split():
        idx = _DAY_ALIASES.get(word.strip(".?!;:"))
        if idx is not None and idx not in found:
            found.append(idx)
    return found


# ── Day swap ────────────────────────────────────────────────────────


def can_swap_days(plan: dict | None, i: int, j: int) -> bool:
    """Check swap preconditions: distinct in-range indices, 7 full days."""
    if not isinstance(plan, dict):
        return False
    workout = plan.get("workout_plan")
    days = workout.get("days") if isinstance(workout, dict) else None
    if not isinstance(days, list) or len(days) < 7:
        return False
    # bool is an int subclass; True must not pass as day 1
    if any(isinstance(k, bool) or not isinstance(k, int) for k in (i, j)):
        return False
    if i == j or not (0 <= i <= 6 and 0 <= j <= 6):
        return False
    return isinstance(days[i], dict) and isinstance(days[j], dict)


def swap_days(plan: dict, i: int, j: int) -> dict:
    """Exchange the workout content of days ``i`` and ``j``.

    Every DayWorkout field except ``day`` and ``day_name`` moves, so the
    weekday labels stay put while exercises, title, duration, rest flag and
    notes trade places. ``rest_days`` membership follows the content.
    The diet week is untouched.

    Returns a new plan, or ``plan`` itself when the swap is rejected.
    """
    if not can_swap_days(plan, i, j):
        logger.warning("Rejected day swap %r <-> %r", i, j)
        return plan

    result = copy.deepcopy(plan)
    workout = result["workout_plan"]
    days = workout["days"]
    first, second = days[i], days[j]

    days[i] = _with_labels(second, first)
    days[j] = _with_labels(first, second)

    if isinstance(workout.get("rest_days"), list):
        workout["rest_days"] = [j if d == i else i if d == j else d for d in workout["rest_days"]]

    logger.info("Swapped workouts of %s and %s", DAY_NAMES[i], DAY_NAMES[j])
    return result


def _with_labels(content: dict, labels: dict) -> dict:
    moved = {k: v for k, v in content.items() if k not in _DAY_LABEL_FIELDS}
    for field in _DAY_LABEL_FIELDS:
        if field in labels:
            moved[field] = labels[field]
    return moved


# ── WOD notes ───────────────────────────────────────────────────────


def set_wod_field(wods: dict, day: str, field: str, value: str) -> dict:
    """Set one freeform field (strength / wod / notes) for a weekday."""
    day = day.strip().lower()
    if day not in WEEKDAY_KEYS or field not in WOD_FIELDS:
        logger.warning("Ignored WOD edit for day=%r field=%r", day, field)
        return wods

    updated = {k: dict(v) for k, v in wods.items()}
    entry = updated.setdefault(day, {})
    entry[field] = value
    return updated


def clear_wod_day(wods: dict, day: str) -> dict:
    """Remove a weekday's entry entirely, so key presence means content."""
    day = day.strip().lower()
    return {k: dict(v) for k, v in wods.items() if k != day}


def has_wod(wods: dict, day: str) -> bool:
    return day.strip().lower() in wods
