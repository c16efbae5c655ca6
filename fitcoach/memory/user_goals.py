"""User-defined milestone goals ("bench 100 kg", "run 10 km").

Goals live in local storage only and are never synced to the backend.
A goal may run upwards (lift more) or downwards (weigh less); the
direction is fixed by its starting value and target.
"""

import logging
import math
import uuid
from datetime import datetime, timezone

from fitcoach.memory.local_storage import USER_GOALS_KEY, LocalStorage

logger = logging.getLogger(__name__)

GOAL_CATEGORIES = ("strength", "cardio", "weight", "habit", "other")
MILESTONE_STEPS = 4

_STEP_PLANS = {
    "strength": [
        "Semana 1-2: trabaja al 70% de tu RM actual ({p70}{unit}) cuidando la técnica",
        "Semana 3-4: sube al 75% RM, 5x5 con {p75}{unit}",
        "Semana 5-6: trabaja al 80% RM con descansos de 3-4 min",
        "Semana 7-8: series de 3 repeticiones al 85% RM",
        "Cada 2 semanas: añade 2.5-5 kg si completas todas las series",
        "Nutrición: 2 g de proteína por kg de peso corporal",
        "Meta intermedia: llegar a {midpoint}{unit} a mitad de camino",
    ],
    "cardio": [
        "Semana 1-2: 3 sesiones por semana, +10% de distancia cada semana",
        "El 80% de las sesiones a ritmo conversacional",
        "Semana 3-4: añade una sesión de intervalos (6x400 m, 90 s de descanso)",
        "Semana 5-6: alarga la sesión larga un 15%",
        "Semana 7-8: cuestas o fartlek una vez por semana",
        "Descanso: 1-2 días de descanso activo por semana",
    ],
    "weight": [
        "Déficit moderado: 300-500 kcal por debajo de mantenimiento",
        "Proteína alta: 2-2.5 g por kg para preservar músculo",
        "Fuerza 3-4 veces por semana",
        "Pésate cada día a la misma hora y usa la media semanal",
        "Objetivo: como máximo 0.5-1% del peso corporal por semana",
        "Ajusta calorías si el peso se estanca más de 2 semanas",
    ],
    "habit": [
        "Empieza pequeño: si quieres 5 días, empieza con 3 y suma 1 cada 2 semanas",
        "Entrena siempre a la misma hora",
        "Prepara ropa y bolsa la noche anterior",
        "Regla de los 2 minutos: comprométete solo a empezar",
        "Marca cada día cumplido en un calendario",
    ],
    "other": [
        "Define métricas claras para medir el progreso",
        "Divide el objetivo en hitos mensuales",
        "Identifica obstáculos y planifica cómo superarlos",
        "Registra tu progreso cada semana",
        "Ajusta el plan según los resultados",
    ],
}


def _round1(value: float) -> float:
    """Round half up to one decimal (12.25 -> 12.3)."""
    return math.floor(value * 10 + 0.5) / 10


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def generate_milestones(current: float, target: float, unit: str) -> list[dict]:
    """Four evenly spaced checkpoints from ``current`` to ``target``."""
    increment = (target - current) / MILESTONE_STEPS
    milestones = []
    for step in range(1, MILESTONE_STEPS + 1):
        value = _round1(current + increment * step)
        milestones.append({
            "value": value,
            "description": f"Llegar a {_fmt(value)}{unit}",
            "completed": False,
        })
    return milestones


def step_plan(category: str, current: float, target: float, unit: str) -> list[str]:
    """Category-specific action plan for a goal."""
    template = _STEP_PLANS.get(category, _STEP_PLANS["other"])
    values = {
        "p70": round(current * 0.7),
        "p75": round(current * 0.75),
        "midpoint": round((current + target) / 2),
        "unit": unit,
    }
    return [line.format(**values) for line in template]


def create_goal(
    title: str,
    target_value: float,
    current_value: float = 0,
    category: str = "strength",
    unit: str = "kg",
    description: str = "",
    deadline: str | None = None,
) -> dict:
    """Build a new UserGoal with milestones and a step plan.

    Raises ValueError for an empty title or an unknown category.
    """
    if not title or not title.strip():
        raise ValueError("Goal title is required")
    if category not in GOAL_CATEGORIES:
        raise ValueError(f"Unknown goal category: {category}")

    current = float(current_value or 0)
    target = float(target_value)
    goal = {
        "id": str(uuid.uuid4()),
        "title": title.strip(),
        "description": description,
        "category": category,
        "target_value": target,
        "start_value": current,
        "current_value": current,
        "unit": unit,
        "ai_plan": step_plan(category, current, target, unit),
        "milestones": generate_milestones(current, target, unit),
        "created_at": datetime.now(timezone.utc).isoformat(),
        "completed": False,
    }
    if deadline:
        goal["deadline"] = deadline
    return goal


def _reached(value: float, mark: float, decreasing: bool) -> bool:
    return value <= mark if decreasing else value >= mark


def update_progress(goal: dict, value: float) -> dict:
    """Record a new current value. Returns an updated copy of ``goal``.

    Milestones are re-evaluated against the new value. A goal that reaches
    its target stays completed even if the value later moves back.
    """
    start = goal.get("start_value", goal.get("current_value", 0))
    decreasing = goal["target_value"] < start

    updated = dict(goal)
    updated["current_value"] = value
    updated["milestones"] = [
        {**m, "completed": _reached(value, m["value"], decreasing)}
        for m in goal.get("milestones") or []
    ]
    if _reached(value, goal["target_value"], decreasing):
        updated["completed"] = True
    return updated


def progress_percent(goal: dict) -> int:
    """Progress from start to target, clamped to 0-100."""
    start = goal.get("start_value", 0)
    span = goal["target_value"] - start
    if span == 0:
        return 100
    return max(0, min(100, round((goal["current_value"] - start) / span * 100)))


class GoalStore:
    """The user's milestone goals, persisted as one list under ``user_goals``."""

    def __init__(self, storage: LocalStorage | None = None):
        self.storage = storage or LocalStorage()

    def all(self) -> list[dict]:
        goals = self.storage.get(USER_GOALS_KEY, [])
        return goals if isinstance(goals, list) else []

    def _save(self, goals: list[dict]):
        self.storage.set(USER_GOALS_KEY, goals)

    def add(self, goal: dict) -> dict:
        self._save(self.all() + [goal])
        logger.info("Added goal %s (%s)", goal["id"], goal["title"])
        return goal

    def get(self, goal_id: str) -> dict | None:
        return next((g for g in self.all() if g.get("id") == goal_id), None)

    def update_progress(self, goal_id: str, value: float) -> dict | None:
        """Update one goal's progress. None if the id is unknown."""
        goals = self.all()
        for i, goal in enumerate(goals):
            if goal.get("id") == goal_id:
                goals[i] = update_progress(goal, value)
                self._save(goals)
                return goals[i]
        logger.warning("Unknown goal id %s", goal_id)
        return None

    def delete(self, goal_id: str) -> bool:
        goals = self.all()
        kept = [g for g in goals if g.get("id") != goal_id]
        if len(kept) == len(goals):
            return False
        self._save(kept)
        return True

    def active(self) -> list[dict]:
        return [g for g in self.all() if not g.get("completed")]

    def completed(self) -> list[dict]:
        return [g for g in self.all() if g.get("completed")]
