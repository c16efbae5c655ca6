"""Chat command routing: plan commands handled locally, the rest to the coach.

Messages are matched case-insensitively against fixed phrase lists:

    SWAP_DAYS     "intercambiar", "cambiar día", "swap", ...
    SHOW_ROUTINE  "mi rutina", "ver rutina", "mi plan", ...
    GENERAL_CHAT  anything else, answered by the LLM (or a canned reply)

Swap commands that don't name two weekdays put the interpreter in a
selection mode where ``select_day`` collects the two days.
"""

import enum
import logging
from dataclasses import dataclass

from fitcoach.agent.generator import chat_with_ai
from fitcoach.tools.reconcile import DAY_NAMES, find_days_in_text

logger = logging.getLogger(__name__)


class Intent(enum.Enum):
    SWAP_DAYS = "swap_days"
    SHOW_ROUTINE = "show_routine"
    GENERAL_CHAT = "general_chat"


# Checked in this order; the first list with a hit wins
INTENT_PHRASES = (
    (Intent.SWAP_DAYS, (
        "intercambiar", "intercambia", "cambiar día", "cambiar dia", "cambiar el día",
        "cambiar el dia", "mover día", "mover dia", "swap",
    )),
    (Intent.SHOW_ROUTINE, (
        "mi rutina", "ver rutina", "ver mi rutina", "muestra rutina", "muéstrame la rutina",
        "mi plan", "ver plan", "mi semana", "show my routine", "show routine",
    )),
)


def classify_intent(text: str) -> Intent:
    lower = (text or "").lower()
    for intent, phrases in INTENT_PHRASES:
        if any(phrase in lower for phrase in phrases):
            return intent
    return Intent.GENERAL_CHAT


def render_week(plan: dict) -> str:
    """Plain-text summary of the week's workouts, one line per day."""
    lines = []
    for day in (plan.get("workout_plan") or {}).get("days") or []:
        name = day.get("day_name") or DAY_NAMES[day.get("day", 0) % 7]
        if day.get("is_rest_day"):
            lines.append(f"{name}: Descanso")
            continue
        count = len(day.get("exercises") or [])
        lines.append(f"{name}: {day.get('title', '')} ({day.get('duration_minutes', 0)} min, {count} ejercicios)")
    return "\n".join(lines)


@dataclass
class ChatReply:
    text: str
    intent: Intent
    swapped: tuple[int, int] | None = None
    awaiting_days: bool = False


NO_PLAN_TEXT = "Todavía no tienes un plan generado. Genera uno primero."
ASK_DAYS_TEXT = "¿Qué dos días quieres intercambiar? Elige el primero."


class ChatInterpreter:
    """Turns chat messages into plan operations or coach replies.

    Holds only the in-progress day selection; nothing is persisted.

    Args:
        store: ``PlanStore`` holding the current plan
        goals: UserGoals dict, used as chat context
        training_types: Sports the user trains, used as chat context
    """

    def __init__(self, store, goals: dict | None = None, training_types: list[str] | None = None):
        self.store = store
        self.goals = goals or {}
        self.training_types = training_types or []
        self.awaiting_days = False
        self.selected: list[int] = []

    async def handle(self, text: str) -> ChatReply:
        intent = classify_intent(text)
        logger.info("Chat intent: %s", intent.value)

        if intent is Intent.SWAP_DAYS:
            return self._start_swap(text)
        if intent is Intent.SHOW_ROUTINE:
            plan = self.store.get()
            if not plan:
                return ChatReply(NO_PLAN_TEXT, intent)
            return ChatReply(render_week(plan), intent)

        if self.awaiting_days:
            days = find_days_in_text(text)
            if days:
                reply = None
                for day in days:
                    reply = self.select_day(day)
                    if not self.awaiting_days:
                        break
                return reply

        reply = await chat_with_ai(text, self.goals, self.training_types)
        return ChatReply(reply, intent)

    def _start_swap(self, text: str) -> ChatReply:
        if not self.store.get():
            return ChatReply(NO_PLAN_TEXT, Intent.SWAP_DAYS)

        days = find_days_in_text(text)
        if len(days) >= 2:
            self._reset_selection()
            return self._swap(days[0], days[1])

        self.awaiting_days = True
        self.selected = days[:1]
        if self.selected:
            return ChatReply(
                f"Has elegido {DAY_NAMES[self.selected[0]]}. ¿Con qué día lo intercambio?",
                Intent.SWAP_DAYS, awaiting_days=True,
            )
        return ChatReply(ASK_DAYS_TEXT, Intent.SWAP_DAYS, awaiting_days=True)

    def select_day(self, index: int) -> ChatReply:
        """Select (or, if already selected, deselect) a day for the pending swap."""
        if not self.awaiting_days:
            return ChatReply("No hay ningún intercambio pendiente.", Intent.SWAP_DAYS)
        if not 0 <= index <= 6:
            return ChatReply("Día no válido.", Intent.SWAP_DAYS, awaiting_days=True)

        if index in self.selected:
            self.selected.remove(index)
            if not self.selected:
                self._reset_selection()
                return ChatReply(
                    f"{DAY_NAMES[index]} deseleccionado. Intercambio cancelado.", Intent.SWAP_DAYS,
                )
            return ChatReply(f"{DAY_NAMES[index]} deseleccionado.", Intent.SWAP_DAYS, awaiting_days=True)

        self.selected.append(index)
        if len(self.selected) < 2:
            return ChatReply(
                f"Has elegido {DAY_NAMES[index]}. Elige el segundo día.",
                Intent.SWAP_DAYS, awaiting_days=True,
            )

        first, second = self.selected
        self._reset_selection()
        return self._swap(first, second)

    def cancel(self):
        self._reset_selection()

    def _reset_selection(self):
        self.awaiting_days = False
        self.selected = []

    def _swap(self, i: int, j: int) -> ChatReply:
        if self.store.swap_days(i, j):
            return ChatReply(
                f"Listo: he intercambiado el entrenamiento del {DAY_NAMES[i]} y el {DAY_NAMES[j]}.",
                Intent.SWAP_DAYS, swapped=(i, j),
            )
        return ChatReply(
            f"No he podido intercambiar {DAY_NAMES[i]} y {DAY_NAMES[j]}.",
            Intent.SWAP_DAYS,
        )
