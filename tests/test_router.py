"""Tests for chat intent routing and the day-swap conversation."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from fitcoach.agent.router import (
    ASK_DAYS_TEXT,
    NO_PLAN_TEXT,
    ChatInterpreter,
    Intent,
    classify_intent,
    render_week,
)
from fitcoach.memory.plan_store import PlanStore


@pytest.fixture
def store(storage, demo_plan):
    plan_store = PlanStore(storage)
    plan_store.commit(demo_plan)
    return plan_store


@pytest.fixture
def interpreter(store):
    return ChatInterpreter(store, {"primary": "maintain"}, ["gym"])


def _titles(store):
    return [d["title"] for d in store.get()["workout_plan"]["days"]]


# ── Intent classification ───────────────────────────────────────────

class TestClassifyIntent:

    @pytest.mark.parametrize("text", [
        "Quiero INTERCAMBIAR lunes y martes",
        "¿puedo cambiar día?",
        "mover dia del entreno",
        "swap monday and friday",
    ])
    def test_swap(self, text):
        assert classify_intent(text) is Intent.SWAP_DAYS

    @pytest.mark.parametrize("text", ["Mi Rutina", "ver plan", "Show my routine", "¿cómo es mi semana?"])
    def test_show_routine(self, text):
        assert classify_intent(text) is Intent.SHOW_ROUTINE

    @pytest.mark.parametrize("text", ["hola", "", None, "¿cuánta proteína necesito?"])
    def test_general(self, text):
        assert classify_intent(text) is Intent.GENERAL_CHAT

    def test_swap_wins_over_routine(self):
        assert classify_intent("intercambiar días de mi rutina") is Intent.SWAP_DAYS


class TestRenderWeek:

    def test_one_line_per_day(self, demo_plan):
        lines = render_week(demo_plan).splitlines()
        assert len(lines) == 7
        assert lines[0] == "Domingo: Descanso"
        assert lines[1].startswith("Lunes: Pecho + Abdomen")


# ── Swap conversation ───────────────────────────────────────────────

class TestSwapConversation:

    def test_two_days_in_message(self, interpreter, store):
        before = _titles(store)
        reply = asyncio.run(interpreter.handle("intercambiar lunes y miércoles"))

        assert reply.intent is Intent.SWAP_DAYS
        assert reply.swapped == (1, 3)
        assert reply.text.startswith("Listo")
        after = _titles(store)
        assert after[1] == before[3]
        assert after[3] == before[1]
        assert interpreter.awaiting_days is False

    def test_selection_mode(self, interpreter, store):
        before = _titles(store)
        reply = asyncio.run(interpreter.handle("quiero intercambiar días"))
        assert reply.awaiting_days is True
        assert reply.text == ASK_DAYS_TEXT

        reply = interpreter.select_day(0)
        assert reply.awaiting_days is True
        assert _titles(store) == before

        reply = interpreter.select_day(2)
        assert reply.swapped == (0, 2)
        assert _titles(store)[0] == before[2]
        assert interpreter.awaiting_days is False

    def test_one_day_named_preselects(self, interpreter):
        reply = asyncio.run(interpreter.handle("swap el viernes"))
        assert reply.awaiting_days is True
        assert interpreter.selected == [5]

    def test_day_names_answer_pending_swap(self, interpreter):
        asyncio.run(interpreter.handle("intercambiar"))
        with patch("fitcoach.agent.router.chat_with_ai", new_callable=AsyncMock) as chat:
            reply = asyncio.run(interpreter.handle("lunes y sábado"))
        chat.assert_not_called()
        assert reply.swapped == (1, 6)

    def test_deselect(self, interpreter):
        asyncio.run(interpreter.handle("intercambiar"))
        interpreter.select_day(4)
        reply = interpreter.select_day(4)
        assert "deseleccionado" in reply.text
        assert reply.awaiting_days is False
        assert interpreter.selected == []
        assert interpreter.awaiting_days is False

    def test_deselect_to_none_ends_selection(self, interpreter, store):
        before = _titles(store)
        asyncio.run(interpreter.handle("intercambiar"))
        interpreter.select_day(4)
        interpreter.select_day(4)
        assert interpreter.select_day(2).swapped is None
        assert interpreter.selected == []
        assert _titles(store) == before

    def test_cancel(self, interpreter, store):
        before = _titles(store)
        asyncio.run(interpreter.handle("intercambiar"))
        interpreter.select_day(1)
        interpreter.cancel()
        assert interpreter.awaiting_days is False
        assert interpreter.select_day(2).swapped is None
        assert _titles(store) == before

    def test_invalid_day(self, interpreter):
        asyncio.run(interpreter.handle("intercambiar"))
        reply = interpreter.select_day(9)
        assert reply.text == "Día no válido."
        assert interpreter.selected == []

    def test_subscribers_see_swap(self, interpreter, store):
        seen = []
        store.subscribe(seen.append)
        asyncio.run(interpreter.handle("intercambiar martes y jueves"))
        assert len(seen) == 1
        assert seen[0] is store.get()


# ── No plan / other intents ─────────────────────────────────────────

class TestOtherIntents:

    def test_show_routine(self, interpreter, demo_plan):
        reply = asyncio.run(interpreter.handle("ver mi rutina"))
        assert reply.intent is Intent.SHOW_ROUTINE
        assert reply.text == render_week(demo_plan)

    @pytest.mark.parametrize("text", ["ver mi rutina", "intercambiar lunes y martes"])
    def test_no_plan(self, storage, text):
        interpreter = ChatInterpreter(PlanStore(storage))
        reply = asyncio.run(interpreter.handle(text))
        assert reply.text == NO_PLAN_TEXT
        assert reply.swapped is None

    def test_general_chat_goes_to_coach(self, interpreter):
        with patch("fitcoach.agent.router.chat_with_ai", new_callable=AsyncMock, return_value="¡Ánimo!") as chat:
            reply = asyncio.run(interpreter.handle("¿cuánta agua bebo?"))
        assert reply.intent is Intent.GENERAL_CHAT
        assert reply.text == "¡Ánimo!"
        chat.assert_awaited_once_with("¿cuánta agua bebo?", {"primary": "maintain"}, ["gym"])

    def test_general_chat_without_key(self, interpreter, no_gemini):
        reply = asyncio.run(interpreter.handle("hola"))
        assert reply.text.startswith("¡Hola! Soy FitBot")
