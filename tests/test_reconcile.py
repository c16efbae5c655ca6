"""Tests for day swaps and WOD edits."""

import copy
import itertools

import pytest

from fitcoach.tools.reconcile import (
    DAY_NAMES,
    WOD_WEEK,
    can_swap_days,
    clear_wod_day,
    day_index,
    find_days_in_text,
    has_wod,
    set_wod_field,
    swap_days,
)

MOVING_FIELDS = ("workout_type", "title", "duration_minutes", "exercises", "notes", "is_rest_day")


# ── Day names ───────────────────────────────────────────────────────

class TestDayNames:

    def test_sunday_is_zero(self):
        assert DAY_NAMES[0] == "Domingo"
        assert DAY_NAMES[6] == "Sábado"

    def test_day_index_spanish_and_english(self):
        assert day_index("lunes") == 1
        assert day_index("Miércoles") == 3
        assert day_index("miercoles") == 3
        assert day_index("SATURDAY") == 6
        assert day_index("someday") is None

    def test_find_days_in_text(self):
        assert find_days_in_text("quiero intercambiar Lunes y martes") == [1, 2]
        assert find_days_in_text("swap friday, sunday!") == [5, 0]
        assert find_days_in_text("lunes lunes") == [1]
        assert find_days_in_text("hola") == []

    def test_wod_week_starts_monday(self):
        assert WOD_WEEK[0] == "monday"
        assert WOD_WEEK[-1] == "sunday"


# ── Day swap ────────────────────────────────────────────────────────

class TestSwapDays:

    @pytest.mark.parametrize("i,j", list(itertools.permutations(range(7), 2)))
    def test_labels_stay_content_moves(self, demo_plan, i, j):
        result = swap_days(demo_plan, i, j)
        before = demo_plan["workout_plan"]["days"]
        after = result["workout_plan"]["days"]

        assert after[i]["day"] == before[i]["day"]
        assert after[i]["day_name"] == before[i]["day_name"]
        assert after[j]["day_name"] == before[j]["day_name"]
        for field in MOVING_FIELDS:
            assert after[i][field] == before[j][field]
            assert after[j][field] == before[i][field]
        for k in set(range(7)) - {i, j}:
            assert after[k] == before[k]

    def test_double_swap_restores(self, demo_plan):
        assert swap_days(swap_days(demo_plan, 1, 6), 1, 6) == demo_plan

    def test_input_not_mutated(self, demo_plan):
        before = copy.deepcopy(demo_plan)
        swap_days(demo_plan, 1, 2)
        assert demo_plan == before

    def test_rest_days_follow_content(self, demo_plan):
        assert demo_plan["workout_plan"]["rest_days"] == [0, 6]
        result = swap_days(demo_plan, 0, 3)
        assert sorted(result["workout_plan"]["rest_days"]) == [3, 6]
        assert result["workout_plan"]["days"][3]["is_rest_day"] is True
        assert result["workout_plan"]["days"][0]["is_rest_day"] is False

    def test_diet_untouched(self, demo_plan):
        result = swap_days(demo_plan, 1, 2)
        assert result["diet_plan"] == demo_plan["diet_plan"]

    @pytest.mark.parametrize("i,j", [(2, 2), (-1, 3), (0, 7), (1, "2"), (True, 2), (1, False)])
    def test_rejected_returns_input(self, demo_plan, i, j):
        assert swap_days(demo_plan, i, j) is demo_plan

    def test_short_plan_rejected(self, demo_plan):
        plan = copy.deepcopy(demo_plan)
        plan["workout_plan"]["days"] = plan["workout_plan"]["days"][:5]
        assert can_swap_days(plan, 1, 2) is False
        assert swap_days(plan, 1, 2) is plan

    def test_missing_day_rejected(self, demo_plan):
        plan = copy.deepcopy(demo_plan)
        plan["workout_plan"]["days"][4] = None
        assert can_swap_days(plan, 1, 4) is False

    def test_non_dict_day_rejected(self, demo_plan):
        plan = copy.deepcopy(demo_plan)
        plan["workout_plan"]["days"][2] = "x"
        assert swap_days(plan, 1, 2) is plan

    @pytest.mark.parametrize("plan", [
        ["not", "a", "plan"],
        {"workout_plan": ["days"]},
        {"workout_plan": {"days": "1234567"}},
    ])
    def test_wrong_shape_rejected(self, plan):
        assert can_swap_days(plan, 1, 2) is False
        assert swap_days(plan, 1, 2) is plan

    def test_no_plan(self):
        assert can_swap_days(None, 1, 2) is False
        assert can_swap_days({}, 1, 2) is False


# ── WOD notes ───────────────────────────────────────────────────────

class TestWods:

    def test_set_field(self):
        wods = set_wod_field({}, "Monday", "wod", "Fran")
        assert wods == {"monday": {"wod": "Fran"}}

    def test_set_does_not_mutate(self):
        original = {"monday": {"wod": "Fran"}}
        updated = set_wod_field(original, "monday", "strength", "5x5 back squat")
        assert original == {"monday": {"wod": "Fran"}}
        assert updated["monday"] == {"wod": "Fran", "strength": "5x5 back squat"}

    def test_invalid_field_or_day_ignored(self):
        wods = {"monday": {"wod": "Fran"}}
        assert set_wod_field(wods, "monday", "score", "3:10") == wods
        assert set_wod_field(wods, "lunes", "wod", "Grace") == wods

    def test_clear_removes_key(self):
        wods = {"monday": {"wod": "Fran"}, "tuesday": {"notes": "rest"}}
        cleared = clear_wod_day(wods, "monday")
        assert "monday" not in cleared
        assert has_wod(cleared, "tuesday")
        assert "monday" in wods

    def test_clear_missing_day_is_noop(self):
        assert clear_wod_day({"friday": {"wod": "Cindy"}}, "monday") == {"friday": {"wod": "Cindy"}}
