"""Tests for BMR, daily calorie target and macro split."""

import pytest

from fitcoach.tools.metrics import (
    calculate_bmr,
    calculate_daily_calories,
    calculate_macros,
    weekly_sport_calories,
)


BASE_GOALS = {
    "current_weight": 70,
    "height": 170,
    "age": 30,
    "activity_level": "sedentary",
    "primary": "maintain",
}


class TestBMR:

    def test_reference_athlete(self):
        assert calculate_bmr(70, 170, 30) == pytest.approx(1617.5)

    def test_defaults_match_reference(self):
        assert calculate_bmr() == calculate_bmr(70, 170, 30)

    def test_heavier_is_higher(self):
        assert calculate_bmr(90, 170, 30) > calculate_bmr(70, 170, 30)


class TestDailyCalories:

    def test_sedentary_maintain(self):
        assert calculate_daily_calories(BASE_GOALS) == 1941

    def test_lose_weight_subtracts_500(self):
        assert calculate_daily_calories({**BASE_GOALS, "primary": "lose_weight"}) == 1441

    def test_gain_muscle_adds_300(self):
        assert calculate_daily_calories({**BASE_GOALS, "primary": "gain_muscle"}) == 2241

    def test_explicit_target_wins(self):
        assert calculate_daily_calories({**BASE_GOALS, "daily_calories": 2500}) == 2500

    def test_missing_values_use_defaults(self):
        # 1617.5 * 1.55 (moderate)
        assert calculate_daily_calories({}) == 2507

    def test_sport_expenditure_is_averaged_per_day(self):
        profile = {"sports_frequency": {"crossfit": {"days": 3, "duration": 60}}}
        # 1941 + 3 * 600 / 7
        assert calculate_daily_calories(BASE_GOALS, profile) == 2198

    def test_no_floor_on_low_targets(self):
        goals = {**BASE_GOALS, "current_weight": 45, "height": 150, "age": 60, "primary": "lose_weight"}
        assert calculate_daily_calories(goals) < 1500


class TestSportCalories:

    def test_empty(self):
        assert weekly_sport_calories(None) == 0
        assert weekly_sport_calories({}) == 0

    def test_entries_without_days_ignored(self):
        assert weekly_sport_calories({"gym": {"duration": 60}}) == 0

    def test_scales_with_weight(self):
        sports = {"running": {"days": 2, "duration": 30}}
        assert weekly_sport_calories(sports, 140) == pytest.approx(2 * weekly_sport_calories(sports, 70))

    def test_unknown_sport_uses_default_rate(self):
        assert weekly_sport_calories({"padel": {"days": 1, "duration": 60}}) == pytest.approx(350)


class TestMacros:

    def test_split(self):
        assert calculate_macros(2000) == {"protein_grams": 150, "carbs_grams": 200, "fat_grams": 67}

    def test_all_positive(self):
        assert all(v > 0 for v in calculate_macros(1200).values())
