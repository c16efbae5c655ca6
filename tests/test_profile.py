"""Tests for onboarding data, the backend row adapter and local storage."""

import pytest

from fitcoach.memory.local_storage import PROFILE_KEY, LocalStorage, wods_key
from fitcoach.memory.profile import (
    create_goals,
    create_profile_data,
    load_profile,
    parse_csv_list,
    save_profile,
    split_profile_row,
    to_backend_goals,
)


# ── Onboarding data ─────────────────────────────────────────────────

class TestCreateGoals:

    def test_defaults(self):
        assert create_goals() == {"primary": "maintain", "activity_level": "moderate"}

    def test_optional_fields_kept(self):
        goals = create_goals("lose_weight", "active", current_weight=82.5, height=178, age=34)
        assert goals["current_weight"] == 82.5
        assert "target_weight" not in goals

    @pytest.mark.parametrize("kwargs", [{"primary": "get_huge"}, {"activity_level": "couch"}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            create_goals(**kwargs)


class TestCreateProfileData:

    def test_drops_empty_and_placeholder(self):
        data = create_profile_data(injuries=["Ninguna"], allergies=["", "  "], favorite_foods=[" Pollo "])
        assert "injuries" not in data
        assert "allergies" not in data
        assert data["favorite_foods"] == ["Pollo"]

    def test_work_schedule(self):
        data = create_profile_data(work_days=[5, 1, 1], work_start="09:00", work_end="17:00")
        assert data["work_schedule"] == {"days": [1, 5], "start_time": "09:00", "end_time": "17:00"}

    def test_sports_frequency_lowercased(self):
        data = create_profile_data(sports_frequency={"CrossFit": {"days": 3, "duration": 60, "type": "class"}})
        assert data["sports_frequency"] == {"crossfit": {"days": 3, "duration": 60, "type": "class"}}

    @pytest.mark.parametrize("kwargs", [
        {"diet_type": "carnivore"},
        {"fitness_experience": "elite"},
        {"preferred_workout_time": "midnight"},
        {"meals_per_day": 0},
        {"meals_per_day": 7},
        {"sports_frequency": {"gym": {"type": "private"}}},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            create_profile_data(**kwargs)

    def test_parse_csv_list(self):
        assert parse_csv_list("pollo, arroz ,, brócoli") == ["pollo", "arroz", "brócoli"]
        assert parse_csv_list(None) == []


# ── Backend row adapter ─────────────────────────────────────────────

class TestSplitProfileRow:

    def test_nested_profile_data(self):
        row = {"id": "u1", "goals": {"primary": "lose_weight", "profile_data": {"diet_type": "vegan"}}}
        profile = split_profile_row(row)
        assert profile["goals"] == {"primary": "lose_weight", "activity_level": "moderate"}
        assert profile["profile_data"] == {"diet_type": "vegan"}
        assert profile["training_types"] == []

    def test_sibling_column_wins(self):
        row = {
            "goals": {"primary": "maintain", "profile_data": {"diet_type": "vegan"}},
            "profile_data": {"diet_type": "keto"},
        }
        assert split_profile_row(row)["profile_data"] == {"diet_type": "keto"}

    def test_row_not_mutated(self):
        row = {"goals": {"primary": "maintain", "profile_data": {"meals_per_day": 3}}}
        split_profile_row(row)
        assert "profile_data" in row["goals"]

    def test_empty_row(self):
        profile = split_profile_row(None)
        assert profile["goals"]["primary"] == "maintain"
        assert profile["generated_plan"] is None

    def test_round_trip_through_backend_shape(self):
        goals = {"primary": "gain_muscle", "activity_level": "active"}
        profile_data = {"meals_per_day": 5}
        row = {"goals": to_backend_goals(goals, profile_data)}
        profile = split_profile_row(row)
        assert profile["goals"] == goals
        assert profile["profile_data"] == profile_data

    def test_to_backend_goals_without_profile(self):
        assert to_backend_goals({"primary": "maintain", "profile_data": {"x": 1}}) == {"primary": "maintain"}


# ── Local storage ───────────────────────────────────────────────────

class TestLocalStorage:

    def test_missing_key(self, storage):
        assert storage.get("nothing") is None
        assert storage.get("nothing", []) == []
        assert storage.remove("nothing") is False

    def test_set_get_remove(self, storage):
        storage.set("generated_plan", {"días": ["Lunes"]})
        assert storage.has("generated_plan")
        assert storage.get("generated_plan") == {"días": ["Lunes"]}
        assert storage.remove("generated_plan") is True
        assert not storage.has("generated_plan")

    def test_corrupt_document_is_no_data(self, storage):
        storage.set("user_goals", [])
        (storage.storage_dir / "user_goals.json").write_text("{not json", encoding="utf-8")
        assert storage.get("user_goals", []) == []

    @pytest.mark.parametrize("key", ["../escape", "Plan", "a b", ""])
    def test_invalid_key(self, storage, key):
        with pytest.raises(ValueError):
            storage.get(key)

    def test_wods_key(self):
        assert wods_key(" CrossFit ") == "crossfit_wods"

    def test_save_and_load_profile(self, tmp_path):
        storage = LocalStorage(tmp_path)
        assert load_profile(storage) is None
        save_profile(storage, {"primary": "maintain", "activity_level": "light"}, ("gym", "yoga"), {"meals_per_day": 3})
        assert storage.has(PROFILE_KEY)
        profile = load_profile(storage)
        assert profile["training_types"] == ["gym", "yoga"]
        assert profile["profile_data"] == {"meals_per_day": 3}
        assert profile["goals"]["activity_level"] == "light"
