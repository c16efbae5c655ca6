"""System prompts and prompt builders for FitCoach's generation tasks.

Each task states the exact JSON shape it expects back; the parsers in
``fitcoach.agent.contract`` read the same field names.
"""

from fitcoach.tools.metrics import calculate_macros

GOAL_TEXT = {
    "lose_weight": "Perder peso/grasa",
    "gain_muscle": "Ganar masa muscular",
    "improve_endurance": "Mejorar resistencia y condición física",
    "maintain": "Mantener peso y mejorar composición corporal",
}


def goal_text(primary: str | None) -> str:
    return GOAL_TEXT.get(primary or "", GOAL_TEXT["maintain"])


TRAINER_SYSTEM_PROMPT = """\
You are a professional personal trainer with years of experience. You create detailed, personalized training plans.
Write every user-facing text in Spanish.
You MUST respond with ONLY a valid JSON object. No markdown, no explanation, no code fences.
"""

NUTRITIONIST_SYSTEM_PROMPT = """\
You are a professional sports nutritionist. You create detailed, balanced and tasty meal plans and always respect dietary restrictions and allergies.
Write every user-facing text in Spanish.
You MUST respond with ONLY a valid JSON object. No markdown, no explanation, no code fences.
"""

CHEF_SYSTEM_PROMPT = """\
You are a nutrition-minded chef. You write healthy, detailed recipes in Spanish.
You MUST respond with ONLY a valid JSON object matching this structure:
{
  "name": "recipe name",
  "description": "short description",
  "ingredients": [{"name": "ingredient", "quantity": 100, "unit": "g"}],
  "instructions": ["step 1", "step 2"],
  "prep_time_minutes": 10,
  "cook_time_minutes": 20,
  "servings": 2,
  "calories_per_serving": 450,
  "protein_per_serving": 30,
  "carbs_per_serving": 40,
  "fat_per_serving": 15,
  "tags": ["tag1", "tag2"]
}
"""

SHOPPING_SYSTEM_PROMPT = """\
You build practical, well-organized shopping lists in Spanish.
You MUST respond with ONLY a valid JSON object:
{"items": [{"ingredient": "name", "quantity": 1, "unit": "kg", "category": "produce|meat|dairy|grains|other"}]}
Merge quantities of the same ingredient and round up.
"""

RECOMMENDATION_SYSTEM_PROMPT = """\
You are an expert personal trainer. Generate a personalized workout for today in Spanish.
You MUST respond with ONLY a valid JSON object:
{
  "title": "short workout title",
  "content": "detailed workout with exercises, sets and reps",
  "reasoning": "why this workout fits the user today"
}
"""


def build_chat_system_prompt(goals: dict, training_types: list[str]) -> str:
    """Short user context for free-form coach chat."""
    return f"""\
You are FitBot, a friendly, motivating fitness and nutrition assistant. Always answer in Spanish.
User context:
- Goal: {goal_text(goals.get('primary'))}
- Trains: {', '.join(training_types) or 'not specified'}
- Activity level: {goals.get('activity_level', 'moderate')}
"""


def build_recommendation_prompt(goals: dict, training_types: list[str], recent_workouts: list[str]) -> str:
    return f"""\
Generate today's workout.
Goal: {goal_text(goals.get('primary'))}
Training types: {', '.join(training_types) or 'gym'}
Activity level: {goals.get('activity_level', 'moderate')}
Recent workouts: {', '.join(recent_workouts) or 'none logged'}

Account for muscle recovery and vary the muscle groups.
"""


def build_workout_week_prompt(goals: dict, training_types: list[str], profile_data: dict | None = None) -> str:
    """Prompt for the 7-day workout plan."""
    profile = profile_data or {}
    injuries = ", ".join(profile.get("injuries") or []) or "none"

    sports_lines = ""
    for sport, freq in (profile.get("sports_frequency") or {}).items():
        kind = {"class": "guided class", "open": "open box"}.get(freq.get("type"), "")
        sports_lines += (
            f"  - {sport}: {freq.get('days', '?')} days/week, "
            f"{freq.get('duration', 60)} min{f' ({kind})' if kind else ''}\n"
        )
    if not sports_lines:
        sports_lines = "  - not specified\n"

    return f"""\
Create a complete, personalized weekly training plan.

USER:
- Goal: {goal_text(goals.get('primary'))}
- Current weight: {goals.get('current_weight') or 70} kg
- Target weight: {goals.get('target_weight') or goals.get('current_weight') or 70} kg
- Height: {goals.get('height') or 170} cm
- Age: {goals.get('age') or 30}
- Activity level: {goals.get('activity_level', 'moderate')}
- Sports: {', '.join(training_types) or 'gym'}
- Weekly sport frequency:
{sports_lines}- Experience: {profile.get('fitness_experience', 'intermediate')}
- Preferred time: {profile.get('preferred_workout_time', 'flexible')}
- Preferred duration: {profile.get('workout_duration_preference') or 60} minutes
- Injuries/limitations: {injuries}

Respond with this JSON structure:
{{
  "name": "plan name",
  "description": "short description",
  "days": [
    {{
      "day": 0,
      "day_name": "Domingo",
      "workout_type": "gym",
      "title": "workout title",
      "duration_minutes": 60,
      "is_rest_day": false,
      "exercises": [
        {{
          "name": "exercise",
          "sets": 4,
          "reps": "8-10",
          "weight_recommendation": "70% RM",
          "rest_seconds": 90,
          "notes": "optional notes",
          "alternatives": ["alternative 1", "alternative 2"]
        }}
      ],
      "notes": "notes for the day"
    }}
  ],
  "rest_days": [0, 3],
  "estimated_calories_burned_weekly": 2500
}}

Include all 7 days, indexed 0 (Sunday, "Domingo") to 6 (Saturday, "Sábado").
For rest days set is_rest_day: true and an empty exercises list.
Adapt the exercises to the injuries listed.
"""


def build_diet_week_prompt(goals: dict, daily_calories: int, profile_data: dict | None = None) -> str:
    """Prompt for the 7-day meal plan at a fixed calorie target."""
    profile = profile_data or {}
    macros = calculate_macros(daily_calories)
    schedule = profile.get("work_schedule")
    schedule_text = f"{schedule['start_time']} - {schedule['end_time']}" if schedule else "flexible"

    return f"""\
Create a complete, personalized weekly meal plan.

USER:
- Goal: {goal_text(goals.get('primary'))}
- Daily calorie target: {daily_calories} kcal
- Macro targets: {macros['protein_grams']}g protein, {macros['carbs_grams']}g carbs, {macros['fat_grams']}g fat
- Diet type: {profile.get('diet_type', 'omnivore')}
- Allergies: {', '.join(profile.get('allergies') or []) or 'none'}
- Disliked foods: {', '.join(profile.get('food_dislikes') or []) or 'none'}
- Favorite foods: {', '.join(profile.get('favorite_foods') or []) or 'not specified'}
- Meals per day: {profile.get('meals_per_day', 4)}
- Work schedule: {schedule_text}

Respond with this JSON structure:
{{
  "name": "plan name",
  "description": "short description",
  "daily_calories": {daily_calories},
  "macros": {{
    "protein_grams": {macros['protein_grams']},
    "carbs_grams": {macros['carbs_grams']},
    "fat_grams": {macros['fat_grams']}
  }},
  "days": [
    {{
      "day": 0,
      "day_name": "Domingo",
      "meals": [
        {{
          "meal_type": "breakfast",
          "name": "meal name",
          "time_suggestion": "08:00",
          "foods": [
            {{"name": "food", "quantity": "100g", "calories": 200, "protein": 20, "carbs": 10, "fat": 8}}
          ],
          "calories": 400,
          "protein": 30,
          "carbs": 40,
          "fat": 12,
          "recipe": {{
            "ingredients": ["ingredient 1", "ingredient 2"],
            "instructions": ["step 1", "step 2"],
            "prep_time": 10
          }}
        }}
      ],
      "total_calories": {daily_calories}
    }}
  ]
}}

Include all 7 days with variety, indexed 0 (Sunday) to 6 (Saturday).
Fit meal times around the work schedule. Avoid the listed allergens completely.
Include quick, easy recipes for every main meal.
"""


def build_shopping_prompt(food_lines: list[str]) -> str:
    foods = "\n".join(food_lines) or "(no foods)"
    return f"""\
Create a consolidated weekly shopping list from these foods:
{foods}
"""


def build_meals_shopping_prompt(meals: list[dict]) -> str:
    listed = ", ".join(f"{m.get('name', '?')} ({m.get('servings', 1)} servings)" for m in meals)
    return f"Create a weekly shopping list for these meals: {listed or '(none)'}\n"


def build_recipe_prompt(name: str, goals: dict) -> str:
    return f"""\
Write a detailed recipe for: {name}
User goal: {goal_text(goals.get('primary'))}
It must be healthy and nutritious.
"""
