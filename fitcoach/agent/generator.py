"""Generation service: Gemini first, deterministic demo data on any failure.

Every public coroutine returns usable data. Without a GEMINI_API_KEY the
demo builders answer directly; otherwise the model call runs under
``asyncio.wait_for`` so a slow request is cancelled at the deadline and
never delivers a late result after the fallback has been used.
"""

import asyncio
import logging
from datetime import datetime, timezone

from fitcoach.agent import fallback
from fitcoach.agent.contract import (
    parse_diet_week,
    parse_recipe,
    parse_shopping_list,
    parse_workout_recommendation,
    parse_workout_week,
)
from fitcoach.agent.llm import MODEL, get_client, has_credentials, json_config, text_config, user_content
from fitcoach.agent.prompts import (
    CHEF_SYSTEM_PROMPT,
    NUTRITIONIST_SYSTEM_PROMPT,
    RECOMMENDATION_SYSTEM_PROMPT,
    SHOPPING_SYSTEM_PROMPT,
    TRAINER_SYSTEM_PROMPT,
    build_chat_system_prompt,
    build_diet_week_prompt,
    build_meals_shopping_prompt,
    build_recipe_prompt,
    build_recommendation_prompt,
    build_shopping_prompt,
    build_workout_week_prompt,
)
from fitcoach.tools.metrics import calculate_daily_calories
from fitcoach.tools.shopping import shopping_list_from_diet

logger = logging.getLogger(__name__)

PLAN_TIMEOUT_SECONDS = 15
CALL_TIMEOUT_SECONDS = 10


async def _generate_json(system_instruction: str, prompt: str, temperature: float = 0.7) -> str:
    """One JSON-mode model call. Returns the raw response text."""
    client = get_client()
    response = await client.aio.models.generate_content(
        model=MODEL,
        contents=user_content(prompt),
        config=json_config(system_instruction, temperature),
    )
    return response.text or ""


# ── Full week plan ──────────────────────────────────────────────────


async def _generate_ai_plan(
    goals: dict,
    training_types: list[str],
    profile_data: dict | None,
    daily_calories: int,
) -> dict:
    """Workout week and diet week in parallel, then the shopping list."""
    calls = [
        asyncio.ensure_future(_generate_json(
            TRAINER_SYSTEM_PROMPT, build_workout_week_prompt(goals, training_types, profile_data),
        )),
        asyncio.ensure_future(_generate_json(
            NUTRITIONIST_SYSTEM_PROMPT, build_diet_week_prompt(goals, daily_calories, profile_data),
        )),
    ]
    try:
        workout_text, diet_text = await asyncio.gather(*calls)
    except BaseException:
        # gather leaves the sibling running when one call fails
        for call in calls:
            call.cancel()
        raise
    workout_plan = parse_workout_week(workout_text, training_types)
    diet_plan = parse_diet_week(diet_text, daily_calories)
    shopping_list = await _generate_week_shopping_list(diet_plan)

    return {
        "workout_plan": workout_plan,
        "diet_plan": diet_plan,
        "shopping_list": shopping_list,
        "recommendations": fallback.personalized_tips(goals, profile_data),
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "source": "ai",
    }


async def _generate_week_shopping_list(diet_plan: dict) -> list[dict]:
    """Shopping list for a diet week; derived locally if the model fails."""
    food_lines = []
    for day in diet_plan["days"]:
        for meal in day["meals"]:
            food_lines += [f"{f['name']} ({f['quantity']})" for f in meal["foods"]]
            food_lines += (meal.get("recipe") or {}).get("ingredients", [])

    try:
        text = await _generate_json(SHOPPING_SYSTEM_PROMPT, build_shopping_prompt(food_lines))
        return parse_shopping_list(text)
    except Exception as e:
        logger.warning("Shopping list generation failed, deriving from diet: %s", e)
        return shopping_list_from_diet(diet_plan)


async def generate_complete_plan(
    goals: dict,
    training_types: list[str],
    profile_data: dict | None = None,
) -> dict:
    """Generate the full weekly plan (workouts, diet, shopping, tips).

    Args:
        goals: UserGoals dict
        training_types: Sports the user trains
        profile_data: Optional UserProfileData dict

    Returns:
        GeneratedPlan dict. ``source`` is "ai" when the model produced it,
        "fallback" when demo data was used (no key, error or timeout).
    """
    daily_calories = calculate_daily_calories(goals, profile_data)

    if not has_credentials():
        logger.info("No GEMINI_API_KEY configured, using demo plan")
        return fallback.generate_fallback_plan(goals, training_types, profile_data, daily_calories)

    try:
        plan = await asyncio.wait_for(
            _generate_ai_plan(goals, training_types, profile_data, daily_calories),
            timeout=PLAN_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.warning("Plan generation timed out after %ss, using demo plan", PLAN_TIMEOUT_SECONDS)
        return fallback.generate_fallback_plan(goals, training_types, profile_data, daily_calories)
    except Exception as e:
        logger.warning("Plan generation failed, using demo plan: %s", e)
        return fallback.generate_fallback_plan(goals, training_types, profile_data, daily_calories)

    logger.info("Generated AI plan (%d kcal/day)", daily_calories)
    return plan


# ── Single calls ────────────────────────────────────────────────────


async def _bounded(coro):
    return await asyncio.wait_for(coro, timeout=CALL_TIMEOUT_SECONDS)


async def generate_workout_recommendation(
    goals: dict,
    training_types: list[str],
    recent_workouts: list[str] | None = None,
) -> dict:
    """Today's workout suggestion."""
    if not has_credentials():
        return fallback.demo_workout_recommendation(training_types)
    try:
        text = await _bounded(_generate_json(
            RECOMMENDATION_SYSTEM_PROMPT,
            build_recommendation_prompt(goals, training_types, recent_workouts or []),
        ))
        return parse_workout_recommendation(text)
    except Exception as e:
        logger.warning("Workout recommendation failed, using demo workout: %r", e)
        return fallback.demo_workout_recommendation(training_types)


async def generate_recipe(name: str, goals: dict) -> dict:
    """A detailed recipe for ``name``, tailored to the user's goal."""
    if not has_credentials():
        return fallback.demo_recipe(name)
    try:
        text = await _bounded(_generate_json(CHEF_SYSTEM_PROMPT, build_recipe_prompt(name, goals)))
        return parse_recipe(text, fallback_name=name)
    except Exception as e:
        logger.warning("Recipe generation failed, using demo recipe: %r", e)
        return fallback.demo_recipe(name)


async def generate_shopping_list(meals: list[dict]) -> list[dict]:
    """Shopping list for ``[{"name", "servings"}]`` meals."""
    if not has_credentials():
        return fallback.basic_shopping_list()
    try:
        text = await _bounded(_generate_json(SHOPPING_SYSTEM_PROMPT, build_meals_shopping_prompt(meals)))
        return parse_shopping_list(text)
    except Exception as e:
        logger.warning("Shopping list generation failed, using basic list: %r", e)
        return fallback.basic_shopping_list()


async def chat_with_ai(message: str, goals: dict, training_types: list[str]) -> str:
    """Free-form coach reply; the canned keyword reply on any failure."""
    if not has_credentials():
        return fallback.demo_chat_reply(message)
    try:
        client = get_client()
        response = await _bounded(client.aio.models.generate_content(
            model=MODEL,
            contents=user_content(message),
            config=text_config(build_chat_system_prompt(goals, training_types)),
        ))
        text = (response.text or "").strip()
        if not text:
            raise ValueError("Empty chat response")
        return text
    except Exception as e:
        logger.warning("Chat call failed, using canned reply: %r", e)
        return fallback.demo_chat_reply(message)
