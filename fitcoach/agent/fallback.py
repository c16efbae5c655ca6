"""Deterministic demo plans used when the LLM is unavailable.

Everything here is network-free and always returns fully populated data:
7 workout days, 7 diet days, positive macros and at least one tip. The
generator service switches to these builders when no API key is set, when
a call fails, or when it times out.
"""

from datetime import datetime, timezone

from fitcoach.agent.prompts import goal_text
from fitcoach.tools.metrics import calculate_daily_calories, calculate_macros
from fitcoach.tools.reconcile import DAY_NAMES
from fitcoach.tools.shopping import categorize_ingredient, shopping_list_from_diet, sort_by_category

# Sports trained in a box rather than a gym get the class-based template
CLASS_BASED_SPORTS = ("crossfit", "hyrox", "hybrid")

# Gym split by weekday index; None is a rest day
GYM_SCHEDULE = {
    0: None,
    1: ("Pecho + Abdomen", "chest"),
    2: ("Espalda + Abdomen", "back"),
    3: ("Pierna + Abdomen", "legs"),
    4: ("Pecho + Abdomen", "chest2"),
    5: ("Espalda + Abdomen", "back2"),
    6: None,
}

BOX_SCHEDULE = {
    0: None,
    1: ("Fuerza + Metcon", "strength"),
    2: ("Gimnásticos + Engine", "gymnastics"),
    3: None,
    4: ("Halterofilia + Metcon", "weightlifting"),
    5: ("Fuerza + Metcon", "strength2"),
    6: ("WOD largo", "long"),
}

INTENSITY = {
    "beginner": {"sets": 3, "reps": "12-15", "rest": 60},
    "intermediate": {"sets": 4, "reps": "10-12", "rest": 75},
    "advanced": {"sets": 4, "reps": "8-10", "rest": 90},
}

LEVEL_NAMES = {"beginner": "Principiante", "intermediate": "Intermedio", "advanced": "Avanzado"}
WEEKLY_BURN = {"beginner": 2500, "intermediate": 3000, "advanced": 3500}
DEFAULT_DURATION = {"beginner": 60, "intermediate": 75, "advanced": 90}

INJURY_KEYWORDS = {
    "back": ("espalda", "lumbar", "back"),
    "shoulder": ("hombro", "shoulder"),
    "knee": ("rodilla", "knee"),
}


def injury_flags(injuries: list[str] | None) -> dict[str, bool]:
    """Which body areas the injury list mentions (Spanish or English)."""
    text = " ".join(injuries or []).lower()
    return {area: any(word in text for word in words) for area, words in INJURY_KEYWORDS.items()}


def _exercise(name, sets, reps, rest, notes="", weight=None, alternatives=None) -> dict:
    exercise = {"name": name, "sets": sets, "reps": reps, "rest_seconds": rest}
    if weight:
        exercise["weight_recommendation"] = weight
    if notes:
        exercise["notes"] = notes
    if alternatives:
        exercise["alternatives"] = list(alternatives)
    return exercise


# ── Gym template ────────────────────────────────────────────────────


def gym_exercises(focus: str, experience: str, injuries: list[str] | None = None) -> list[dict]:
    """Exercises for one gym day, finishing with the daily core block."""
    hurt = injury_flags(injuries)
    level = INTENSITY.get(experience, INTENSITY["intermediate"])
    sets, reps, rest = level["sets"], level["reps"], level["rest"]
    first = focus in ("chest", "back")
    exercises = []

    if focus in ("chest", "chest2"):
        exercises += [
            _exercise(
                "Press Banca", sets, reps, rest,
                "Reduce el rango de movimiento si hay molestias" if hurt["shoulder"] else "Controla la bajada 2-3 segundos",
                weight="80-85% RM" if experience == "advanced" else "70-75% RM",
                alternatives=["Press Banca Mancuernas", "Press Máquina"],
            ),
            _exercise(
                "Press Inclinado Mancuernas" if first else "Press Inclinado Barra", sets, reps, rest,
                "Banco a 30-45 grados", weight="70-75% RM",
            ),
            _exercise(
                "Aperturas con Mancuernas" if first else "Cruces en Polea", 3, "12-15", 60,
                "Enfoca en la contracción del pectoral", alternatives=["Pec Deck"],
            ),
            _exercise(
                "Fondos en Paralelas" if first and not hurt["shoulder"] else "Press Declinado", 3,
                "8-10" if experience == "beginner" else "10-12", 75,
                alternatives=["Fondos Asistidos", "Press Declinado Máquina"],
            ),
        ]

    if focus in ("back", "back2"):
        exercises += [
            _exercise(
                "Jalón al Pecho" if hurt["back"] else "Dominadas", sets,
                "10-12" if hurt["back"] else ("6-8" if experience == "beginner" else "8-12"), rest,
                "Mantén la espalda recta" if hurt["back"] else "Agarre prono, ancho de hombros",
                alternatives=["Dominadas Asistidas", "Jalón al Pecho"],
            ),
            _exercise(
                "Remo con Barra" if first else "Remo con Mancuerna", sets, reps, rest,
                "Usa peso moderado y técnica estricta" if hurt["back"] else "Mantén la espalda neutra",
                weight="70-75% RM", alternatives=["Remo en Máquina"],
            ),
            _exercise("Remo en Polea Baja", 3, "10-12", 60, "Tira hacia el ombligo, no hacia el pecho"),
            _exercise(
                "Face Pulls" if first else "Encogimientos con Barra", 3, "15-20", 45,
                alternatives=["Encogimientos con Mancuernas"],
            ),
            _exercise("Curl de Bíceps con Barra", 3, "10-12", 60, "Sin balanceo, codos pegados al cuerpo"),
        ]

    if focus == "legs":
        exercises += [
            _exercise(
                "Prensa de Piernas" if hurt["knee"] else "Sentadilla con Barra", sets,
                "12-15" if hurt["knee"] else reps, 120,
                "Rango de movimiento cómodo" if hurt["knee"] else "Baja hasta paralelo mínimo",
                weight="60-65% RM" if hurt["knee"] else "75-80% RM",
                alternatives=["Sentadilla Goblet", "Hack Squat"],
            ),
            _exercise(
                "Puente de Glúteos" if hurt["knee"] or hurt["back"] else "Peso Muerto Rumano", sets,
                "15-20" if hurt["knee"] or hurt["back"] else "10-12", 90,
                alternatives=["Hip Thrust"],
            ),
            _exercise(
                "Extensiones de Cuádriceps", 3, "12-15", 60,
                "Peso ligero, movimiento controlado" if hurt["knee"] else "Contrae arriba 1 segundo",
            ),
            _exercise("Curl Femoral Tumbado", 3, "12-15", 60, alternatives=["Curl Femoral Sentado"]),
            _exercise("Elevaciones de Gemelos", 4, "15-20", 45, "Pausa arriba"),
        ]

    exercises += [
        _exercise("Crunch en Polea", 3, "15-20", 30, "No tires del cuello"),
        _exercise("Plancha", 3, "30-45 seg", 30, "Core apretado, espalda recta"),
        _exercise(
            "Elevación de Piernas Colgado", 3, "12-15", 30,
            "Flexiona las rodillas si es necesario" if hurt["back"] else "Sin balanceo",
            alternatives=["Crunch Inverso"],
        ),
    ]
    return exercises


GYM_NOTES = {
    "chest": "Día de pecho: conexión mente-músculo.",
    "chest2": "Segundo día de pecho: varía ángulos y agarres.",
    "back": "Día de espalda: tira con los codos, no con las manos.",
    "back2": "Segundo día de espalda: si hay fatiga, menos peso y más repeticiones.",
    "legs": "Día de pierna: el más exigente de la semana, hidrátate bien.",
}


# ── Box template (CrossFit / Hyrox / Hybrid) ────────────────────────


def box_exercises(focus: str, experience: str, injuries: list[str] | None = None, sport: str = "crossfit") -> list[dict]:
    """Strength piece plus conditioning for one box day."""
    hurt = injury_flags(injuries)
    level = INTENSITY.get(experience, INTENSITY["intermediate"])
    rx = "RX" if experience == "advanced" else "escalado"

    if focus in ("strength", "strength2"):
        squat = "Front Squat" if focus == "strength2" else "Back Squat"
        return [
            _exercise(
                "Box Squat" if hurt["knee"] else squat, 5, "5", 120,
                weight="60% RM" if hurt["knee"] else "75% RM",
                alternatives=["Goblet Squat"],
            ),
            _exercise(
                "Kettlebell Deadlift" if hurt["back"] else "Deadlift", level["sets"], "5", 120,
                "Carga moderada" if hurt["back"] else "Espalda neutra en todo el recorrido",
            ),
            _exercise(
                f"AMRAP 12 min ({rx})", 1, "máximas rondas", 0,
                "12 wall balls, 9 toes-to-bar, 6 burpees" if not hurt["shoulder"]
                else "12 air squats, 9 sit-ups, 6 burpees sin salto",
            ),
        ]
    if focus == "gymnastics":
        return [
            _exercise(
                "Ring Rows" if hurt["shoulder"] else "Pull-ups estrictos", level["sets"], level["reps"], level["rest"],
                alternatives=["Jumping Pull-ups"],
            ),
            _exercise("Handstand Hold" if not hurt["shoulder"] else "Hollow Hold", 4, "30 seg", 60),
            _exercise(
                "Engine: 5 rondas", 1, "5x", 0,
                "500 m remo + 15 cal bici, descanso 1 min entre rondas",
            ),
        ]
    if focus == "weightlifting":
        return [
            _exercise(
                "Landmine Press" if hurt["shoulder"] else "Power Clean", 6, "2", 90,
                weight="65-75% RM", alternatives=["Hang Power Clean"],
            ),
            _exercise(
                f"EMOM 14 min ({rx})", 1, "14 min", 0,
                "Par: 10 cal remo. Impar: "
                + ("12 step-ups" if hurt["knee"] else "12 box jumps"),
            ),
        ]
    # Long Saturday session, sport specific
    if sport == "hyrox":
        return [
            _exercise(
                "Simulación Hyrox", 1, "4 rondas", 0,
                "1 km carrera + estación: ski, sled push, burpee broad jumps, "
                + ("remo" if hurt["knee"] else "sandbag lunges"),
            ),
        ]
    return [
        _exercise(
            f"Chipper por parejas ({rx})", 1, "35 min", 0,
            "100 cal remo, 80 wall balls, 60 KB swings, "
            + ("40 step-ups" if hurt["knee"] else "40 box jumps"),
        ),
    ]


# ── Workout week ────────────────────────────────────────────────────


def _rest_day(index: int, workout_type: str) -> dict:
    return {
        "day": index,
        "day_name": DAY_NAMES[index],
        "workout_type": workout_type,
        "title": "Descanso",
        "duration_minutes": 0,
        "is_rest_day": True,
        "exercises": [],
        "notes": "Descanso completo. Estiramientos o paseo suave."
        if index == 0 else "Descanso activo: cardio suave, movilidad o yoga.",
    }


def fallback_workout_week(goals: dict, training_types: list[str], profile_data: dict | None = None) -> dict:
    """Weekly workout plan from the gym split or the box template."""
    profile = profile_data or {}
    experience = profile.get("fitness_experience") or "intermediate"
    injuries = profile.get("injuries")
    box_sport = next((t for t in training_types or [] if t in CLASS_BASED_SPORTS), None)

    if box_sport:
        schedule = BOX_SCHEDULE
        sport_duration = ((profile.get("sports_frequency") or {}).get(box_sport) or {}).get("duration")
        duration = sport_duration or profile.get("workout_duration_preference") or 60
        name = f"Plan {box_sport.capitalize()} {LEVEL_NAMES.get(experience, 'Intermedio')}"
        description = f"5 sesiones de {box_sport} por semana para {goal_text(goals.get('primary')).lower()}"
    else:
        schedule = GYM_SCHEDULE
        duration = profile.get("workout_duration_preference") or DEFAULT_DURATION.get(experience, 75)
        name = f"Plan Gimnasio {LEVEL_NAMES.get(experience, 'Intermedio')}"
        description = (
            f"Rutina de 5 días para {goal_text(goals.get('primary')).lower()}. "
            "Pecho 2x, Espalda 2x, Pierna 1x + abdomen diario"
        )
    if injuries:
        description += f". Adaptado a: {', '.join(injuries).lower()}"

    workout_type = box_sport or "gym"
    days = []
    for index in range(7):
        slot = schedule[index]
        if slot is None:
            days.append(_rest_day(index, workout_type))
            continue
        title, focus = slot
        if box_sport:
            exercises = box_exercises(focus, experience, injuries, box_sport)
            notes = "Calentamiento de 10 min antes de la fuerza."
        else:
            exercises = gym_exercises(focus, experience, injuries)
            notes = GYM_NOTES[focus]
        days.append({
            "day": index,
            "day_name": DAY_NAMES[index],
            "workout_type": workout_type,
            "title": title,
            "duration_minutes": duration,
            "is_rest_day": False,
            "exercises": exercises,
            "notes": notes,
        })

    return {
        "name": name,
        "description": description,
        "days": days,
        "rest_days": [d["day"] for d in days if d["is_rest_day"]],
        "estimated_calories_burned_weekly": WEEKLY_BURN.get(experience, 3000),
    }


# ── Diet week ───────────────────────────────────────────────────────

# (meal_type, time, share of daily calories); sliced by meals_per_day
MEAL_SLOTS = (
    ("breakfast", "08:00", 0.25),
    ("lunch", "13:30", 0.35),
    ("snack", "17:00", 0.15),
    ("dinner", "21:00", 0.25),
    ("snack", "11:00", 0.10),
    ("snack", "23:00", 0.05),
)


def _food(name, quantity, calories, protein, carbs, fat) -> dict:
    return {"name": name, "quantity": quantity, "calories": calories, "protein": protein, "carbs": carbs, "fat": fat}


def _meal_bank(vegetarian: bool, gluten_free: bool, dairy_free: bool) -> dict[str, list[dict]]:
    """Menu options per meal type with diet and allergy substitutions."""
    bread = "Pan sin gluten" if gluten_free else "Pan integral"
    oats = "Avena sin gluten" if gluten_free else "Avena"
    milk = "Bebida de almendras" if dairy_free else "Leche"
    yogurt = "Yogur de coco" if dairy_free else "Yogur griego"
    eggs = ("Tofu revuelto", "150g") if vegetarian else ("Huevos", "3 unidades")

    return {
        "breakfast": [
            {
                "name": "Bowl de Avena con Frutas",
                "foods": [
                    _food(oats, "80g", 300, 10, 54, 6),
                    _food(milk, "250ml", 120, 8, 12, 5),
                    _food("Plátano", "1 unidad", 105, 1, 27, 0),
                    _food("Arándanos", "50g", 30, 0, 7, 0),
                ],
                "recipe": {
                    "ingredients": ["80g avena", "250ml leche", "1 plátano", "50g arándanos", "Canela"],
                    "instructions": ["Cocinar la avena con la leche 5 min", "Añadir la fruta"],
                    "prep_time": 10,
                },
            },
            {
                "name": "Tostadas con Aguacate y Huevo",
                "foods": [
                    _food(bread, "2 rebanadas", 180, 8, 30, 3),
                    _food("Aguacate", "100g", 160, 2, 9, 15),
                    _food(eggs[0], eggs[1], 220, 18, 2, 15),
                    _food("Tomate cherry", "80g", 15, 1, 3, 0),
                ],
                "recipe": {
                    "ingredients": ["2 rebanadas de pan", "1 aguacate", eggs[0], "Tomates"],
                    "instructions": ["Tostar el pan", "Machacar el aguacate", "Revolver y montar"],
                    "prep_time": 15,
                },
            },
            {
                "name": "Yogur con Granola y Kiwi",
                "foods": [
                    _food(yogurt, "250g", 180, 22, 10, 3),
                    _food("Granola sin gluten" if gluten_free else "Granola", "50g", 220, 5, 35, 8),
                    _food("Kiwi", "1 unidad", 40, 1, 9, 0),
                    _food("Miel", "15g", 45, 0, 12, 0),
                ],
                "recipe": {
                    "ingredients": ["250g yogur", "50g granola", "1 kiwi", "Miel"],
                    "instructions": ["Servir el yogur", "Cubrir con granola, kiwi y miel"],
                    "prep_time": 5,
                },
            },
        ],
        "lunch": [
            {
                "name": "Buddha Bowl de Garbanzos" if vegetarian else "Pollo a la Plancha con Arroz",
                "foods": [
                    _food("Garbanzos", "200g", 280, 15, 45, 5) if vegetarian
                    else _food("Pechuga de pollo", "200g", 220, 46, 0, 3),
                    _food("Arroz integral", "100g", 350, 7, 73, 3),
                    _food("Brócoli", "200g", 68, 6, 14, 0),
                    _food("Aceite de oliva", "15ml", 135, 0, 0, 15),
                ],
                "recipe": {
                    "ingredients": ["Proteína principal", "100g arroz", "200g brócoli", "Aceite", "Especias"],
                    "instructions": ["Cocer el arroz 20 min", "Hacer la proteína a la plancha", "Hervir el brócoli al dente"],
                    "prep_time": 30,
                },
            },
            {
                "name": "Curry de Lentejas" if vegetarian else "Salmón con Boniato",
                "foods": [
                    _food("Lentejas", "200g", 230, 18, 40, 1) if vegetarian
                    else _food("Salmón", "180g", 370, 36, 0, 24),
                    _food("Boniato", "200g", 172, 3, 40, 0),
                    _food("Espinacas", "100g", 25, 3, 4, 0),
                    _food("Aceite de oliva", "10ml", 90, 0, 0, 10),
                ],
                "recipe": {
                    "ingredients": ["Proteína principal", "200g boniato", "Espinacas", "Aceite"],
                    "instructions": ["Asar el boniato 25 min", "Cocinar la proteína", "Saltear las espinacas"],
                    "prep_time": 35,
                },
            },
            {
                "name": "Ensalada de Quinoa y Tofu" if vegetarian else "Ternera con Patata y Ensalada",
                "foods": [
                    _food("Tofu", "180g", 160, 18, 4, 9) if vegetarian
                    else _food("Ternera magra", "180g", 250, 45, 0, 7),
                    _food("Quinoa", "80g", 290, 11, 50, 5) if vegetarian else _food("Patata", "250g", 215, 5, 48, 0),
                    _food("Lechuga", "100g", 15, 1, 3, 0),
                    _food("Tomate", "150g", 27, 1, 6, 0),
                    _food("Aceite de oliva", "15ml", 135, 0, 0, 15),
                ],
                "recipe": {
                    "ingredients": ["Proteína principal", "Base de hidratos", "Lechuga", "Tomate", "Aceite"],
                    "instructions": ["Cocinar la base", "Hacer la proteína", "Montar con la ensalada"],
                    "prep_time": 25,
                },
            },
        ],
        "dinner": [
            {
                "name": "Tortilla de Verduras" if not vegetarian else "Revuelto de Tofu y Verduras",
                "foods": [
                    _food(eggs[0], eggs[1], 220, 18, 2, 15),
                    _food("Calabacín", "150g", 25, 2, 5, 0),
                    _food("Champiñones", "100g", 22, 3, 3, 0),
                    _food(bread, "1 rebanada", 90, 4, 15, 1),
                ],
                "recipe": {
                    "ingredients": [eggs[0], "Calabacín", "Champiñones"],
                    "instructions": ["Saltear las verduras", "Añadir la proteína y cuajar"],
                    "prep_time": 15,
                },
            },
            {
                "name": "Crema de Calabaza con Hummus" if vegetarian else "Merluza al Horno con Verduras",
                "foods": [
                    _food("Hummus", "100g", 180, 8, 15, 10) if vegetarian
                    else _food("Merluza", "200g", 170, 36, 0, 2),
                    _food("Calabaza", "250g", 65, 2, 15, 0),
                    _food("Zanahoria", "100g", 41, 1, 10, 0),
                    _food("Aceite de oliva", "10ml", 90, 0, 0, 10),
                ],
                "recipe": {
                    "ingredients": ["Proteína principal", "Calabaza", "Zanahoria", "Aceite"],
                    "instructions": ["Hornear 20 min a 180 °C", "Servir caliente"],
                    "prep_time": 25,
                },
            },
            {
                "name": "Wok de Tofu" if vegetarian else "Wok de Pavo",
                "foods": [
                    _food("Tofu", "150g", 135, 15, 4, 7) if vegetarian
                    else _food("Pechuga de pavo", "180g", 190, 40, 0, 2),
                    _food("Pimiento rojo", "100g", 31, 1, 6, 0),
                    _food("Cebolla", "80g", 32, 1, 7, 0),
                    _food("Arroz basmati", "60g", 210, 4, 46, 0),
                ],
                "recipe": {
                    "ingredients": ["Proteína principal", "Pimiento", "Cebolla", "Arroz"],
                    "instructions": ["Cocer el arroz", "Saltear todo en el wok a fuego fuerte"],
                    "prep_time": 20,
                },
            },
        ],
        "snack": [
            {
                "name": "Fruta y Frutos Secos",
                "foods": [_food("Manzana", "1 unidad", 80, 0, 21, 0), _food("Almendras", "25g", 150, 5, 3, 13)],
            },
            {
                "name": "Yogur con Nueces",
                "foods": [_food(yogurt, "200g", 130, 20, 8, 2), _food("Nueces", "30g", 200, 5, 4, 19)],
            },
            {
                "name": "Hummus con Crudités",
                "foods": [_food("Hummus", "100g", 180, 8, 15, 10), _food("Zanahoria", "150g", 62, 1, 14, 0)],
            },
            {
                "name": "Tortitas de Arroz con Crema de Cacahuete",
                "foods": [
                    _food("Tortitas de arroz", "4 unidades", 100, 2, 22, 1),
                    _food("Crema de cacahuete", "30g", 180, 7, 6, 15),
                ],
            },
        ],
    }


def demo_meals(daily_calories: int, profile_data: dict | None = None, day_index: int = 0) -> list[dict]:
    """Meals for one day, picked from the menu bank by ``day_index``.

    Calorie shares are rescaled over the slots in use so the day adds up
    to ``daily_calories``. Each meal's macros follow the 30/40/30 split.
    """
    profile = profile_data or {}
    meals_per_day = max(1, min(int(profile.get("meals_per_day") or 4), len(MEAL_SLOTS)))
    allergies = " ".join(profile.get("allergies") or []).lower()
    diet_type = profile.get("diet_type")

    bank = _meal_bank(
        vegetarian=diet_type in ("vegetarian", "vegan"),
        gluten_free="gluten" in allergies,
        dairy_free=diet_type == "vegan" or any(w in allergies for w in ("lactosa", "lácteo", "lacteo", "lactose", "dairy")),
    )

    slots = MEAL_SLOTS[:meals_per_day]
    total_share = sum(share for _, _, share in slots)
    meals = []
    snack_count = 0
    for meal_type, time, share in slots:
        options = bank[meal_type]
        offset = snack_count if meal_type == "snack" else 0
        if meal_type == "snack":
            snack_count += 1
        choice = options[(day_index + offset) % len(options)]
        calories = round(daily_calories * share / total_share)
        macros = calculate_macros(calories)
        meal = {
            "meal_type": meal_type,
            "name": choice["name"],
            "time_suggestion": time,
            "foods": [dict(f) for f in choice["foods"]],
            "calories": calories,
            "protein": macros["protein_grams"],
            "carbs": macros["carbs_grams"],
            "fat": macros["fat_grams"],
        }
        if "recipe" in choice:
            meal["recipe"] = {k: (list(v) if isinstance(v, list) else v) for k, v in choice["recipe"].items()}
        meals.append(meal)
    return meals


def fallback_diet_week(goals: dict, profile_data: dict | None = None, daily_calories: int | None = None) -> dict:
    calories = daily_calories or calculate_daily_calories(goals, profile_data)
    return {
        "name": "Plan Nutricional Equilibrado",
        "description": f"{calories} kcal diarias para {goal_text(goals.get('primary')).lower()}",
        "daily_calories": calories,
        "macros": calculate_macros(calories),
        "days": [
            {
                "day": index,
                "day_name": DAY_NAMES[index],
                "meals": demo_meals(calories, profile_data, index),
                "total_calories": calories,
            }
            for index in range(7)
        ],
    }


def personalized_tips(goals: dict, profile_data: dict | None = None) -> list[str]:
    tips = []
    primary = goals.get("primary")
    if primary == "lose_weight":
        tips.append("Mantén un déficit calórico moderado de 300-500 kcal para perder grasa sin perder músculo.")
        tips.append("Prioriza la proteína en cada comida para preservar masa muscular.")
    elif primary == "gain_muscle":
        tips.append("Come en superávit calórico moderado de 200-300 kcal.")
        tips.append("Reparte la proteína cada 3-4 horas.")
    if (profile_data or {}).get("injuries"):
        tips.append("Calienta bien antes de entrenar y vigila tus zonas lesionadas.")
    tips.append("Duerme al menos 7-8 horas para recuperarte.")
    tips.append("Bebe 2-3 litros de agua al día.")
    tips.append("La consistencia es clave: mejor 4 días siempre que 6 una semana y 2 la siguiente.")
    return tips


def generate_fallback_plan(
    goals: dict,
    training_types: list[str],
    profile_data: dict | None = None,
    daily_calories: int | None = None,
) -> dict:
    """Complete GeneratedPlan built without the LLM.

    Args:
        goals: UserGoals dict
        training_types: Sports the user trains
        profile_data: Optional UserProfileData dict
        daily_calories: Calorie target; computed from the goals when omitted

    Returns:
        GeneratedPlan dict with ``source`` set to "fallback"
    """
    goals = goals or {}
    diet_plan = fallback_diet_week(goals, profile_data, daily_calories)
    return {
        "workout_plan": fallback_workout_week(goals, training_types, profile_data),
        "diet_plan": diet_plan,
        "shopping_list": shopping_list_from_diet(diet_plan),
        "recommendations": personalized_tips(goals, profile_data),
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "source": "fallback",
    }


# ── Single-call fallbacks ───────────────────────────────────────────


def demo_workout_recommendation(training_types: list[str]) -> dict:
    if any(t in CLASS_BASED_SPORTS for t in training_types or []):
        return {
            "type": "workout",
            "title": "WOD: Fuerza y Cardio",
            "content": (
                "Calentamiento (10 min): 400 m carrera suave, 20 air squats, 10 push-ups.\n"
                "Fuerza (15 min): Back Squat 5x5 al 75% RM, 2 min de descanso.\n"
                "AMRAP 12 min: 12 wall balls, 9 toes-to-bar, 6 burpees over the bar.\n"
                "Enfriamiento (5 min): estiramientos de cadera y hombros."
            ),
            "reasoning": "Combina fuerza con un metcon que mejora la capacidad cardiovascular.",
        }
    return {
        "type": "workout",
        "title": "Día de Pecho y Tríceps",
        "content": (
            "Calentamiento (10 min): cardio ligero y rotaciones de hombro.\n"
            "1. Press de banca 4x8-10 (70-80% RM, 90 s)\n"
            "2. Press inclinado con mancuernas 3x10-12\n"
            "3. Aperturas en polea 3x12-15\n"
            "4. Fondos en paralelas 3x10-12\n"
            "5. Extensiones en polea 3x12-15"
        ),
        "reasoning": "Hipertrofia de pecho y tríceps combinando básicos y aislamiento.",
    }


def demo_recipe(name: str) -> dict:
    return {
        "name": name or "Receta saludable",
        "description": "Una receta nutritiva y sencilla",
        "ingredients": [
            {"name": "Pechuga de pollo", "quantity": 200, "unit": "g"},
            {"name": "Arroz integral", "quantity": 100, "unit": "g"},
            {"name": "Aceite de oliva", "quantity": 10, "unit": "ml"},
        ],
        "instructions": [
            "Preparar todos los ingredientes",
            "Cocinar el arroz 20 minutos",
            "Hacer el pollo a la plancha a fuego medio",
            "Servir caliente",
        ],
        "prep_time_minutes": 15,
        "cook_time_minutes": 20,
        "servings": 2,
        "calories_per_serving": 350,
        "protein_per_serving": 25,
        "carbs_per_serving": 30,
        "fat_per_serving": 12,
        "tags": ["saludable", "fácil", "rápido"],
    }


BASIC_SHOPPING_LIST = (
    ("Pechuga de pollo", 1500, "g"),
    ("Salmón fresco", 600, "g"),
    ("Huevos", 24, "unidades"),
    ("Leche semidesnatada", 3, "litros"),
    ("Yogur griego natural", 8, "unidades"),
    ("Arroz integral", 1, "kg"),
    ("Avena", 500, "g"),
    ("Pan integral", 2, "barras"),
    ("Brócoli", 1, "kg"),
    ("Espinacas frescas", 500, "g"),
    ("Tomates", 10, "unidades"),
    ("Plátanos", 14, "unidades"),
    ("Aguacates", 5, "unidades"),
    ("Boniato", 1, "kg"),
    ("Almendras", 300, "g"),
    ("Aceite de oliva virgen extra", 1, "litro"),
)


def basic_shopping_list() -> list[dict]:
    return sort_by_category([
        {"ingredient": name, "quantity": qty, "unit": unit, "category": categorize_ingredient(name), "checked": False}
        for name, qty, unit in BASIC_SHOPPING_LIST
    ])


def demo_chat_reply(message: str) -> str:
    """Canned coach reply chosen by keyword."""
    lower = (message or "").lower()
    if "entreno" in lower or "ejercicio" in lower:
        return (
            "¡Genial que quieras entrenar! Alterna días de fuerza con días de cardio, "
            "calienta siempre antes de empezar y estira al terminar. "
            "¿Qué tipo de entrenamiento te apetece hoy?"
        )
    if "dieta" in lower or "comer" in lower or "comida" in lower:
        return (
            "La nutrición es clave para tus objetivos: proteína en cada comida, muchas verduras "
            "y carbohidratos complejos. ¿Quieres que te genere un plan de comidas?"
        )
    if "peso" in lower or "adelgazar" in lower or "músculo" in lower:
        return (
            "Para cambiar tu composición corporal necesitas constancia con el entrenamiento y la "
            "alimentación. Para perder grasa, déficit moderado; para ganar músculo, superávit y "
            "suficiente proteína. ¿Cuál es tu objetivo principal?"
        )
    return (
        "¡Hola! Soy FitBot, tu asistente de fitness. Puedo ayudarte con entrenamientos, "
        "nutrición, recetas y más. ¿En qué puedo ayudarte hoy?"
    )
