"""CLI interface for FitCoach using Rich."""

import argparse
import asyncio
import logging
import os

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from fitcoach.agent.llm import has_credentials
from fitcoach.agent.router import ChatInterpreter
from fitcoach.memory.local_storage import LocalStorage
from fitcoach.memory.plan_store import PlanService, PlanStore, set_plan_store
from fitcoach.memory.profile import (
    ACTIVITY_LEVELS,
    DIET_TYPES,
    EXPERIENCE_LEVELS,
    PRIMARY_GOALS,
    create_goals,
    create_profile_data,
    load_profile,
    parse_csv_list,
    save_profile,
)
from fitcoach.memory.user_goals import GOAL_CATEGORIES, GoalStore, create_goal, progress_percent
from fitcoach.memory.wods import WodStore
from fitcoach.tools.backend import ProfileSync
from fitcoach.tools.reconcile import DAY_NAMES, WOD_FIELDS, WOD_WEEK, day_index

console = Console()

CATEGORY_LABELS = {
    "produce": "Frutas y verduras",
    "meat": "Carnes y pescados",
    "dairy": "Lácteos y huevos",
    "grains": "Cereales",
    "other": "Otros",
}


def onboard_user(storage: LocalStorage) -> dict:
    """Interactive onboarding. Saves and returns the normalized profile."""
    console.print(Panel("[bold]Bienvenido a FitCoach[/bold] - tu entrenador personal", style="blue"))

    primary = Prompt.ask("Objetivo principal", choices=list(PRIMARY_GOALS), default="maintain")
    activity = Prompt.ask("Nivel de actividad", choices=list(ACTIVITY_LEVELS), default="moderate")
    weight = FloatPrompt.ask("Peso actual (kg)", default=70.0)
    target = FloatPrompt.ask("Peso objetivo (kg)", default=weight)
    height = FloatPrompt.ask("Altura (cm)", default=170.0)
    age = IntPrompt.ask("Edad", default=30)

    sports = parse_csv_list(Prompt.ask("¿Qué deportes practicas? (separados por comas)", default="gym"))
    sports = [s.lower() for s in sports] or ["gym"]
    sports_frequency = {}
    for sport in sports:
        days = IntPrompt.ask(f"Días por semana de {sport}", default=3)
        duration = IntPrompt.ask(f"Duración por sesión de {sport} (min)", default=60)
        sports_frequency[sport] = {"days": days, "duration": duration}

    profile_data = create_profile_data(
        fitness_experience=Prompt.ask("Experiencia", choices=list(EXPERIENCE_LEVELS), default="intermediate"),
        diet_type=Prompt.ask("Tipo de dieta", choices=list(DIET_TYPES), default="omnivore"),
        meals_per_day=IntPrompt.ask("Comidas al día", default=4),
        allergies=parse_csv_list(Prompt.ask("Alergias", default="")),
        injuries=parse_csv_list(Prompt.ask("Lesiones o limitaciones", default="Ninguna")),
        sports_frequency=sports_frequency,
    )
    goals = create_goals(
        primary=primary,
        activity_level=activity,
        current_weight=weight,
        target_weight=target,
        height=height,
        age=age,
    )
    save_profile(storage, goals, sports, profile_data)
    console.print("[green]Perfil guardado.[/green]")
    return load_profile(storage)


def display_plan(plan: dict) -> None:
    """Display the workout week and nutrition summary."""
    workout = plan.get("workout_plan") or {}
    table = Table(title=workout.get("name", "Plan semanal"), show_lines=True)
    table.add_column("#", justify="right", width=2)
    table.add_column("Día", style="bold", width=10)
    table.add_column("Sesión", style="cyan", width=22)
    table.add_column("Duración", justify="right", width=9)
    table.add_column("Ejercicios", width=48)

    for day in workout.get("days") or []:
        if day.get("is_rest_day"):
            exercises = f"[dim]{escape(day.get('notes', ''))}[/dim]"
        else:
            exercises = "\n".join(
                f"{escape(e['name'])} {e.get('sets', '')}x{escape(str(e.get('reps', '')))}"
                for e in day.get("exercises") or []
            )
        table.add_row(
            str(day.get("day", "")),
            day.get("day_name", ""),
            escape(day.get("title", "")),
            f"{day.get('duration_minutes', 0)} min",
            exercises,
        )
    console.print(table)

    diet = plan.get("diet_plan") or {}
    macros = diet.get("macros") or {}
    source = " [yellow](demo)[/yellow]" if plan.get("source") == "fallback" else ""
    console.print(Panel(
        f"{diet.get('daily_calories', '?')} kcal/día | "
        f"Proteína {macros.get('protein_grams', '?')} g | "
        f"Carbohidratos {macros.get('carbs_grams', '?')} g | "
        f"Grasa {macros.get('fat_grams', '?')} g",
        title=f"Nutrición{source}",
        style="green",
    ))
    tips = plan.get("recommendations") or []
    if tips:
        console.print(Panel("\n".join(f"- {escape(t)}" for t in tips), title="Consejos", style="blue"))


def display_shopping(items: list[dict]) -> None:
    table = Table(title="Lista de la compra")
    table.add_column("#", justify="right")
    table.add_column("", width=3)
    table.add_column("Ingrediente")
    table.add_column("Cantidad", justify="right")
    table.add_column("Categoría", style="dim")
    for i, item in enumerate(items):
        table.add_row(
            str(i),
            "[green]✓[/green]" if item.get("checked") else "",
            escape(item.get("ingredient", "")),
            f"{item.get('quantity', '')} {item.get('unit', '')}",
            CATEGORY_LABELS.get(item.get("category"), item.get("category", "")),
        )
    console.print(table)


def display_goals(goals: list[dict]) -> None:
    if not goals:
        console.print("[dim]No tienes objetivos todavía. Usa --goal-add.[/dim]")
        return
    table = Table(title="Mis objetivos")
    table.add_column("ID", style="dim", width=8)
    table.add_column("Objetivo")
    table.add_column("Progreso", justify="right")
    table.add_column("Hitos")
    for goal in goals:
        done = sum(1 for m in goal.get("milestones") or [] if m.get("completed"))
        status = "[green]completado[/green]" if goal.get("completed") else f"{progress_percent(goal)}%"
        table.add_row(
            goal["id"][:8],
            escape(goal["title"]),
            f"{goal['current_value']}/{goal['target_value']} {goal.get('unit', '')} ({status})",
            f"{done}/{len(goal.get('milestones') or [])}",
        )
    console.print(table)


def add_goal_interactive(goal_store: GoalStore) -> dict:
    title = Prompt.ask("Título del objetivo")
    category = Prompt.ask("Categoría", choices=list(GOAL_CATEGORIES), default="strength")
    unit = Prompt.ask("Unidad", default="kg")
    current = FloatPrompt.ask("Valor actual", default=0.0)
    target = FloatPrompt.ask("Valor objetivo")
    deadline = Prompt.ask("Fecha límite (YYYY-MM-DD, opcional)", default="")
    goal = goal_store.add(create_goal(title, target, current, category, unit, deadline=deadline or None))
    console.print(Panel(
        "\n".join(f"{i}. {escape(step)}" for i, step in enumerate(goal["ai_plan"], 1)),
        title=f"Plan para: {escape(goal['title'])}",
        style="green",
    ))
    return goal


def _build_store(storage: LocalStorage) -> tuple[PlanStore, ProfileSync | None]:
    """Plan store wired to the backend replica when Supabase is configured."""
    sync = None
    try:
        sync = ProfileSync.from_env(os.environ.get("FITCOACH_USER_ID", ""))
    except Exception as e:
        console.print(f"[yellow]Backend sync disabled: {escape(str(e))}[/yellow]")
    store = PlanStore(storage, replica=sync)
    set_plan_store(store)
    return store, sync


async def _generate(service: PlanService, profile: dict, sync: ProfileSync | None) -> dict:
    plan = await service.generate(profile["goals"], profile["training_types"], profile["profile_data"])
    if sync is not None:
        await sync.drain()
    return plan


def run_generate(store: PlanStore, sync: ProfileSync | None, profile: dict) -> dict:
    if not has_credentials():
        console.print("[yellow]GEMINI_API_KEY no configurada: usando plan de demostración.[/yellow]")
    with console.status("Generando tu plan..."):
        plan = asyncio.run(_generate(PlanService(store), profile, sync))
    display_plan(plan)
    return plan


def run_chat(store: PlanStore, profile: dict | None) -> None:
    """Interactive coach chat with plan commands."""
    profile = profile or {"goals": {}, "training_types": []}
    interpreter = ChatInterpreter(store, profile["goals"], profile["training_types"])
    console.print(Panel(
        "Pregúntame lo que quieras. Comandos: 'mi rutina', 'intercambiar lunes y martes'. 'salir' para terminar.",
        title="FitBot",
        style="blue",
    ))

    async def loop():
        while True:
            try:
                text = Prompt.ask("\n[bold]Tú[/bold]")
            except (KeyboardInterrupt, EOFError):
                text = "salir"
            lowered = text.lower().strip()
            if lowered in ("salir", "exit", "quit", "q"):
                console.print("[dim]¡Hasta pronto![/dim]")
                break
            if interpreter.awaiting_days and lowered in ("cancelar", "cancel"):
                interpreter.cancel()
                console.print("[dim]Intercambio cancelado.[/dim]")
                continue
            if interpreter.awaiting_days and lowered.isdigit():
                reply = interpreter.select_day(int(lowered))
            else:
                reply = await interpreter.handle(text)
            console.print(Panel(escape(reply.text), title="FitBot", style="blue"))
            if reply.swapped:
                display_plan(store.get())

        if store.replica is not None:
            await store.replica.drain()

    asyncio.run(loop())


def _require_plan(store: PlanStore) -> dict | None:
    plan = store.get()
    if plan is None:
        console.print("[red]No hay plan. Genera uno con --generate.[/red]")
    return plan


def main(args: list[str] | None = None):
    """Main CLI entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        prog="fitcoach",
        description="FitCoach - planes de entrenamiento y nutrición personalizados",
    )
    parser.add_argument("--onboard", action="store_true", help="Run onboarding and generate a plan")
    parser.add_argument("--generate", action="store_true", help="Generate a new weekly plan from the saved profile")
    parser.add_argument("--show", action="store_true", help="Show the current plan")
    parser.add_argument("--swap", nargs=2, metavar=("I", "J"), help="Swap two days' workouts (0=Sunday or day names)")
    parser.add_argument("--shopping", action="store_true", help="Show the shopping list")
    parser.add_argument("--toggle", type=int, metavar="N", help="Check/uncheck shopping list item N")
    parser.add_argument(
        "--wod", nargs=4, metavar=("SPORT", "DAY", "FIELD", "TEXT"),
        help=f"Set a WOD field ({'/'.join(WOD_FIELDS)}) for a weekday ({', '.join(WOD_WEEK)})",
    )
    parser.add_argument("--clear-wod", nargs=2, metavar=("SPORT", "DAY"), help="Remove a weekday's WOD")
    parser.add_argument("--goal-add", action="store_true", help="Create a milestone goal")
    parser.add_argument("--goal-progress", nargs=2, metavar=("ID", "VALUE"), help="Record progress on a goal")
    parser.add_argument("--goals", action="store_true", help="List milestone goals")
    parser.add_argument("--delete-plan", action="store_true", help="Delete the local plan")
    parser.add_argument("--chat", action="store_true", help="Chat with the coach (default when no flags given)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.INFO if parsed.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage = LocalStorage()
    store, sync = _build_store(storage)
    profile = load_profile(storage)

    if parsed.onboard:
        profile = onboard_user(storage)
        run_generate(store, sync, profile)
        return

    if parsed.generate:
        if profile is None:
            profile = onboard_user(storage)
        run_generate(store, sync, profile)
        return

    if parsed.show:
        plan = _require_plan(store)
        if plan:
            display_plan(plan)
        return

    if parsed.swap:
        if _require_plan(store) is None:
            return
        indices = []
        for value in parsed.swap:
            idx = int(value) if value.isdigit() else day_index(value)
            if idx is None:
                console.print(f"[red]Día no reconocido: {escape(value)}[/red]")
                return
            indices.append(idx)
        if store.swap_days(*indices):
            console.print(f"[green]Intercambiados {DAY_NAMES[indices[0]]} y {DAY_NAMES[indices[1]]}.[/green]")
            display_plan(store.get())
        else:
            console.print("[red]No se pudo intercambiar esos días.[/red]")
        return

    if parsed.shopping or parsed.toggle is not None:
        plan = _require_plan(store)
        if plan is None:
            return
        if parsed.toggle is not None and not store.toggle_shopping_item(parsed.toggle):
            console.print(f"[red]No existe el elemento {parsed.toggle}.[/red]")
        display_shopping(store.get().get("shopping_list") or [])
        return

    if parsed.wod or parsed.clear_wod:
        sport = (parsed.wod or parsed.clear_wod)[0]
        try:
            wods = WodStore(sport, storage)
        except ValueError:
            console.print(f"[red]Deporte no válido: {escape(sport)}[/red]")
            return
        if parsed.wod:
            _, day, field, text = parsed.wod
            wods.set_field(day, field, text)
        else:
            wods.clear_day(parsed.clear_wod[1])
        wods.save(store if store.get() is not None else None)
        for day in WOD_WEEK:
            entry = wods.wods.get(day)
            if entry:
                console.print(f"[bold]{day}[/bold]: " + " | ".join(
                    f"{k}: {escape(v)}" for k, v in entry.items() if v
                ))
        return

    goal_store = GoalStore(storage)
    if parsed.goal_add:
        add_goal_interactive(goal_store)
        return

    if parsed.goal_progress:
        prefix, value = parsed.goal_progress
        try:
            number = float(value)
        except ValueError:
            console.print(f"[red]Valor no numérico: {escape(value)}[/red]")
            return
        match = next((g for g in goal_store.all() if g["id"].startswith(prefix)), None)
        if match is None:
            console.print(f"[red]Objetivo no encontrado: {escape(prefix)}[/red]")
            return
        updated = goal_store.update_progress(match["id"], number)
        if updated and updated["completed"]:
            console.print(f"[green]¡Objetivo completado: {escape(updated['title'])}![/green]")
        display_goals(goal_store.all())
        return

    if parsed.goals:
        display_goals(goal_store.all())
        return

    if parsed.delete_plan:
        if Confirm.ask("¿Borrar el plan local?", default=False):
            store.delete()
            console.print("[green]Plan borrado.[/green]")
        return

    # Default: chat mode (same as --chat)
    run_chat(store, profile)


if __name__ == "__main__":
    main()
