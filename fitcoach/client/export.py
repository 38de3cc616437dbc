# client/export.py

import os
import re
from datetime import date

from ..schemas.plan import FitnessPlan
from ..schemas.profile import UserProfile


def export_filename(name: str) -> str:
    slug = re.sub(r"\s+", "-", name)
    return f"fitness-plan-{slug}.txt"


def render_plan_text(profile: UserProfile, plan: FitnessPlan, generated_on: date | None = None) -> str:
    """사람이 읽기 위한 요약본입니다. 다시 파싱하는 용도가 아닙니다."""
    generated_on = generated_on or date.today()
    macros = plan.diet_plan.daily_macros

    lines = [
        "AI Fitness Coach - Personalized Plan",
        "",
        f"User: {profile.name}",
        f"Goal: {profile.goal}",
        f"Generated: {generated_on.isoformat()}",
        "",
        "WORKOUT PLAN",
    ]
    for day in plan.workout_plan.weekly_plan:
        lines.append("")
        lines.append(f"Day {day.day}: {day.focus}")
        for ex in day.exercises:
            lines.append(f"- {ex.name}: {ex.sets} sets x {ex.reps} reps, rest {ex.rest}")

    lines += [
        "",
        "DIET PLAN",
        f"Daily Calories: {plan.diet_plan.daily_calories}",
        f"Macros: Protein {macros.protein}g | Carbs {macros.carbs}g | Fats {macros.fats}g",
    ]
    for day in plan.diet_plan.weekly_meals:
        lines.append("")
        lines.append(f"Day {day.day}:")
        lines.append(f"Breakfast: {day.breakfast.name} ({day.breakfast.calories} cal)")
        lines.append(f"Lunch: {day.lunch.name} ({day.lunch.calories} cal)")
        lines.append(f"Dinner: {day.dinner.name} ({day.dinner.calories} cal)")

    lines += ["", "TIPS"]
    lines += [f"- {tip}" for tip in plan.tips]
    return "\n".join(lines)


def write_export(profile: UserProfile, plan: FitnessPlan, directory: str = ".") -> str:
    path = os.path.join(directory, export_filename(profile.name))
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_plan_text(profile, plan))
    return path
