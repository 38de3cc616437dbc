# client/narration.py

from ..schemas.plan import FitnessPlan


def narration_script(plan: FitnessPlan, tab: str = "workout") -> str:
    if tab == "workout":
        text = "Here is your workout plan. "
        for day in plan.workout_plan.weekly_plan:
            text += f"Day {day.day}: {day.focus}. "
            for ex in day.exercises:
                text += f"{ex.name}, {ex.sets} sets of {ex.reps} reps, rest {ex.rest}. "
        return text.strip()

    text = f"Here is your diet plan. Daily calories: {plan.diet_plan.daily_calories}. "
    # 식단 탭은 1일차 주요 식사만 읽음
    first = plan.meals_for_day(1)
    text += f"Breakfast: {first.breakfast.name}. "
    text += f"Lunch: {first.lunch.name}. "
    text += f"Dinner: {first.dinner.name}. "
    return text.strip()
