# schemas/plan.py
from pydantic import BaseModel, Field, field_validator
from typing import List

WEEK_DAYS = frozenset(range(1, 8))


class _Frozen(BaseModel):
    class Config:
        populate_by_name = True
        frozen = True


class Exercise(_Frozen):
    name: str
    sets: int = Field(gt=0)
    reps: str
    rest: str
    notes: str = ""

    @field_validator("reps", mode="before")
    @classmethod
    def _reps_as_text(cls, value):
        # 모델이 "8-10" 대신 숫자 10 을 돌려주는 경우가 있음
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class WorkoutDay(_Frozen):
    day: int = Field(ge=1, le=7)
    focus: str
    exercises: List[Exercise] = Field(min_length=1)


class Meal(_Frozen):
    name: str
    calories: int = Field(ge=0)
    items: List[str]


class DailyMeals(_Frozen):
    day: int = Field(ge=1, le=7)
    breakfast: Meal
    lunch: Meal
    dinner: Meal
    snack1: Meal
    snack2: Meal

    def meals(self) -> list[tuple[str, Meal]]:
        return [
            ("breakfast", self.breakfast),
            ("lunch", self.lunch),
            ("dinner", self.dinner),
            ("snack1", self.snack1),
            ("snack2", self.snack2),
        ]


class Macros(_Frozen):
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fats: int = Field(ge=0)


def _check_week(entries, label):
    if len(entries) != 7:
        raise ValueError(f"{label} must contain exactly 7 days, got {len(entries)}")
    days = {entry.day for entry in entries}
    if days != WEEK_DAYS:
        missing = sorted(WEEK_DAYS - days)
        raise ValueError(f"{label} must cover days 1-7 once each (missing: {missing})")
    return entries


class WorkoutPlan(_Frozen):
    weekly_plan: List[WorkoutDay] = Field(alias="weeklyPlan")

    @field_validator("weekly_plan")
    @classmethod
    def _full_week(cls, value):
        return _check_week(value, "weeklyPlan")


class DietPlan(_Frozen):
    daily_calories: int = Field(alias="dailyCalories", gt=0)
    daily_macros: Macros = Field(alias="dailyMacros")
    weekly_meals: List[DailyMeals] = Field(alias="weeklyMeals")

    @field_validator("weekly_meals")
    @classmethod
    def _full_week(cls, value):
        return _check_week(value, "weeklyMeals")


class FitnessPlan(_Frozen):
    workout_plan: WorkoutPlan = Field(alias="workoutPlan")
    diet_plan: DietPlan = Field(alias="dietPlan")
    tips: List[str] = Field(min_length=1)

    def workout_day(self, day: int) -> WorkoutDay:
        """요일 번호(day 필드)로 운동 일정을 찾습니다. 응답 순서는 신뢰하지 않습니다."""
        for entry in self.workout_plan.weekly_plan:
            if entry.day == day:
                return entry
        raise KeyError(day)

    def meals_for_day(self, day: int) -> DailyMeals:
        """요일 번호(day 필드)로 식단을 찾습니다."""
        for entry in self.diet_plan.weekly_meals:
            if entry.day == day:
                return entry
        raise KeyError(day)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
