# schemas/profile.py
from pydantic import BaseModel, Field, field_validator
from typing import Literal

Gender = Literal["male", "female", "other"]
Goal = Literal["weight-loss", "muscle-gain", "maintain", "endurance", "strength"]
FitnessLevel = Literal["beginner", "intermediate", "advanced"]
WorkoutLocation = Literal["home", "gym", "outdoor"]
DietaryPreference = Literal["vegetarian", "non-vegetarian", "vegan", "keto"]
StressLevel = Literal["low", "moderate", "high"]


class UserProfile(BaseModel):
    name: str = Field(min_length=1)
    age: int = Field(ge=10, le=100)
    gender: Gender
    height_cm: int = Field(alias="height", ge=100, le=250)
    weight_kg: int = Field(alias="weight", ge=30, le=300)
    goal: Goal
    fitness_level: FitnessLevel = Field(alias="fitnessLevel")
    workout_location: WorkoutLocation = Field(alias="workoutLocation")
    dietary_preference: DietaryPreference = Field(alias="dietaryPreference")
    medical_history: str | None = Field(default=None, alias="medicalHistory")
    stress_level: StressLevel | None = Field(default=None, alias="stressLevel")

    @field_validator("medical_history", "stress_level", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # 폼에서 빈 문자열로 넘어오는 선택 항목은 미입력으로 취급
        if isinstance(value, str) and not value.strip():
            return None
        return value

    class Config:
        populate_by_name = True
        frozen = True
        str_strip_whitespace = True
