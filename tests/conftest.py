"""
Shared fixtures: a well-formed 7-day plan, sample profiles and a fake
openai client whose chat.completions.create is an AsyncMock.
"""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from fitcoach.schemas.plan import FitnessPlan
from fitcoach.schemas.profile import UserProfile
from fitcoach.utils.gateway import GenerationGateway


def _meal(name, calories):
    return {"name": name, "calories": calories, "items": [f"{name} ingredient"]}


def make_plan_dict(days=range(1, 8)):
    days = list(days)
    return {
        "workoutPlan": {
            "weeklyPlan": [
                {
                    "day": d,
                    "focus": f"Focus {d}",
                    "exercises": [
                        {
                            "name": f"Exercise {d}",
                            "sets": 4,
                            "reps": "8-10",
                            "rest": "90 seconds",
                            "notes": "Focus on controlled movement",
                        }
                    ],
                }
                for d in days
            ]
        },
        "dietPlan": {
            "dailyCalories": 2200,
            "dailyMacros": {"protein": 165, "carbs": 220, "fats": 73},
            "weeklyMeals": [
                {
                    "day": d,
                    "breakfast": _meal(f"Oatmeal {d}", 350),
                    "lunch": _meal(f"Chicken Salad {d}", 450),
                    "dinner": _meal(f"Salmon {d}", 550),
                    "snack1": _meal("Greek Yogurt", 150),
                    "snack2": _meal("Protein Shake", 200),
                }
                for d in days
            ],
        },
        "tips": ["Stay hydrated", "Sleep 7-9 hours"],
    }


@pytest.fixture
def plan_dict():
    return make_plan_dict()


@pytest.fixture
def plan(plan_dict):
    return FitnessPlan.model_validate(plan_dict)


@pytest.fixture
def fenced_plan_text(plan_dict):
    return "Here is your plan:\n```json\n" + json.dumps(plan_dict) + "\n```\nGood luck!"


@pytest.fixture
def profile_data():
    return {
        "name": "Alex",
        "age": 30,
        "gender": "male",
        "height": 180,
        "weight": 80,
        "goal": "muscle-gain",
        "fitnessLevel": "intermediate",
        "workoutLocation": "gym",
        "dietaryPreference": "non-vegetarian",
    }


@pytest.fixture
def profile(profile_data):
    return UserProfile.model_validate(profile_data)


def completion(content=None, images=None):
    message = SimpleNamespace(content=content, images=images)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def gateway(openai_client):
    return GenerationGateway(openai_client, plan_model="test-model", image_model="test-image-model")
