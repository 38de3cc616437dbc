# utils/gateway.py

import logging
import re

from openai import AsyncOpenAI, APIConnectionError, APIStatusError

from ..core import config
from ..core.errors import ConfigError, NoImageError, UpstreamError
from ..schemas.profile import UserProfile

logger = logging.getLogger(__name__)

FALLBACK_QUOTE = "Push yourself because no one else is going to do it for you!"

PLAN_TEMPERATURE = 0.7
QUOTE_TEMPERATURE = 0.9

PLAN_SYSTEM_PROMPT = """You are an expert fitness coach and nutritionist. Generate a personalized, comprehensive fitness and diet plan based on user data.

Rules:
- Create a 7-day workout plan with specific exercises, sets, reps, and rest times
- Include proper warm-up and cool-down routines
- Adjust intensity based on fitness level
- Consider workout location for equipment availability
- Create detailed meal plans for each day (breakfast, lunch, dinner, 2 snacks)
- Calculate approximate calories and macros for each meal
- Respect dietary preferences strictly
- Include hydration tips and lifestyle advice
- Add motivational tips for each day
- Be specific with exercise names and food items

Return ONLY valid JSON with this structure:
{
  "workoutPlan": {
    "weeklyPlan": [
      {
        "day": 1,
        "focus": "Upper Body",
        "exercises": [
          {
            "name": "Barbell Bench Press",
            "sets": 4,
            "reps": "8-10",
            "rest": "90 seconds",
            "notes": "Focus on controlled movement"
          }
        ]
      }
    ]
  },
  "dietPlan": {
    "dailyCalories": 2200,
    "dailyMacros": {
      "protein": 165,
      "carbs": 220,
      "fats": 73
    },
    "weeklyMeals": [
      {
        "day": 1,
        "breakfast": {
          "name": "Oatmeal with Berries",
          "calories": 350,
          "items": ["50g oats", "200ml almond milk", "100g mixed berries", "1 tbsp honey"]
        },
        "lunch": {
          "name": "Grilled Chicken Salad",
          "calories": 450,
          "items": ["150g grilled chicken", "Mixed greens", "Cherry tomatoes", "Olive oil dressing"]
        },
        "dinner": {
          "name": "Salmon with Sweet Potato",
          "calories": 550,
          "items": ["180g salmon fillet", "200g sweet potato", "Steamed broccoli"]
        },
        "snack1": {
          "name": "Greek Yogurt",
          "calories": 150,
          "items": ["200g Greek yogurt", "Handful of almonds"]
        },
        "snack2": {
          "name": "Protein Shake",
          "calories": 200,
          "items": ["1 scoop whey protein", "1 banana", "250ml water"]
        }
      }
    ]
  },
  "tips": [
    "Stay hydrated - aim for 3-4 liters of water daily",
    "Get 7-9 hours of quality sleep",
    "Track your progress weekly"
  ]
}

weeklyPlan and weeklyMeals must each contain exactly 7 entries, one for every day from 1 to 7."""

QUOTE_SYSTEM_PROMPT = (
    "You are a motivational fitness coach. Generate a single powerful, inspiring fitness "
    "motivation quote. Keep it under 100 characters. Be original and energetic."
)
QUOTE_USER_PROMPT = "Give me a motivational fitness quote for today."

IMAGE_TEMPLATES = {
    "exercise": (
        "Professional fitness photography: {prompt} exercise demonstration. High-quality gym setting, "
        "proper form shown, athletic person performing the exercise, professional lighting, "
        "motivational atmosphere. Ultra high resolution, detailed, realistic."
    ),
    "meal": (
        "Professional food photography: {prompt}. Appetizing plating, vibrant colors, fresh ingredients, "
        "restaurant quality presentation, natural lighting, macro detail shot. "
        "Ultra high resolution, detailed, realistic."
    ),
}

_QUOTE_MARKS = re.compile(r"^[\"']|[\"']$")


def build_plan_prompt(profile: UserProfile) -> str:
    """사용자 프로필의 모든 항목을 넣어 플랜 생성용 user 메시지를 만듭니다."""
    lines = [
        "Generate a personalized fitness and nutrition plan for:",
        "",
        f"Name: {profile.name}",
        f"Age: {profile.age}",
        f"Gender: {profile.gender}",
        f"Height: {profile.height_cm} cm",
        f"Weight: {profile.weight_kg} kg",
        f"Goal: {profile.goal}",
        f"Fitness Level: {profile.fitness_level}",
        f"Workout Location: {profile.workout_location}",
        f"Dietary Preference: {profile.dietary_preference}",
    ]
    # 선택 항목은 값이 있을 때만 포함
    if profile.medical_history:
        lines.append(f"Medical History: {profile.medical_history}")
    if profile.stress_level:
        lines.append(f"Stress Level: {profile.stress_level}")
    lines.append("")
    lines.append(f"Create a comprehensive 7-day plan that will help them achieve their {profile.goal} goal.")
    return "\n".join(lines)


def build_image_prompt(prompt: str, kind: str) -> str:
    try:
        template = IMAGE_TEMPLATES[kind]
    except KeyError:
        raise ValueError(f"Unknown image type: {kind}")
    return template.format(prompt=prompt)


def clean_quote(content: str) -> str:
    return _QUOTE_MARKS.sub("", content).strip()


def _first_image_url(message) -> str | None:
    images = getattr(message, "images", None)
    if not images:
        return None
    image = images[0]
    if isinstance(image, dict):
        return (image.get("image_url") or {}).get("url")
    image_url = getattr(image, "image_url", None)
    if isinstance(image_url, dict):
        return image_url.get("url")
    return getattr(image_url, "url", None)


class GenerationGateway:
    """
    외부 chat-completion 엔드포인트에 대한 단발성 요청 래퍼.

    상태를 갖지 않으므로 플랜, 이미지, 명언 요청을 동시에 보내도 안전합니다.
    재시도는 하지 않습니다. 실패는 호출자에게 한 번만 전달됩니다.
    """

    def __init__(self, client: AsyncOpenAI, plan_model: str = config.PLAN_MODEL, image_model: str = config.IMAGE_MODEL):
        self.client = client
        self.plan_model = plan_model
        self.image_model = image_model

    async def _complete(self, **kwargs):
        try:
            response = await self.client.chat.completions.create(**kwargs)
        except APIStatusError as e:
            logger.error("AI API error: %s %s", e.status_code, e.message)
            raise UpstreamError(f"AI API error: {e.status_code}", status_code=e.status_code) from e
        except APIConnectionError as e:
            logger.error("AI API unreachable: %s", e)
            raise UpstreamError(f"AI API unreachable: {e}") from e
        if not response.choices:
            raise UpstreamError("AI API returned no choices")
        return response.choices[0].message

    async def generate_plan(self, profile: UserProfile) -> str:
        logger.info("Generating fitness plan for %s", profile.name)
        message = await self._complete(
            model=self.plan_model,
            messages=[
                {"role": "system", "content": PLAN_SYSTEM_PROMPT},
                {"role": "user", "content": build_plan_prompt(profile)},
            ],
            temperature=PLAN_TEMPERATURE,
        )
        return message.content or ""

    async def generate_motivation_quote(self) -> str:
        logger.info("Generating motivation quote")
        message = await self._complete(
            model=self.plan_model,
            messages=[
                {"role": "system", "content": QUOTE_SYSTEM_PROMPT},
                {"role": "user", "content": QUOTE_USER_PROMPT},
            ],
            temperature=QUOTE_TEMPERATURE,
        )
        return clean_quote(message.content or "")

    async def generate_image(self, prompt: str, kind: str) -> str:
        logger.info("Generating %s image for: %s", kind, prompt)
        message = await self._complete(
            model=self.image_model,
            messages=[{"role": "user", "content": build_image_prompt(prompt, kind)}],
            extra_body={"modalities": ["image", "text"]},
        )
        image_url = _first_image_url(message)
        if not image_url:
            raise NoImageError("No image URL in response")
        return image_url


def create_gateway(api_key: str | None = None, base_url: str | None = None) -> GenerationGateway:
    api_key = api_key or config.LLM_API_KEY
    if not api_key:
        raise ConfigError("LLM_API_KEY is not configured")
    client = AsyncOpenAI(
        api_key=api_key,
        base_url=base_url or config.LLM_API_BASE_URL,
        max_retries=0,
    )
    return GenerationGateway(client)

