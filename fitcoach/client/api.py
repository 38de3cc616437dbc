# client/api.py

import logging

import requests
from pydantic import ValidationError

from ..core import config
from ..core.errors import ApiError
from ..schemas.plan import FitnessPlan
from ..schemas.profile import UserProfile
from ..utils.gateway import FALLBACK_QUOTE

logger = logging.getLogger(__name__)


class FitnessCoachClient:
    """HTTP client for the fitcoach API, used by the dashboard/CLI side."""

    def __init__(self, base_url: str = config.FITCOACH_API_URL, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _post(self, path: str, payload: dict | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload if payload is not None else {})
        except requests.RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
            raise ApiError(f"Could not reach fitcoach API: {e}") from e

        if response.status_code != 200:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (body.get("error") if isinstance(body, dict) else None) or response.text
            logger.error("%s -> %s: %s", path, response.status_code, message)
            raise ApiError(message or f"Request failed: {response.status_code}", status_code=response.status_code)
        return response

    def _post_json(self, path: str, payload: dict | None = None) -> dict:
        response = self._post(path, payload)
        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(f"Response from {path} is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise ApiError(f"Response from {path} is not a JSON object")
        return data

    def generate_plan(self, profile: UserProfile) -> FitnessPlan:
        data = self._post_json("/generate-fitness-plan", profile.model_dump(by_alias=True, exclude_none=True))
        try:
            return FitnessPlan.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Invalid plan in response: {e}") from e

    def generate_image(self, prompt: str, kind: str) -> str:
        data = self._post_json("/generate-exercise-image", {"prompt": prompt, "type": kind})
        image_url = data.get("imageUrl")
        if not image_url or not isinstance(image_url, str):
            raise ApiError("No image URL in response")
        return image_url

    def fetch_daily_quote(self) -> str:
        # 명언은 실패해도 오류를 띄우지 않고 기본 문구로 대체
        try:
            quote = self._post_json("/generate-motivation-quote").get("quote")
        except ApiError as e:
            logger.warning("Error fetching quote: %s", e)
            return FALLBACK_QUOTE
        if not isinstance(quote, str) or not quote.strip():
            return FALLBACK_QUOTE
        return quote

    def synthesize_speech(self, text: str, voice: str | None = None) -> bytes:
        payload = {"text": text}
        if voice:
            payload["voice"] = voice
        return self._post("/tts", payload).content
