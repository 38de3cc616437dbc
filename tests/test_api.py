"""
HTTP boundary tests: every generation failure becomes {"error": ...} with 500.
"""
import json
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from fitcoach.core import config
from fitcoach.dependencies import get_gateway
from fitcoach.main import app
from fitcoach.routers import tts
from tests.conftest import completion


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGenerateFitnessPlan:
    def test_returns_plan_in_wire_shape(self, client, openai_client, profile_data, fenced_plan_text, plan_dict):
        openai_client.chat.completions.create.return_value = completion(fenced_plan_text)

        response = client.post("/generate-fitness-plan", json=profile_data)

        assert response.status_code == 200
        assert response.json() == plan_dict
        openai_client.chat.completions.create.assert_awaited_once()

    def test_malformed_plan_is_500(self, client, openai_client, profile_data):
        openai_client.chat.completions.create.return_value = completion('```json\n{"a":1\n```')

        response = client.post("/generate-fitness-plan", json=profile_data)

        assert response.status_code == 500
        assert "not valid JSON" in response.json()["error"]

    def test_incomplete_week_is_500(self, client, openai_client, profile_data, plan_dict):
        plan_dict["dietPlan"]["weeklyMeals"] = plan_dict["dietPlan"]["weeklyMeals"][:3]
        openai_client.chat.completions.create.return_value = completion(json.dumps(plan_dict))

        response = client.post("/generate-fitness-plan", json=profile_data)

        assert response.status_code == 500
        assert "weeklyMeals" in response.json()["error"]

    def test_invalid_profile_is_rejected_before_generation(self, client, openai_client, profile_data):
        profile_data["age"] = 5

        response = client.post("/generate-fitness-plan", json=profile_data)

        assert response.status_code == 422
        openai_client.chat.completions.create.assert_not_awaited()

    def test_missing_credential_is_500_without_network_call(self, monkeypatch, profile_data):
        monkeypatch.setattr(config, "LLM_API_KEY", None)
        get_gateway.cache_clear()
        try:
            response = TestClient(app).post("/generate-fitness-plan", json=profile_data)
        finally:
            get_gateway.cache_clear()

        assert response.status_code == 500
        assert response.json() == {"error": "LLM_API_KEY is not configured"}


class TestImageAndQuote:
    def test_image(self, client, openai_client):
        images = [{"image_url": {"url": "https://img.test/squat.png"}}]
        openai_client.chat.completions.create.return_value = completion(None, images=images)

        response = client.post("/generate-exercise-image", json={"prompt": "Squat", "type": "exercise"})

        assert response.status_code == 200
        assert response.json() == {"imageUrl": "https://img.test/squat.png"}

    def test_image_missing_is_500(self, client, openai_client):
        openai_client.chat.completions.create.return_value = completion("no image")

        response = client.post("/generate-exercise-image", json={"prompt": "Oats", "type": "meal"})

        assert response.status_code == 500
        assert response.json() == {"error": "No image URL in response"}

    def test_unknown_image_type_is_422(self, client):
        response = client.post("/generate-exercise-image", json={"prompt": "Oats", "type": "selfie"})
        assert response.status_code == 422

    def test_quote(self, client, openai_client):
        openai_client.chat.completions.create.return_value = completion('"Train insane or remain the same."')

        response = client.post("/generate-motivation-quote")

        assert response.status_code == 200
        assert response.json() == {"quote": "Train insane or remain the same."}


class TestSpeech:
    def test_tts_returns_wav(self, client, monkeypatch):
        monkeypatch.setattr(config, "TTS_ENDPOINT", "https://tts.test/v1")
        monkeypatch.setattr(config, "TTS_SUBSCRIPTION_KEY", "secret")
        fake_post = MagicMock(return_value=MagicMock(status_code=200, content=b"RIFF...."))
        monkeypatch.setattr(tts.requests, "post", fake_post)

        response = client.post("/tts", json={"text": "Day 1: Upper Body\nBench Press"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "audio/wav"
        assert response.content == b"RIFF...."
        body = fake_post.call_args.kwargs["data"].decode("utf-8")
        assert "Day 1: Upper Body. Bench Press" in body

    def test_tts_not_configured_is_500(self, client, monkeypatch):
        monkeypatch.setattr(config, "TTS_ENDPOINT", None)

        response = client.post("/tts", json={"text": "hello"})

        assert response.status_code == 500
        assert "TTS_ENDPOINT" in response.json()["error"]

    def test_tts_upstream_failure_is_500(self, client, monkeypatch):
        monkeypatch.setattr(config, "TTS_ENDPOINT", "https://tts.test/v1")
        monkeypatch.setattr(config, "TTS_SUBSCRIPTION_KEY", "secret")
        monkeypatch.setattr(tts.requests, "post", MagicMock(side_effect=requests.ConnectionError("down")))

        response = client.post("/tts", json={"text": "hello"})

        assert response.status_code == 500


def test_clean_text_for_tts():
    assert tts.clean_text_for_tts("Squat\n\n3 sets   x 10 💪") == "Squat. 3 sets x 10"


def test_ping():
    assert TestClient(app).get("/ping").json() == {"ok": True}
