"""
Tests for the generation gateway against a mocked openai client.
"""
import httpx
import openai
import pytest

from fitcoach.core import config
from fitcoach.core.errors import ConfigError, NoImageError, UpstreamError
from fitcoach.schemas.profile import UserProfile
from fitcoach.utils import gateway as gw
from tests.conftest import completion


def _status_error(status):
    request = httpx.Request("POST", "https://example.test/v1/chat/completions")
    response = httpx.Response(status, request=request, json={"error": "boom"})
    return openai.APIStatusError("boom", response=response, body=None)


class TestPlanPrompt:
    def test_contains_every_required_value(self, profile):
        prompt = gw.build_plan_prompt(profile)
        for value in ["Alex", "30", "male", "180 cm", "80 kg", "muscle-gain",
                      "intermediate", "gym", "non-vegetarian"]:
            assert value in prompt

    def test_omits_optional_lines_when_empty(self, profile):
        prompt = gw.build_plan_prompt(profile)
        assert "Medical History" not in prompt
        assert "Stress Level" not in prompt

    def test_includes_optional_lines_when_present(self, profile_data):
        profile_data.update(medicalHistory="Knee injury", stressLevel="high")
        prompt = gw.build_plan_prompt(UserProfile.model_validate(profile_data))
        assert "Medical History: Knee injury" in prompt
        assert "Stress Level: high" in prompt


class TestGeneratePlan:
    @pytest.mark.asyncio
    async def test_single_request_with_fixed_temperature(self, gateway, openai_client, profile):
        openai_client.chat.completions.create.return_value = completion("raw ```json {} ```")

        raw = await gateway.generate_plan(profile)

        assert raw == "raw ```json {} ```"
        openai_client.chat.completions.create.assert_awaited_once()
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert kwargs["model"] == "test-model"
        system, user = kwargs["messages"]
        assert system["role"] == "system" and "fitness coach" in system["content"]
        assert user["role"] == "user"
        for value in ["Alex", "30", "muscle-gain"]:
            assert value in user["content"]

    @pytest.mark.asyncio
    async def test_non_success_status_becomes_upstream_error(self, gateway, openai_client, profile):
        openai_client.chat.completions.create.side_effect = _status_error(429)

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.generate_plan(profile)
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_connection_error_becomes_upstream_error(self, gateway, openai_client, profile):
        request = httpx.Request("POST", "https://example.test/v1/chat/completions")
        openai_client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(UpstreamError):
            await gateway.generate_plan(profile)


class TestMotivationQuote:
    @pytest.mark.parametrize("content,expected", [
        ('"Lift heavy, live light."', "Lift heavy, live light."),
        ("'Sweat is fat crying.'", "Sweat is fat crying."),
        ("  No excuses.  ", "No excuses."),
        ('"Go hard" ', 'Go hard"'),
        ('He said "go" today', 'He said "go" today'),
    ])
    def test_clean_quote(self, content, expected):
        assert gw.clean_quote(content) == expected

    @pytest.mark.asyncio
    async def test_uses_quote_temperature(self, gateway, openai_client):
        openai_client.chat.completions.create.return_value = completion('"Keep going!"')

        assert await gateway.generate_motivation_quote() == "Keep going!"
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.9
        assert "under 100 characters" in kwargs["messages"][0]["content"]


class TestGenerateImage:
    @pytest.mark.asyncio
    async def test_exercise_image(self, gateway, openai_client):
        images = [{"type": "image_url", "image_url": {"url": "data:image/png;base64,AAA"}}]
        openai_client.chat.completions.create.return_value = completion("", images=images)

        url = await gateway.generate_image("Barbell Squat", "exercise")

        assert url == "data:image/png;base64,AAA"
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-image-model"
        assert kwargs["extra_body"] == {"modalities": ["image", "text"]}
        content = kwargs["messages"][0]["content"]
        assert content.startswith("Professional fitness photography: Barbell Squat")

    def test_meal_template(self):
        prompt = gw.build_image_prompt("Salmon with Sweet Potato", "meal")
        assert prompt.startswith("Professional food photography: Salmon with Sweet Potato.")

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            gw.build_image_prompt("x", "selfie")

    @pytest.mark.asyncio
    async def test_missing_image_raises(self, gateway, openai_client):
        openai_client.chat.completions.create.return_value = completion("sorry, text only")

        with pytest.raises(NoImageError):
            await gateway.generate_image("Plank", "exercise")


class TestCreateGateway:
    def test_missing_key_is_config_error(self, monkeypatch):
        monkeypatch.setattr(config, "LLM_API_KEY", None)
        with pytest.raises(ConfigError):
            gw.create_gateway()

    def test_builds_client_without_retries(self):
        gateway = gw.create_gateway(api_key="test-key", base_url="https://example.test/v1")
        assert gateway.client.max_retries == 0
        assert str(gateway.client.base_url).startswith("https://example.test/v1")
