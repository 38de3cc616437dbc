# routers/tts.py

import logging
import re
from xml.sax.saxutils import escape

import requests
from fastapi import APIRouter, Response

from ..core import config
from ..core.errors import ConfigError, UpstreamError
from ..schemas.generation import ErrorResponse, SpeechRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tts"])

OUTPUT_FORMAT = "riff-16khz-16bit-mono-pcm"


def clean_text_for_tts(text, max_length=9000):
    # 줄바꿈(\n, \r\n 등)을 마침표로 변경
    text = re.sub(r"\s*[\r\n]+\s*", ". ", text)
    # 영문, 숫자, 공백, 기본 문장부호만 허용. 나머지는 삭제
    cleaned = re.sub(r"[^a-zA-Z0-9\s.,!?:'%-]", "", text)
    # 연속된 공백은 하나로
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned[:max_length]


def request_tts(text, voice=None):
    if not config.TTS_ENDPOINT or not config.TTS_SUBSCRIPTION_KEY:
        raise ConfigError("TTS_ENDPOINT / TTS_SUBSCRIPTION_KEY is not configured")

    voice = voice or config.TTS_VOICE
    headers = {
        "Ocp-Apim-Subscription-Key": config.TTS_SUBSCRIPTION_KEY,
        "X-Microsoft-OutputFormat": OUTPUT_FORMAT,
        "Content-Type": "application/ssml+xml",
    }
    cleaned_text = clean_text_for_tts(text)
    # 원본 낭독 속도(0.9배)를 SSML prosody 로 표현
    body = (
        "<speak version='1.0' xml:lang='en-US'>"
        f"<voice xml:lang='en-US' name='{escape(voice)}'>"
        f"<prosody rate='0.9'>{escape(cleaned_text)}</prosody>"
        "</voice></speak>"
    )

    try:
        response = requests.post(config.TTS_ENDPOINT, headers=headers, data=body.encode("utf-8"), timeout=60)
    except requests.RequestException as e:
        logger.error("TTS request failed: %s", e)
        raise UpstreamError(f"TTS request failed: {e}") from e

    logger.info("TTS API Status: %s", response.status_code)
    if response.status_code != 200:
        logger.error("TTS API error: %s %s", response.status_code, response.text[:200])
        raise UpstreamError(f"TTS API error: {response.status_code}", status_code=response.status_code)
    return response.content


@router.post("/tts", responses={500: {"model": ErrorResponse}})
def text_to_speech_endpoint(data: SpeechRequest):
    wav = request_tts(data.text, data.voice)
    return Response(wav, media_type="audio/wav")
