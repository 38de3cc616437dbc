# schemas/generation.py
from pydantic import BaseModel, Field
from typing import Literal

ImageKind = Literal["exercise", "meal"]


class ImageRequest(BaseModel):
    prompt: str = Field(min_length=1)
    type: ImageKind


class ImageResponse(BaseModel):
    imageUrl: str


class QuoteResponse(BaseModel):
    quote: str


class ErrorResponse(BaseModel):
    error: str


class SpeechRequest(BaseModel):
    text: str
    voice: str | None = None
