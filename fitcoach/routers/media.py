# fitcoach/routers/media.py
from fastapi import APIRouter, Depends

from ..dependencies import get_gateway
from ..schemas.generation import ErrorResponse, ImageRequest, ImageResponse, QuoteResponse
from ..utils.gateway import GenerationGateway

router = APIRouter(tags=["media"])


@router.post(
    "/generate-exercise-image",
    response_model=ImageResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate_exercise_image(
    request: ImageRequest,
    gateway: GenerationGateway = Depends(get_gateway),
):
    """운동 동작 또는 식단 이미지를 생성합니다."""
    image_url = await gateway.generate_image(request.prompt, request.type)
    return ImageResponse(imageUrl=image_url)


@router.post(
    "/generate-motivation-quote",
    response_model=QuoteResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate_motivation_quote(gateway: GenerationGateway = Depends(get_gateway)):
    # 실패 시 대체 문구는 호출자(클라이언트)가 처리
    quote = await gateway.generate_motivation_quote()
    return QuoteResponse(quote=quote)
