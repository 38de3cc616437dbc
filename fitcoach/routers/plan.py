# fitcoach/routers/plan.py
import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_gateway
from ..schemas.generation import ErrorResponse
from ..schemas.profile import UserProfile
from ..utils.extraction import parse_plan
from ..utils.gateway import GenerationGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["plan"])


@router.post(
    "/generate-fitness-plan",
    responses={500: {"model": ErrorResponse}},
)
async def generate_fitness_plan(
    profile: UserProfile,
    gateway: GenerationGateway = Depends(get_gateway),
):
    """프로필을 모델에 보내 7일 운동/식단 플랜을 생성합니다."""
    raw = await gateway.generate_plan(profile)
    plan = parse_plan(raw)
    logger.info("Plan generated for %s", profile.name)
    # 응답은 camelCase 원본 계약 그대로
    return plan.to_wire()
