# utils/extraction.py

import json
import logging

from pydantic import ValidationError

from ..core.errors import MalformedPlanError
from ..schemas.plan import FitnessPlan

logger = logging.getLogger(__name__)

JSON_FENCE = "```json"
FENCE = "```"


def extract_json_payload(text: str) -> str:
    """
    모델 응답에서 JSON 본문만 잘라냅니다.

    ```json 으로 시작하는 코드 블록을 우선으로, 없으면 첫 번째 ``` 블록을 사용합니다.
    코드 블록이 전혀 없으면 응답 전체를 JSON 으로 간주합니다.
    """
    if JSON_FENCE in text:
        body = text.split(JSON_FENCE, 1)[1]
    elif FENCE in text:
        body = text.split(FENCE, 1)[1]
    else:
        return text.strip()
    return body.split(FENCE, 1)[0].strip()


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors()[:5]:
        location = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def parse_plan(text: str) -> FitnessPlan:
    payload = extract_json_payload(text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.error("Plan response is not valid JSON: %s", e)
        raise MalformedPlanError(f"Plan response is not valid JSON: {e}") from e

    try:
        plan = FitnessPlan.model_validate(data)
    except ValidationError as e:
        summary = _summarize(e)
        logger.error("Plan response does not match plan shape: %s", summary)
        raise MalformedPlanError(f"Plan response does not match plan shape: {summary}") from e

    logger.debug("Parsed plan with %d tips", len(plan.tips))
    return plan
