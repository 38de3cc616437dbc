# main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core import config
from .core.errors import ConfigError, GenerationError
from .dependencies import get_gateway
from .routers import media, plan, tts

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Fitness Coach")

# CORS 설정 (브라우저 대시보드에서 직접 호출)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    try:
        get_gateway()
    except ConfigError as e:
        # 서버는 뜨지만 모든 생성 요청은 500 으로 응답
        logger.error("Generation gateway disabled: %s", e)


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    logger.error("Error handling %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Generation failed"})


@app.get("/ping")
def ping():
    return {"ok": True}


app.include_router(plan.router)
app.include_router(media.router)
app.include_router(tts.router)
