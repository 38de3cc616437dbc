# fitcoach/dependencies.py

from functools import lru_cache

from .utils.gateway import GenerationGateway, create_gateway


@lru_cache(maxsize=1)
def get_gateway() -> GenerationGateway:
    # LLM_API_KEY 가 없으면 ConfigError 가 발생하고 네트워크 호출 전에 요청이 중단됨
    return create_gateway()
