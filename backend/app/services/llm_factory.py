import httpx
from functools import lru_cache

from langchain_groq import ChatGroq

from app.core.config import settings
from app.core.exceptions import CopilotNotConfiguredError
from app.core.logging import get_logger

logger = get_logger(__name__)

GROQ_API_URL = "https://api.groq.com/openai/v1"


@lru_cache
def get_llm(temperature: float = 0.0) -> ChatGroq:
    """
    Factory singleton para instancias de ChatGroq usadas por el co-pilot.

    Raises:
        CopilotNotConfiguredError: Si no hay GROQ_API_KEY.
    """
    if not settings.copilot_enabled:
        raise CopilotNotConfiguredError()

    logger.info(f"Inicializando LLM: {settings.groq_model} (temp={temperature})")
    return ChatGroq(
        model=settings.groq_model,
        temperature=temperature,
        api_key=settings.groq_api_key,
        request_timeout=settings.copilot_timeout_seconds,
        max_retries=settings.copilot_max_retries,
    )


async def check_groq_health() -> bool:
    """Verifica conectividad con Groq API."""
    if not settings.copilot_enabled:
        return False
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(
                f"{GROQ_API_URL}/models",
                headers={"Authorization": f"Bearer {settings.groq_api_key}"},
            )
            return response.status_code == 200
    except httpx.HTTPError as e:
        logger.warning(f"Groq health check failed: {e}")
        return False
