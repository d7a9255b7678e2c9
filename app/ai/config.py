from dataclasses import dataclass

from app.core.config import settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float
    temperature: float


def load_ai_config() -> AIConfig:
    if settings.ai_provider == "gemini":
        api_key = settings.gemini_api_key
        base_url = settings.gemini_base_url
    else:
        api_key = settings.openai_api_key
        base_url = settings.openai_base_url
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        api_key=(api_key or "").strip() or None,
        base_url=base_url,
        timeout_s=settings.ai_timeout_s,
        temperature=settings.ai_temperature,
    )
