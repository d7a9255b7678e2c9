from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


_DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash-lite",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    database_path: str
    analytics_enabled: bool
    analytics_retention_days: int
    ai_provider: str
    ai_model: str
    ai_timeout_s: float
    ai_temperature: float
    gemini_api_key: str | None
    gemini_base_url: str
    openai_api_key: str | None
    openai_base_url: str | None


_ai_provider = (_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower()

settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "20/minute") or "20/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
    database_path=_get_env("DATABASE_PATH", "data/jobboard.db") or "data/jobboard.db",
    analytics_enabled=_get_env_bool("ANALYTICS_ENABLED", True),
    analytics_retention_days=_get_env_int("ANALYTICS_RETENTION_DAYS", 90),
    ai_provider=_ai_provider,
    ai_model=(_get_env("AI_MODEL", _DEFAULT_MODELS.get(_ai_provider, "")) or "").strip(),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
    ai_temperature=_get_env_float("AI_TEMPERATURE", 0.4),
    gemini_api_key=_get_env("GEMINI_API_KEY"),
    gemini_base_url=_get_env(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    or "https://generativelanguage.googleapis.com/v1beta/openai/",
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
)

if settings.ai_provider not in _DEFAULT_MODELS:
    raise RuntimeError("AI_PROVIDER must be either 'gemini' or 'openai'.")
