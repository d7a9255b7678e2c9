from __future__ import annotations

from typing import Optional

from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
)

from app.core.errors import ModelNotConfigured, ModelUnavailable


def _error_code(exc: APIError) -> str:
    if isinstance(exc, APITimeoutError):
        return "ai_timeout"
    if isinstance(exc, APIConnectionError):
        return "ai_network_error"
    if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
        return "ai_auth_error"
    if isinstance(exc, RateLimitError):
        return "ai_rate_limited"
    return "ai_unavailable"


class OpenAIProvider:
    provider = "openai"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        temperature: float = 0.4,
    ):
        key = (api_key or "").strip()
        if not key:
            raise ModelNotConfigured(f"API key for AI provider '{self.provider}' is missing")

        self.model = model
        self._temperature = temperature
        # single attempt; callers decide whether to degrade or fail
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=0,
        )

    async def complete(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
            )
        except APIError as exc:
            raise ModelUnavailable(str(exc), code=_error_code(exc)) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
