from __future__ import annotations

import asyncio
import logging
import time
import uuid

from app.ai.types import AIClient
from app.analytics.db import log_ai_run
from app.core.config import settings
from app.core.errors import ModelUnavailable

logger = logging.getLogger(__name__)


def _record_run(
    client: AIClient,
    *,
    run_id: str,
    purpose: str,
    status: str,
    started: float,
    error_code: str | None = None,
) -> None:
    try:
        log_ai_run(
            run_id=run_id,
            purpose=purpose,
            provider=getattr(client, "provider", "unknown"),
            model=getattr(client, "model", "unknown"),
            status=status,
            error_code=error_code,
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
    except Exception:  # pragma: no cover - analytics must not break AI responses
        logger.debug("ai_run_logging_failed", exc_info=True)


async def complete(
    client: AIClient,
    prompt: str,
    *,
    purpose: str,
    timeout_s: float | None = None,
) -> str:
    """One bounded completion call. Every failure surfaces as ModelUnavailable."""
    run_id = uuid.uuid4().hex
    started = time.perf_counter()
    timeout = timeout_s if timeout_s is not None else settings.ai_timeout_s

    try:
        text = await asyncio.wait_for(client.complete(prompt), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("ai_call_timeout purpose=%s timeout_s=%s", purpose, timeout)
        _record_run(client, run_id=run_id, purpose=purpose, status="error", started=started, error_code="ai_timeout")
        raise ModelUnavailable(f"AI call timed out after {timeout}s", code="ai_timeout") from exc
    except ModelUnavailable as exc:
        logger.warning("ai_call_failed purpose=%s code=%s: %s", purpose, exc.code, exc)
        _record_run(client, run_id=run_id, purpose=purpose, status="error", started=started, error_code=exc.code)
        raise
    except Exception as exc:
        logger.warning("ai_call_failed purpose=%s prompt_len=%s: %s", purpose, len(prompt), exc)
        _record_run(
            client, run_id=run_id, purpose=purpose, status="error", started=started, error_code="llm_exception"
        )
        raise ModelUnavailable(str(exc) or exc.__class__.__name__) from exc

    _record_run(client, run_id=run_id, purpose=purpose, status="success", started=started)
    return text
