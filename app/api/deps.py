from __future__ import annotations

from functools import lru_cache
from typing import NoReturn

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from app.ai.factory import get_optional_ai_client
from app.ai.types import AIClient
from app.core.errors import CareerServiceError
from app.services.analysis_service import AnalysisService
from app.services.quest_service import QuestService


@lru_cache(maxsize=1)
def _ai_client() -> AIClient | None:
    return get_optional_ai_client()


def get_analysis_service() -> AnalysisService:
    return AnalysisService(_ai_client())


def get_quest_service() -> QuestService:
    return QuestService(_ai_client())


def raise_service_error(exc: CareerServiceError) -> NoReturn:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


async def service_error_handler(request: Request, exc: CareerServiceError) -> JSONResponse:
    """Errors raised from dependencies, before a route can translate them."""
    _ = request
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})
