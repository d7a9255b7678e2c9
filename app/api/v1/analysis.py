import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.deps import get_analysis_service, raise_service_error
from app.core.errors import CareerServiceError
from app.core.rate_limit import rate_limit
from app.core.security import current_user_id
from app.schemas.analysis import MatchAnalysis
from app.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/jobs/{job_id}/analysis", response_model=MatchAnalysis)
@rate_limit()
async def analyze_job_match(
    request: Request,
    job_id: int,
    user_id: str = Depends(current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
):
    _ = request
    try:
        return await service.analyze(user_id, job_id)
    except CareerServiceError as exc:
        raise_service_error(exc)
    except Exception as exc:
        logger.exception("analysis_failed user=%s job=%s", user_id, job_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze job match",
        ) from exc


@router.get("/jobs/{job_id}/analysis", response_model=MatchAnalysis)
async def get_job_analysis(
    job_id: int,
    user_id: str = Depends(current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
):
    try:
        return service.get_existing(user_id, job_id)
    except CareerServiceError as exc:
        raise_service_error(exc)
    except Exception as exc:
        logger.exception("analysis_fetch_failed user=%s job=%s", user_id, job_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch analysis",
        ) from exc
