import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from app.api.deps import get_quest_service, raise_service_error
from app.core.errors import CareerServiceError
from app.core.rate_limit import rate_limit
from app.core.security import current_user_id
from app.schemas.quest import GeneratedQuests, QuestListing, QuestSubmission, SubmitQuestRequest
from app.services.quest_service import DEFAULT_QUEST_COUNT, QuestService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/jobs/{job_id}/quests", response_model=QuestListing)
async def list_job_quests(
    job_id: int,
    count: int = Query(default=DEFAULT_QUEST_COUNT),
    user_id: str = Depends(current_user_id),
    service: QuestService = Depends(get_quest_service),
):
    try:
        return service.list_quests(job_id, user_id, count)
    except CareerServiceError as exc:
        raise_service_error(exc)
    except Exception as exc:
        logger.exception("quest_listing_error user=%s job=%s", user_id, job_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch quests",
        ) from exc


@router.post("/jobs/{job_id}/quests", response_model=GeneratedQuests)
@rate_limit()
async def generate_job_quests(
    request: Request,
    job_id: int,
    count: int = Query(default=DEFAULT_QUEST_COUNT),
    user_id: str = Depends(current_user_id),
    service: QuestService = Depends(get_quest_service),
):
    _ = request
    try:
        quests = await service.generate(job_id, count)
    except CareerServiceError as exc:
        raise_service_error(exc)
    except Exception as exc:
        logger.exception("quest_generation_error user=%s job=%s", user_id, job_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate simulation",
        ) from exc
    return GeneratedQuests(quests=quests)


@router.post("/quests/{quest_id}/submit", response_model=QuestSubmission)
async def submit_quest(
    quest_id: str,
    payload: SubmitQuestRequest,
    user_id: str = Depends(current_user_id),
    service: QuestService = Depends(get_quest_service),
):
    try:
        return service.submit(quest_id, user_id, payload.option)
    except CareerServiceError as exc:
        raise_service_error(exc)
    except Exception as exc:
        logger.exception("quest_submit_error user=%s quest=%s", user_id, quest_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit quest",
        ) from exc
