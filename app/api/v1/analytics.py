from fastapi import APIRouter, Depends, Query

from app.core.security import require_api_key
from app.analytics import db as analytics_db

router = APIRouter()


@router.get("/analytics/ai-runs")
def ai_runs(
    limit: int = Query(default=20, ge=1, le=200),
    _: None = Depends(require_api_key),
):
    return analytics_db.get_ai_run_summary(limit=limit)
