from __future__ import annotations

import logging
import sqlite3

from app.ai import gateway
from app.ai.types import AIClient
from app.core.errors import InternalError, MalformedUpstreamResponse, NotFound, UpstreamUnavailable
from app.prompts.analysis import build_analysis_prompt
from app.schemas.analysis import AnalysisResult, MatchAnalysis
from app.schemas.profile import JobSummary, ProfileBundle
from app.services.fallback_scorer import score_fallback
from app.services.response_parser import parse_analysis, unwrap
from app.storage import analysis_store, job_store, profile_store

logger = logging.getLogger(__name__)


class AnalysisService:
    """Match analysis between a user's profile and a job.

    The AI result and the fallback result have the same shape; exactly one of
    them is stored. AI failures never reach the caller.
    """

    def __init__(self, client: AIClient | None = None):
        self._client = client

    async def _ai_result(self, profile: ProfileBundle, job: JobSummary) -> AnalysisResult:
        if self._client is None:
            raise UpstreamUnavailable("AI credential is not configured", code="ai_not_configured")
        prompt = build_analysis_prompt(profile, job)
        text = await gateway.complete(self._client, prompt, purpose="analysis")
        return unwrap(parse_analysis(text))

    async def produce(self, profile: ProfileBundle, job: JobSummary, *, user_id: str, job_id: int) -> AnalysisResult:
        try:
            return await self._ai_result(profile, job)
        except (UpstreamUnavailable, MalformedUpstreamResponse) as exc:
            logger.info("analysis_fallback user=%s job=%s reason=%s", user_id, job_id, exc.code)
        except Exception:
            logger.exception("analysis_fallback_unexpected user=%s job=%s", user_id, job_id)
        return score_fallback(profile, job)

    async def analyze(self, user_id: str, job_id: int) -> MatchAnalysis:
        try:
            job = job_store.get_job_summary(job_id)
            if job is None:
                raise NotFound("Job not found")
            profile = profile_store.get_profile_bundle(user_id)
        except sqlite3.Error as exc:
            raise InternalError("Failed to load profile or job") from exc

        result = await self.produce(profile, job, user_id=user_id, job_id=job_id)

        try:
            stored = analysis_store.upsert_analysis(user_id, job_id, result)
        except sqlite3.Error as exc:
            raise InternalError("Failed to save analysis") from exc
        logger.info(
            "analysis_saved user=%s job=%s source=%s score=%s", user_id, job_id, stored.source, stored.match_score
        )
        return stored

    def get_existing(self, user_id: str, job_id: int) -> MatchAnalysis:
        try:
            analysis = analysis_store.get_analysis(user_id, job_id)
        except sqlite3.Error as exc:
            raise InternalError("Failed to fetch analysis") from exc
        if analysis is None:
            raise NotFound("Analysis not found")
        return analysis
