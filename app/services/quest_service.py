from __future__ import annotations

import asyncio
import logging
import random
import sqlite3

from app.ai import gateway
from app.ai.types import AIClient
from app.core.errors import GenerationFailed, InternalError, InvalidInput, ModelNotConfigured, NotFound
from app.prompts.quest import QUEST_THEMES, build_quest_prompt
from app.schemas.profile import JobSummary
from app.schemas.quest import OPTION_LABELS, GeneratedQuest, Quest, QuestListing, QuestSubmission
from app.services.response_parser import parse_quest, unwrap
from app.storage import job_store, quest_store

logger = logging.getLogger(__name__)

MAX_QUEST_BATCH = 3
DEFAULT_QUEST_COUNT = 3

_FEEDBACK_CORRECT = "Your choice fits the situation well."
_FEEDBACK_INCORRECT = "Another option lines up better with what this case needs."


def clamp_count(count: int | None) -> int:
    if count is None:
        return DEFAULT_QUEST_COUNT
    return max(1, min(MAX_QUEST_BATCH, count))


class QuestService:
    def __init__(self, client: AIClient | None = None, *, rng: random.Random | None = None):
        self._client = client
        self._rng = rng or random.Random()

    def pick_themes(self, count: int) -> list[str]:
        """Distinct themes in random order, at most one per quest."""
        themes = list(QUEST_THEMES)
        self._rng.shuffle(themes)
        return themes[:count]

    def list_quests(self, job_id: int, user_id: str, count: int | None = DEFAULT_QUEST_COUNT) -> QuestListing:
        try:
            quests = quest_store.list_recent_quests(job_id, clamp_count(count))
            submissions = quest_store.get_submissions(user_id, quests)
        except sqlite3.Error as exc:
            raise InternalError("Failed to fetch quests") from exc
        return QuestListing(quests=quests, submissions=submissions)

    async def _generate_one(self, job: JobSummary, theme: str) -> GeneratedQuest:
        prompt = build_quest_prompt(
            job.title,
            job.description_text,
            job.qualifications_text,
            job.required_skills,
            theme,
        )
        text = await gateway.complete(self._client, prompt, purpose="quest")
        return unwrap(parse_quest(text))

    async def generate(self, job_id: int, count: int | None = DEFAULT_QUEST_COUNT) -> list[Quest]:
        try:
            job = job_store.get_job_summary(job_id)
        except sqlite3.Error as exc:
            raise InternalError("Failed to load job") from exc
        if job is None:
            raise NotFound("Job not found")
        if self._client is None:
            raise ModelNotConfigured("AI credential is missing; quests cannot be generated.")

        themes = self.pick_themes(clamp_count(count))
        tasks = [asyncio.ensure_future(self._generate_one(job, theme)) for theme in themes]
        try:
            generated = await asyncio.gather(*tasks)
        except Exception as exc:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.warning("quest_generation_failed job=%s themes=%s: %s", job_id, len(themes), exc)
            raise GenerationFailed("Quest generation could not complete. Please try again.") from exc

        try:
            created = quest_store.create_quests(job_id, f"Simulation: {job.title}", list(generated))
        except sqlite3.Error as exc:
            raise InternalError("Failed to save quests") from exc
        logger.info("quests_generated job=%s count=%s", job_id, len(created))
        return created

    def submit(self, quest_id: str, user_id: str, selected_option: str | None) -> QuestSubmission:
        option = (selected_option or "").strip().upper()
        if option not in OPTION_LABELS:
            raise InvalidInput("Invalid option. Use A, B, or C.")

        try:
            quest = quest_store.get_quest(quest_id)
            if quest is None:
                raise NotFound("Quest not found")

            is_correct = quest.correct_option.upper() == option
            xp_earned = quest_store.parse_xp(quest_store.get_stored_option(quest.id, option), quest.xp_reward)
            feedback = quest.explanations.get(option) or (_FEEDBACK_CORRECT if is_correct else _FEEDBACK_INCORRECT)

            return quest_store.upsert_submission(
                user_id=user_id,
                quest=quest,
                status="completed" if is_correct else "attempted",
                score=100 if is_correct else 50,
                xp_earned=xp_earned,
                selected_option=option,
                feedback=feedback,
            )
        except sqlite3.Error as exc:
            raise InternalError("Failed to submit quest") from exc
