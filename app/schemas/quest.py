from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

OptionLabel = Literal["A", "B", "C"]
SubmissionStatus = Literal["attempted", "completed"]

OPTION_LABELS: tuple[str, ...] = ("A", "B", "C")


class GeneratedOption(CamelModel):
    label: OptionLabel
    text: str
    xp: int = Field(ge=0)
    explanation: str | None = None


class GeneratedQuest(CamelModel):
    """A validated quest as produced by the model, not yet stored."""

    question: str
    options: list[GeneratedOption] = Field(min_length=3, max_length=3)
    answer: OptionLabel

    @property
    def xp_reward(self) -> int:
        return max(option.xp for option in self.options)

    def option(self, label: str) -> GeneratedOption:
        for option in self.options:
            if option.label == label:
                return option
        raise KeyError(label)


class QuestOption(CamelModel):
    label: OptionLabel
    text: str
    xp: int


class Quest(CamelModel):
    id: str
    job_id: int
    title: str
    question: str
    options: list[QuestOption]
    correct_option: OptionLabel
    explanations: dict[str, str | None] = Field(default_factory=dict)
    xp_reward: int
    generated_by_ai: bool = True
    created_at: datetime


class QuestSubmission(CamelModel):
    quest_id: str
    user_id: str
    status: SubmissionStatus
    score: int
    xp_earned: int
    selected_option: OptionLabel
    feedback: str
    completed_at: datetime
    is_correct: bool
    correct_option: OptionLabel


class QuestListing(CamelModel):
    quests: list[Quest] = Field(default_factory=list)
    submissions: list[QuestSubmission] = Field(default_factory=list)


class GeneratedQuests(CamelModel):
    quests: list[Quest] = Field(default_factory=list)


class SubmitQuestRequest(CamelModel):
    option: str = ""
