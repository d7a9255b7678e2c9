from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

Importance = Literal["high", "medium", "low"]
AnalysisSource = Literal["ai", "fallback"]


class MissingSkill(CamelModel):
    skill: str
    importance: Importance


class ExistingSkill(CamelModel):
    skill: str
    level: str


class SkillGap(CamelModel):
    missing: list[MissingSkill] = Field(default_factory=list)
    existing: list[ExistingSkill] = Field(default_factory=list)


class AnalysisResult(CamelModel):
    """Outcome of either the AI path or the fallback scorer, before it is stored."""

    match_score: int = Field(ge=0, le=100)
    skill_gap: SkillGap
    recommendation: str
    source: AnalysisSource


class MatchAnalysis(CamelModel):
    id: int
    user_id: str
    job_id: int
    match_score: int = Field(ge=0, le=100)
    skill_gap: SkillGap
    recommendation: str
    source: AnalysisSource
    analyzed_at: datetime
