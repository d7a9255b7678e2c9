"""Validating boundary for raw model output.

Model text is untrusted: it may be wrapped in Markdown fences, be invalid JSON,
or be valid JSON of the wrong shape. Parsers here never raise on bad input;
they return either ``Parsed`` or ``Malformed`` and leave the decision to the caller.
"""
from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, Field, StrictStr, ValidationError, field_validator

from app.core.errors import MalformedUpstreamResponse
from app.schemas.analysis import AnalysisResult, ExistingSkill, MissingSkill, SkillGap
from app.schemas.quest import OPTION_LABELS, GeneratedOption, GeneratedQuest

T = TypeVar("T")

_FENCE_START = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_FENCE_END = re.compile(r"\r?\n?```$")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T
    ok: Literal[True] = True


@dataclass(frozen=True)
class Malformed:
    reason: str
    ok: Literal[False] = False


ParseResult = Union[Parsed[T], Malformed]


def unwrap(result: ParseResult[T]) -> T:
    if isinstance(result, Malformed):
        raise MalformedUpstreamResponse(result.reason)
    return result.value


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    cleaned = _FENCE_START.sub("", cleaned, count=1)
    cleaned = _FENCE_END.sub("", cleaned, count=1)
    return cleaned.strip()


def _load_object(text: str) -> dict[str, Any] | Malformed:
    cleaned = strip_code_fences(text)
    if not cleaned:
        return Malformed("empty response")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        return Malformed(f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        return Malformed("expected a JSON object")
    return payload


def coerce_match_score(value: Any) -> int:
    """Integer in [0, 100]; absent or non-numeric values count as 0."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return max(0, min(100, math.floor(number + 0.5)))


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


class _MissingPayload(BaseModel):
    skill: StrictStr = Field(min_length=1)
    importance: Literal["high", "medium", "low"]

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, value: Any) -> Any:
        return _lower(value)


class _ExistingPayload(BaseModel):
    skill: StrictStr = Field(min_length=1)
    level: StrictStr = Field(min_length=1)

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return _lower(value)


class _SkillGapPayload(BaseModel):
    missing: list[_MissingPayload] = Field(default_factory=list)
    existing: list[_ExistingPayload] = Field(default_factory=list)

    @field_validator("missing", "existing", mode="before")
    @classmethod
    def _default_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class _AnalysisPayload(BaseModel):
    matchScore: int = 0
    skillGap: _SkillGapPayload = Field(default_factory=_SkillGapPayload)
    recommendation: StrictStr

    @field_validator("matchScore", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> int:
        return coerce_match_score(value)

    @field_validator("skillGap", mode="before")
    @classmethod
    def _default_gap(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("recommendation")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("recommendation must not be empty")
        return value


def parse_analysis(text: str) -> ParseResult[AnalysisResult]:
    payload = _load_object(text)
    if isinstance(payload, Malformed):
        return payload
    try:
        parsed = _AnalysisPayload.model_validate(payload)
    except ValidationError as exc:
        return Malformed(f"analysis shape invalid: {exc.error_count()} error(s)")

    return Parsed(
        AnalysisResult(
            match_score=parsed.matchScore,
            skill_gap=SkillGap(
                missing=[MissingSkill(skill=item.skill, importance=item.importance) for item in parsed.skillGap.missing],
                existing=[ExistingSkill(skill=item.skill, level=item.level) for item in parsed.skillGap.existing],
            ),
            recommendation=parsed.recommendation,
            source="ai",
        )
    )


def _valid_option(raw: Any) -> GeneratedOption | None:
    if not isinstance(raw, dict):
        return None
    label = raw.get("label")
    text = raw.get("text")
    xp = raw.get("xp")
    if label not in OPTION_LABELS or not isinstance(text, str):
        return None
    if isinstance(xp, bool) or not isinstance(xp, (int, float)) or not math.isfinite(xp):
        return None
    if xp < 0:
        return None
    explanation = raw.get("explanation")
    return GeneratedOption(
        label=label,
        text=text,
        xp=int(round(xp)),
        explanation=explanation if isinstance(explanation, str) and explanation.strip() else None,
    )


def parse_quest(text: str) -> ParseResult[GeneratedQuest]:
    payload = _load_object(text)
    if isinstance(payload, Malformed):
        return payload

    question = payload.get("question")
    if not isinstance(question, str) or not question.strip():
        return Malformed("quest has no question")

    raw_options = payload.get("options")
    options: dict[str, GeneratedOption] = {}
    for raw in raw_options if isinstance(raw_options, list) else []:
        option = _valid_option(raw)
        if option is not None and option.label not in options:
            options[option.label] = option
        if len(options) == len(OPTION_LABELS):
            break
    if len(options) < len(OPTION_LABELS):
        return Malformed(f"quest has {len(options)} valid option(s), expected 3")

    answer = payload.get("answer")
    answer = answer.strip().upper() if isinstance(answer, str) else ""
    if answer not in OPTION_LABELS:
        return Malformed("quest answer must be one of A, B, C")

    return Parsed(
        GeneratedQuest(
            question=question.strip(),
            options=[options[label] for label in OPTION_LABELS],
            answer=answer,
        )
    )
