from __future__ import annotations

import html
import math

from app.core.scoring import get_scoring_number
from app.schemas.analysis import AnalysisResult, ExistingSkill, MissingSkill, SkillGap
from app.schemas.profile import JobSummary, ProfileBundle


def _weight(path: str, default: float) -> float:
    return get_scoring_number(f"fallback.weights.{path}", default)


def _limit(name: str, default: int) -> int:
    return int(get_scoring_number(f"fallback.recommendation.{name}", default))


def _skills_match(user_skill: str, job_skill: str) -> bool:
    return user_skill in job_skill or job_skill in user_skill


def skill_level_label(level: int | None) -> str:
    if level is not None and level >= get_scoring_number("fallback.skill_levels.expert", 70):
        return "expert"
    if level is not None and level >= get_scoring_number("fallback.skill_levels.intermediate", 50):
        return "intermediate"
    return "beginner"


def _category_score(name: str, present: bool, present_default: float, absent_default: float) -> float:
    if present:
        return _weight(f"{name}.present", present_default)
    return _weight(f"{name}.absent", absent_default)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _build_recommendation(
    profile: ProfileBundle,
    match_score: int,
    missing: list[MissingSkill],
    existing: list[ExistingSkill],
) -> str:
    strengths = []
    if profile.experiences:
        strengths.append("Has relevant work experience")
    if profile.educations:
        strengths.append("Has a suitable educational background")
    if profile.certifications:
        strengths.append("Holds relevant certifications")
    if profile.projects:
        strengths.append("Has a strong project portfolio")

    strength_items = "".join(f"<li>{item}</li>" for item in strengths)
    if existing:
        names = ", ".join(html.escape(item.skill) for item in existing[: _limit("max_strength_skills", 5)])
        strength_items += f"<li><strong>Skills you already have:</strong> {names}</li>"

    gap_items = "".join(
        f"<li><strong>{html.escape(item.skill)}</strong> - This skill matters for the position. "
        "Focus on learning it and practicing it.</li>"
        for item in missing[: _limit("max_gap_skills", 5)]
    )
    focus_skills = ", ".join(html.escape(item.skill) for item in missing[: _limit("max_action_skills", 3)])

    return f"""<h3>Evaluation Summary</h3>
<p>Based on a comprehensive analysis of your profile (skills, experience, education, certifications, and projects), you have a <strong>{match_score}% match</strong> with this position.</p>

<h3>Candidate Strengths</h3>
<ul>
{strength_items}
</ul>

<h3>Areas to Improve</h3>
<ul>
{gap_items}
</ul>

<h3>Concrete Action Steps</h3>
<ol>
<li><strong>Learn the Missing Skills:</strong> Focus on: {focus_skills}. Build them up through online courses, tutorials, and hands-on practice.</li>
<li><strong>Personal Project:</strong> Build a project that uses the missing skills to demonstrate what you can do.</li>
<li><strong>Certification:</strong> Consider earning a certification relevant to this position.</li>
</ol>

<h3>Preparation Timeline</h3>
<ul>
<li><strong>1-2 months:</strong> Focus on learning the missing skills through online courses and practice.</li>
<li><strong>2-3 months:</strong> Apply what you learned in a personal project and document the results.</li>
<li><strong>3-6 months:</strong> Polish your skills, build a stronger portfolio, and get ready to apply.</li>
</ul>"""


def score_fallback(profile: ProfileBundle, job: JobSummary) -> AnalysisResult:
    """Rule-based analysis used whenever the AI path cannot produce a valid result."""
    job_skills = [skill.lower() for skill in job.required_skills if skill.strip()]
    # a blank name would be contained in every job skill
    user_skills = [skill for skill in profile.skills if skill.name.strip()]
    user_names = [skill.name.lower() for skill in user_skills]

    matched_job_skills = [
        job_skill for job_skill in job_skills if any(_skills_match(name, job_skill) for name in user_names)
    ]
    skill_score = (len(matched_job_skills) / max(len(job_skills), 1)) * _weight("skills", 40)

    total = (
        skill_score
        + _category_score("experience", bool(profile.experiences), 25, 10)
        + _category_score("education", bool(profile.educations), 15, 5)
        + _category_score("certifications", bool(profile.certifications), 10, 0)
        + _category_score("projects", bool(profile.projects), 10, 0)
    )
    match_score = max(0, min(100, _round_half_up(total)))

    missing = [
        MissingSkill(skill=job_skill, importance="medium")
        for job_skill in job_skills
        if not any(_skills_match(name, job_skill) for name in user_names)
    ]

    existing = []
    for skill, name in zip(user_skills, user_names):
        matched = next((job_skill for job_skill in job_skills if _skills_match(name, job_skill)), None)
        if matched is None:
            continue
        existing.append(ExistingSkill(skill=matched, level=skill_level_label(skill.level)))

    return AnalysisResult(
        match_score=match_score,
        skill_gap=SkillGap(missing=missing, existing=existing),
        recommendation=_build_recommendation(profile, match_score, missing, existing),
        source="fallback",
    )
