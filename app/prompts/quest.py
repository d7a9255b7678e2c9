from __future__ import annotations

from app.prompts.analysis import JOB_TEXT_MAX_CHARS, truncate

QUEST_THEMES: tuple[str, ...] = (
    "Prioritization & time management",
    "Rapid technical decision-making",
    "Team collaboration & cross-functional coordination",
    "Customer-facing service & communication",
    "Risk, security, or compliance",
)

_DEFAULT_FOCUS = "vary the scenario framing (situational, technical, prioritization)"


def build_quest_prompt(
    job_title: str,
    job_description: str | None,
    job_qualifications: str | None,
    skills: list[str],
    thematic_focus: str | None = None,
) -> str:
    description = truncate(job_description, JOB_TEXT_MAX_CHARS) or "-"
    qualifications = truncate(job_qualifications, JOB_TEXT_MAX_CHARS) or "-"
    return f"""
Create 1 simulation quest for the role "{job_title}". Answer in JSON only (no other text).
JSON structure:
{{
  "question": "a short situational/technical scenario question",
  "options": [
    {{"label":"A","text":"answer", "xp": int, "explanation": "short reason"}},
    {{"label":"B","text":"answer", "xp": int, "explanation": "short reason"}},
    {{"label":"C","text":"answer", "xp": int, "explanation": "short reason"}}
  ],
  "answer": "A/B/C as the best option"
}}
Rules:
- Fit the context to the job description/requirements below.
- Thematic focus: {thematic_focus or _DEFAULT_FOCUS}.
- Exactly 3 options labeled A, B and C.
- Each option has a different XP value (integer 10-100). No two options share the same XP.
- Exactly one best answer (answer).
- Add an explanation per option (1-2 sentences) saying why that option is right or falls short.
- English, concise, relevant to the role.

Job description:
{description}

Qualifications:
{qualifications}

Key skills: {", ".join(skills) or "-"}
"""
