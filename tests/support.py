import json
import sys
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.schemas.profile import (  # noqa: E402
    Certification,
    Education,
    Experience,
    JobSummary,
    ProfileBundle,
    Project,
    Skill,
)
from app.storage.db import init_db  # noqa: E402


class FakeAIClient:
    """Stands in for a provider; answers with a fixed text, a callable, or an error."""

    provider = "fake"
    model = "fake-model"

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if callable(self.response):
            return self.response(prompt)
        return self.response or ""


class TempDatabaseTestCase(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        patcher = patch("app.storage.db._get_db_path", return_value=Path(tmp.name) / "test.db")
        patcher.start()
        self.addCleanup(patcher.stop)
        init_db()


def quest_json(question="A release is at risk. What do you do first?", answer="A", xps=(90, 40, 20), **extra) -> str:
    payload = {
        "question": question,
        "options": [
            {"label": "A", "text": "Re-plan scope with the team", "xp": xps[0], "explanation": "Keeps the date realistic."},
            {"label": "B", "text": "Work overtime alone", "xp": xps[1], "explanation": "Not sustainable."},
            {"label": "C", "text": "Ignore it", "xp": xps[2], "explanation": "The risk grows."},
        ],
        "answer": answer,
    }
    payload.update(extra)
    return json.dumps(payload)


def analysis_json(score=72, **extra) -> str:
    payload = {
        "matchScore": score,
        "skillGap": {
            "missing": [{"skill": "Kubernetes", "importance": "high"}],
            "existing": [{"skill": "Python", "level": "expert"}],
        },
        "recommendation": "<h3>Evaluation Summary</h3><p>Good fit.</p>",
    }
    payload.update(extra)
    return json.dumps(payload)


def backend_job(skills=None) -> JobSummary:
    return JobSummary(
        title="Backend Engineer",
        description_text="Build and run Python services for our marketplace.",
        qualifications_text="3+ years building web APIs.",
        required_skills=skills
        if skills is not None
        else ["Python", "Django", "SQL", "Docker", "AWS", "Kubernetes", "GraphQL", "Redis"],
    )


def partial_profile() -> ProfileBundle:
    """5 of the 8 backend skills, one experience, one project, nothing else."""
    return ProfileBundle(
        skills=[
            Skill(name="Python", level=80),
            Skill(name="Django", level=55),
            Skill(name="PostgreSQL", level=None),
            Skill(name="Docker", level=30),
            Skill(name="AWS Lambda", level=70),
            Skill(name="Figma", level=90),
        ],
        experiences=[
            Experience(
                title="Software Engineer",
                company="Acme",
                location="Jakarta",
                start_date=date(2021, 3, 1),
                is_current=True,
                description="Built payment APIs.",
            )
        ],
        projects=[Project(name="Job tracker", description="A Django app for tracking applications.")],
    )


def full_profile() -> ProfileBundle:
    return ProfileBundle(
        skills=[Skill(name="Python", level=90)],
        experiences=[
            Experience(title="Engineer", company="Acme", start_date=date(2019, 1, 1), end_date=date(2021, 6, 1))
        ],
        educations=[Education(school="State University", degree="BSc", field="Computer Science")],
        certifications=[Certification(name="AWS Developer", issuer="Amazon", issue_date=date(2022, 5, 1))],
        projects=[Project(name="CLI tool")],
    )
