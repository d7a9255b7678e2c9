from __future__ import annotations

from datetime import date

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class Skill(CamelModel):
    name: str
    level: int | None = None

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: int | None) -> int | None:
        if value is not None and (value < 0 or value > 100):
            raise ValueError("level must be between 0 and 100")
        return value


class Experience(CamelModel):
    title: str
    company: str
    location: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None


class Education(CamelModel):
    school: str
    degree: str | None = None
    field: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None


class Certification(CamelModel):
    name: str
    issuer: str
    issue_date: date
    expiry_date: date | None = None


class Project(CamelModel):
    name: str
    description: str | None = None


class ProfileBundle(CamelModel):
    skills: list[Skill] = Field(default_factory=list)
    experiences: list[Experience] = Field(default_factory=list)
    educations: list[Education] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)


class JobSummary(CamelModel):
    title: str
    description_text: str = ""
    qualifications_text: str = ""
    required_skills: list[str] = Field(default_factory=list)
