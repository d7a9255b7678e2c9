from __future__ import annotations

from app.schemas.profile import (
    Certification,
    Education,
    Experience,
    JobSummary,
    ProfileBundle,
    Project,
)

JOB_TEXT_MAX_CHARS = 1500
EXPERIENCE_DESCRIPTION_MAX_CHARS = 200
EDUCATION_DESCRIPTION_MAX_CHARS = 150
PROJECT_DESCRIPTION_MAX_CHARS = 200

_OUTPUT_FORMAT = """Respond with a single JSON object in exactly this format:
{
  "matchScore": <integer 0-100 based on a comprehensive review of every aspect>,
  "skillGap": {
    "missing": [{"skill": "a required job skill the candidate does NOT have", "importance": "high/medium/low"}],
    "existing": [{"skill": "a skill the candidate has AND the job requires (only matching/relevant ones)", "level": "expert/intermediate/beginner"}]
  },
  "recommendation": "A complete recommendation in English, formatted as structured HTML. Use these tags: <h3> for section titles, <p> for paragraphs, <ul> and <li> for lists, <ol> for numbered lists, <strong> for key points, <em> for emphasis. It must contain: (1) an overall summary of the fit, (2) a 'Candidate Strengths' section with bullet points, (3) an 'Areas to Improve' section with bullet points, (4) a 'Concrete Action Steps' section as a numbered list, and (5) a 'Preparation Timeline' section with a clear timeline. At least 400 words."
}

Example of the expected HTML structure:
<h3>Evaluation Summary</h3>
<p>Overall, this candidate shows...</p>

<h3>Candidate Strengths</h3>
<ul>
  <li><strong>Hands-on Experience:</strong> description of the strength</li>
  <li><strong>Strong Portfolio:</strong> description of the strength</li>
</ul>

<h3>Areas to Improve</h3>
<ul>
  <li>Area 1 with explanation</li>
  <li>Area 2 with explanation</li>
</ul>

<h3>Concrete Action Steps</h3>
<ol>
  <li><strong>Step title:</strong> detailed explanation</li>
  <li><strong>Step title:</strong> detailed explanation</li>
</ol>

<h3>Preparation Timeline</h3>
<ul>
  <li><strong>1-2 months:</strong> focus on...</li>
  <li><strong>2-3 months:</strong> apply...</li>
</ul>

Make sure the response contains only valid JSON, with no extra text."""


def truncate(text: str | None, limit: int) -> str:
    return (text or "")[:limit]


def _format_experience(item: Experience) -> str:
    if item.is_current:
        duration = f"since {item.start_date.year} (current)"
    else:
        end = str(item.end_date.year) if item.end_date else "present"
        duration = f"{item.start_date.year} - {end}"
    location = f" ({item.location})" if item.location else ""
    description = (
        f": {truncate(item.description, EXPERIENCE_DESCRIPTION_MAX_CHARS)}" if item.description else ""
    )
    return f"{item.title} at {item.company}{location} ({duration}){description}"


def _format_education(item: Education) -> str:
    degree_field = " ".join(part for part in (item.degree, item.field) if part)
    if item.is_current:
        duration = "ongoing"
    elif item.start_date and item.end_date:
        duration = f"{item.start_date.year} - {item.end_date.year}"
    else:
        duration = ""
    period = f" ({duration})" if duration else ""
    description = (
        f": {truncate(item.description, EDUCATION_DESCRIPTION_MAX_CHARS)}" if item.description else ""
    )
    return f"{degree_field} from {item.school}{period}{description}"


def _format_certification(item: Certification) -> str:
    expiry = f" (valid until {item.expiry_date.year})" if item.expiry_date else ""
    return f"{item.name} from {item.issuer} ({item.issue_date.year}){expiry}"


def _format_project(item: Project) -> str:
    description = (
        f": {truncate(item.description, PROJECT_DESCRIPTION_MAX_CHARS)}" if item.description else ""
    )
    return f"{item.name}{description}"


def _section(lines: list[str], empty: str) -> str:
    return "\n".join(lines) if lines else empty


def build_analysis_prompt(profile: ProfileBundle, job: JobSummary) -> str:
    skills = [
        f"- {skill.name} (level: {skill.level if skill.level is not None else 'N/A'})"
        for skill in profile.skills
    ]
    experiences = [_format_experience(item) for item in profile.experiences]
    educations = [_format_education(item) for item in profile.educations]
    certifications = [_format_certification(item) for item in profile.certifications]
    projects = [_format_project(item) for item in profile.projects]

    return f"""You are a career advisor who specializes in analyzing how well a candidate fits a job opening. The analysis must consider ALL aspects of the candidate profile comprehensively.

CANDIDATE PROFILE:

1. SKILLS ({len(profile.skills)} skills):
{_section(skills, "No skills listed")}

2. WORK EXPERIENCE ({len(profile.experiences)} entries):
{_section(experiences, "No work experience")}

3. EDUCATION ({len(profile.educations)} entries):
{_section(educations, "No education data")}

4. CERTIFICATIONS ({len(profile.certifications)} certifications):
{_section(certifications, "No certifications")}

5. PROJECTS ({len(profile.projects)} projects):
{_section(projects, "No projects")}

JOB OPENING:
- Position: {job.title}
- Description: {truncate(job.description_text, JOB_TEXT_MAX_CHARS)}
- Qualifications: {truncate(job.qualifications_text, JOB_TEXT_MAX_CHARS)}
- Required skills: {", ".join(job.required_skills)}

YOUR TASK:
Analyze the candidate's fit by considering:
1. Skills match (do the candidate's skills meet the requirements)
2. Work experience (how relevant the experience is to the position)
3. Education (whether the educational background fits)
4. Certifications (whether certifications are relevant and add value)
5. Projects (whether past projects are relevant)

{_OUTPUT_FORMAT}"""
