from __future__ import annotations

from app.schemas.profile import JobSummary
from app.storage.db import connect, utc_now


def get_job_summary(job_id: int) -> JobSummary | None:
    with connect() as conn:
        row = conn.execute(
            "SELECT title, description_text, qualifications_text FROM jobs WHERE id = ?",
            (job_id,),
        ).fetchone()
        if row is None:
            return None
        skills = conn.execute(
            "SELECT skill_name FROM job_skills WHERE job_id = ? ORDER BY id",
            (job_id,),
        ).fetchall()

    return JobSummary(
        title=row["title"],
        description_text=row["description_text"] or "",
        qualifications_text=row["qualifications_text"] or "",
        required_skills=[skill["skill_name"] for skill in skills],
    )


def create_job(job: JobSummary) -> int:
    with connect() as conn:
        cur = conn.execute(
            """
            INSERT INTO jobs (title, description_text, qualifications_text, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (job.title, job.description_text, job.qualifications_text, utc_now().isoformat()),
        )
        job_id = int(cur.lastrowid)
        conn.executemany(
            "INSERT INTO job_skills (job_id, skill_name) VALUES (?, ?)",
            [(job_id, skill) for skill in job.required_skills],
        )
    return job_id
