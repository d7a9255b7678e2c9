from __future__ import annotations

import sqlite3
from datetime import date, timedelta

from app.schemas.profile import (
    Certification,
    Education,
    Experience,
    ProfileBundle,
    Project,
    Skill,
)
from app.storage.db import connect, utc_now


def _to_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _from_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _load_skills(conn: sqlite3.Connection, user_id: str) -> list[Skill]:
    rows = conn.execute(
        "SELECT skill_name, level FROM user_skills WHERE user_id = ? ORDER BY id",
        (user_id,),
    ).fetchall()
    return [Skill(name=row["skill_name"], level=row["level"]) for row in rows]


def _load_experiences(conn: sqlite3.Connection, user_id: str) -> list[Experience]:
    rows = conn.execute(
        """
        SELECT title, company, location, start_date, end_date, is_current, description
        FROM user_experiences
        WHERE user_id = ?
        ORDER BY start_date DESC, id
        """,
        (user_id,),
    ).fetchall()
    return [
        Experience(
            title=row["title"],
            company=row["company"],
            location=row["location"],
            start_date=date.fromisoformat(row["start_date"]),
            end_date=_to_date(row["end_date"]),
            is_current=bool(row["is_current"]),
            description=row["description"],
        )
        for row in rows
    ]


def _load_educations(conn: sqlite3.Connection, user_id: str) -> list[Education]:
    # undated entries sort last, as NULLs do in a descending order
    rows = conn.execute(
        """
        SELECT school, degree, field, start_date, end_date, is_current, description
        FROM user_educations
        WHERE user_id = ?
        ORDER BY start_date IS NULL, start_date DESC, id
        """,
        (user_id,),
    ).fetchall()
    return [
        Education(
            school=row["school"],
            degree=row["degree"],
            field=row["field"],
            start_date=_to_date(row["start_date"]),
            end_date=_to_date(row["end_date"]),
            is_current=bool(row["is_current"]),
            description=row["description"],
        )
        for row in rows
    ]


def _load_certifications(conn: sqlite3.Connection, user_id: str) -> list[Certification]:
    rows = conn.execute(
        """
        SELECT name, issuer, issue_date, expiry_date
        FROM user_certifications
        WHERE user_id = ?
        ORDER BY issue_date DESC, id
        """,
        (user_id,),
    ).fetchall()
    return [
        Certification(
            name=row["name"],
            issuer=row["issuer"],
            issue_date=date.fromisoformat(row["issue_date"]),
            expiry_date=_to_date(row["expiry_date"]),
        )
        for row in rows
    ]


def _load_projects(conn: sqlite3.Connection, user_id: str) -> list[Project]:
    rows = conn.execute(
        """
        SELECT name, description
        FROM user_projects
        WHERE user_id = ?
        ORDER BY created_at DESC, id DESC
        """,
        (user_id,),
    ).fetchall()
    return [Project(name=row["name"], description=row["description"]) for row in rows]


def get_profile_bundle(user_id: str) -> ProfileBundle:
    """Collect every profile category for a user. Absent categories are empty lists."""
    with connect() as conn:
        return ProfileBundle(
            skills=_load_skills(conn, user_id),
            experiences=_load_experiences(conn, user_id),
            educations=_load_educations(conn, user_id),
            certifications=_load_certifications(conn, user_id),
            projects=_load_projects(conn, user_id),
        )


def save_profile_bundle(user_id: str, bundle: ProfileBundle) -> None:
    """Replace a user's whole profile. Used by seeding and tests; the CRUD API lives elsewhere."""
    with connect() as conn:
        for table in (
            "user_skills",
            "user_experiences",
            "user_educations",
            "user_certifications",
            "user_projects",
        ):
            conn.execute(f"DELETE FROM {table} WHERE user_id = ?", (user_id,))

        conn.executemany(
            "INSERT INTO user_skills (user_id, skill_name, level) VALUES (?, ?, ?)",
            [(user_id, skill.name, skill.level) for skill in bundle.skills],
        )
        conn.executemany(
            """
            INSERT INTO user_experiences (
                user_id, title, company, location, start_date, end_date, is_current, description
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    user_id,
                    item.title,
                    item.company,
                    item.location,
                    item.start_date.isoformat(),
                    _from_date(item.end_date),
                    1 if item.is_current else 0,
                    item.description,
                )
                for item in bundle.experiences
            ],
        )
        conn.executemany(
            """
            INSERT INTO user_educations (
                user_id, school, degree, field, start_date, end_date, is_current, description
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    user_id,
                    item.school,
                    item.degree,
                    item.field,
                    _from_date(item.start_date),
                    _from_date(item.end_date),
                    1 if item.is_current else 0,
                    item.description,
                )
                for item in bundle.educations
            ],
        )
        conn.executemany(
            """
            INSERT INTO user_certifications (user_id, name, issuer, issue_date, expiry_date)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                (
                    user_id,
                    item.name,
                    item.issuer,
                    item.issue_date.isoformat(),
                    _from_date(item.expiry_date),
                )
                for item in bundle.certifications
            ],
        )
        # projects come back newest first, so the first given gets the latest timestamp
        base = utc_now()
        count = len(bundle.projects)
        conn.executemany(
            "INSERT INTO user_projects (user_id, name, description, created_at) VALUES (?, ?, ?, ?)",
            [
                (
                    user_id,
                    item.name,
                    item.description,
                    (base + timedelta(microseconds=count - idx)).isoformat(),
                )
                for idx, item in enumerate(bundle.projects)
            ],
        )
