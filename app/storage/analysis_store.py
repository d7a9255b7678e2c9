from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timedelta

from app.schemas.analysis import AnalysisResult, MatchAnalysis, SkillGap
from app.storage.db import connect, utc_now


def _row_to_analysis(row: sqlite3.Row) -> MatchAnalysis:
    return MatchAnalysis(
        id=row["id"],
        user_id=row["user_id"],
        job_id=row["job_id"],
        match_score=row["match_score"],
        skill_gap=SkillGap.model_validate(json.loads(row["skill_gap_json"] or "{}")),
        recommendation=row["recommendation"],
        source=row["source"],
        analyzed_at=datetime.fromisoformat(row["analyzed_at"]),
    )


def _select(conn: sqlite3.Connection, user_id: str, job_id: int) -> sqlite3.Row | None:
    return conn.execute(
        """
        SELECT id, user_id, job_id, match_score, skill_gap_json, recommendation, source, analyzed_at
        FROM career_analyses
        WHERE user_id = ? AND job_id = ?
        """,
        (user_id, job_id),
    ).fetchone()


def upsert_analysis(user_id: str, job_id: int, result: AnalysisResult) -> MatchAnalysis:
    """Insert the analysis for (user, job) or replace every field of the existing row."""
    skill_gap_json = json.dumps(result.skill_gap.model_dump(), ensure_ascii=False)
    with connect() as conn:
        conn.execute("BEGIN IMMEDIATE")
        analyzed_at = utc_now()
        previous = _select(conn, user_id, job_id)
        if previous is not None:
            last = datetime.fromisoformat(previous["analyzed_at"])
            if analyzed_at <= last:
                analyzed_at = last + timedelta(microseconds=1)

        conn.execute(
            """
            INSERT INTO career_analyses (
                user_id, job_id, match_score, skill_gap_json, recommendation, source, analyzed_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (user_id, job_id) DO UPDATE SET
                match_score = excluded.match_score,
                skill_gap_json = excluded.skill_gap_json,
                recommendation = excluded.recommendation,
                source = excluded.source,
                analyzed_at = excluded.analyzed_at
            """,
            (
                user_id,
                job_id,
                result.match_score,
                skill_gap_json,
                result.recommendation,
                result.source,
                analyzed_at.isoformat(),
            ),
        )
        row = _select(conn, user_id, job_id)
    return _row_to_analysis(row)


def get_analysis(user_id: str, job_id: int) -> MatchAnalysis | None:
    with connect() as conn:
        row = _select(conn, user_id, job_id)
    return _row_to_analysis(row) if row is not None else None


def count_analyses(user_id: str, job_id: int) -> int:
    with connect() as conn:
        cur = conn.execute(
            "SELECT COUNT(*) FROM career_analyses WHERE user_id = ? AND job_id = ?",
            (user_id, job_id),
        )
        return int(cur.fetchone()[0])
