from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from app.core.config import settings

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS jobs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description_text TEXT NOT NULL DEFAULT '',
        qualifications_text TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS job_skills (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        job_id INTEGER NOT NULL REFERENCES jobs (id) ON DELETE CASCADE,
        skill_name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_skills (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        skill_name TEXT NOT NULL,
        level INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_experiences (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        company TEXT NOT NULL,
        location TEXT,
        start_date TEXT NOT NULL,
        end_date TEXT,
        is_current INTEGER NOT NULL DEFAULT 0,
        description TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_educations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        school TEXT NOT NULL,
        degree TEXT,
        field TEXT,
        start_date TEXT,
        end_date TEXT,
        is_current INTEGER NOT NULL DEFAULT 0,
        description TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_certifications (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        issuer TEXT NOT NULL,
        issue_date TEXT NOT NULL,
        expiry_date TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        description TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS career_analyses (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        job_id INTEGER NOT NULL,
        match_score INTEGER NOT NULL,
        skill_gap_json TEXT NOT NULL,
        recommendation TEXT NOT NULL,
        source TEXT NOT NULL,
        analyzed_at TEXT NOT NULL,
        UNIQUE (user_id, job_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS quests (
        id TEXT PRIMARY KEY,
        job_id INTEGER NOT NULL,
        title TEXT NOT NULL,
        scenario TEXT NOT NULL,
        option_a TEXT NOT NULL,
        option_b TEXT NOT NULL,
        option_c TEXT NOT NULL,
        explanation_a TEXT,
        explanation_b TEXT,
        explanation_c TEXT,
        correct_option TEXT NOT NULL,
        xp_reward INTEGER NOT NULL,
        generated_by_ai INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_quests_job_created
    ON quests (job_id, created_at)
    """,
    """
    CREATE TABLE IF NOT EXISTS user_quests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        quest_id TEXT NOT NULL REFERENCES quests (id) ON DELETE CASCADE,
        status TEXT NOT NULL,
        score INTEGER NOT NULL,
        xp_earned INTEGER NOT NULL,
        selected_option TEXT NOT NULL,
        feedback TEXT NOT NULL,
        completed_at TEXT NOT NULL,
        UNIQUE (user_id, quest_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ai_runs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created_at TEXT NOT NULL,
        run_id TEXT NOT NULL,
        purpose TEXT NOT NULL,
        provider TEXT NOT NULL,
        model TEXT NOT NULL,
        status TEXT NOT NULL,
        error_code TEXT,
        latency_ms INTEGER
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_ai_runs_created_at
    ON ai_runs (created_at)
    """,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _get_db_path() -> Path:
    return Path(settings.database_path)


@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    """Open a connection that commits on success and rolls back on error."""
    db_path = _get_db_path()
    conn = sqlite3.connect(db_path, timeout=5)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON;")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with connect() as conn:
        conn.execute("PRAGMA journal_mode=WAL;")
        for statement in _SCHEMA:
            conn.execute(statement)
