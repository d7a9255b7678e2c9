from __future__ import annotations

import re
import sqlite3
import uuid
from datetime import datetime

from app.schemas.quest import (
    OPTION_LABELS,
    GeneratedOption,
    GeneratedQuest,
    Quest,
    QuestOption,
    QuestSubmission,
)
from app.storage.db import connect, utc_now

_XP_TAG = re.compile(r"\[xp:(\d+)\]", re.IGNORECASE)
_LEADING_XP_TAG = re.compile(r"^\s*\[xp:\d+\]\s*", re.IGNORECASE)


def serialize_option(option: GeneratedOption) -> str:
    return f"[xp:{option.xp}] {option.text}"


def parse_xp(value: str | None, fallback: int = 0) -> int:
    if not value:
        return fallback
    match = _XP_TAG.search(value)
    if not match:
        return fallback
    return int(match.group(1))


def option_display_text(value: str | None) -> str:
    return _LEADING_XP_TAG.sub("", value or "", count=1)


def _row_to_quest(row: sqlite3.Row) -> Quest:
    options = []
    explanations: dict[str, str | None] = {}
    for label in OPTION_LABELS:
        stored = row[f"option_{label.lower()}"]
        options.append(QuestOption(label=label, text=option_display_text(stored), xp=parse_xp(stored)))
        explanations[label] = row[f"explanation_{label.lower()}"]
    return Quest(
        id=row["id"],
        job_id=row["job_id"],
        title=row["title"],
        question=row["scenario"],
        options=options,
        correct_option=row["correct_option"],
        explanations=explanations,
        xp_reward=row["xp_reward"],
        generated_by_ai=bool(row["generated_by_ai"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def get_stored_option(quest_id: str, label: str) -> str | None:
    """Raw serialized option text, including its [xp:n] tag."""
    if label not in OPTION_LABELS:
        raise ValueError(f"Unknown option label '{label}'")
    column = f"option_{label.lower()}"
    with connect() as conn:
        row = conn.execute(f"SELECT {column} FROM quests WHERE id = ?", (quest_id,)).fetchone()
    return row[0] if row is not None else None


def create_quests(job_id: int, title: str, generated: list[GeneratedQuest]) -> list[Quest]:
    """Store a whole generated batch in one transaction."""
    created_at = utc_now().isoformat()
    ids = [uuid.uuid4().hex for _ in generated]
    with connect() as conn:
        conn.executemany(
            """
            INSERT INTO quests (
                id, job_id, title, scenario, option_a, option_b, option_c,
                explanation_a, explanation_b, explanation_c,
                correct_option, xp_reward, generated_by_ai, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    quest_id,
                    job_id,
                    title,
                    quest.question,
                    serialize_option(quest.option("A")),
                    serialize_option(quest.option("B")),
                    serialize_option(quest.option("C")),
                    quest.option("A").explanation,
                    quest.option("B").explanation,
                    quest.option("C").explanation,
                    quest.answer,
                    quest.xp_reward,
                    1,
                    created_at,
                )
                for quest_id, quest in zip(ids, generated)
            ],
        )
        placeholders = ", ".join("?" for _ in ids)
        rows = conn.execute(f"SELECT * FROM quests WHERE id IN ({placeholders})", ids).fetchall()

    by_id = {row["id"]: _row_to_quest(row) for row in rows}
    return [by_id[quest_id] for quest_id in ids]


def list_recent_quests(job_id: int, limit: int) -> list[Quest]:
    with connect() as conn:
        rows = conn.execute(
            """
            SELECT * FROM quests
            WHERE job_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (job_id, limit),
        ).fetchall()
    return [_row_to_quest(row) for row in rows]


def get_quest(quest_id: str) -> Quest | None:
    with connect() as conn:
        row = conn.execute("SELECT * FROM quests WHERE id = ?", (quest_id,)).fetchone()
    return _row_to_quest(row) if row is not None else None


def _row_to_submission(row: sqlite3.Row, correct_option: str) -> QuestSubmission:
    return QuestSubmission(
        quest_id=row["quest_id"],
        user_id=row["user_id"],
        status=row["status"],
        score=row["score"],
        xp_earned=row["xp_earned"],
        selected_option=row["selected_option"],
        feedback=row["feedback"],
        completed_at=datetime.fromisoformat(row["completed_at"]),
        is_correct=row["status"] == "completed",
        correct_option=correct_option,
    )


def upsert_submission(
    *,
    user_id: str,
    quest: Quest,
    status: str,
    score: int,
    xp_earned: int,
    selected_option: str,
    feedback: str,
) -> QuestSubmission:
    """Keep only the latest answer of a user to a quest."""
    with connect() as conn:
        conn.execute(
            """
            INSERT INTO user_quests (
                user_id, quest_id, status, score, xp_earned, selected_option, feedback, completed_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (user_id, quest_id) DO UPDATE SET
                status = excluded.status,
                score = excluded.score,
                xp_earned = excluded.xp_earned,
                selected_option = excluded.selected_option,
                feedback = excluded.feedback,
                completed_at = excluded.completed_at
            """,
            (
                user_id,
                quest.id,
                status,
                score,
                xp_earned,
                selected_option,
                feedback,
                utc_now().isoformat(),
            ),
        )
        row = conn.execute(
            "SELECT * FROM user_quests WHERE user_id = ? AND quest_id = ?",
            (user_id, quest.id),
        ).fetchone()
    return _row_to_submission(row, quest.correct_option)


def get_submissions(user_id: str, quests: list[Quest]) -> list[QuestSubmission]:
    """Submissions of a user for the given quests, newest first."""
    if not quests:
        return []
    correct = {quest.id: quest.correct_option for quest in quests}
    placeholders = ", ".join("?" for _ in quests)
    with connect() as conn:
        rows = conn.execute(
            f"""
            SELECT * FROM user_quests
            WHERE user_id = ? AND quest_id IN ({placeholders})
            ORDER BY completed_at DESC
            """,
            (user_id, *correct.keys()),
        ).fetchall()
    return [_row_to_submission(row, correct[row["quest_id"]]) for row in rows]


def count_submissions(user_id: str, quest_id: str) -> int:
    with connect() as conn:
        cur = conn.execute(
            "SELECT COUNT(*) FROM user_quests WHERE user_id = ? AND quest_id = ?",
            (user_id, quest_id),
        )
        return int(cur.fetchone()[0])
