from __future__ import annotations

import sqlite3
from typing import Any

from app.core.config import settings
from app.storage.db import connect, utc_now


def log_ai_run(
    *,
    run_id: str,
    purpose: str,
    provider: str,
    model: str,
    status: str,
    error_code: str | None = None,
    latency_ms: int | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    with connect() as conn:
        conn.execute(
            """
            INSERT INTO ai_runs (
                created_at, run_id, purpose, provider, model, status, error_code, latency_ms
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                utc_now().isoformat(),
                run_id,
                purpose,
                provider,
                model,
                status,
                error_code,
                latency_ms,
            ),
        )


def purge_old_records() -> dict[str, int]:
    if not settings.analytics_enabled:
        return {"ai_runs": 0}

    retention = max(1, int(settings.analytics_retention_days))
    with connect() as conn:
        cur = conn.execute(
            "DELETE FROM ai_runs WHERE created_at < strftime('%Y-%m-%dT%H:%M:%S', 'now', ?)",
            (f"-{retention} days",),
        )
        return {"ai_runs": int(cur.rowcount or 0)}


def _row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    return {key: row[key] for key in row.keys()}


def get_ai_run_summary(limit: int = 20) -> dict[str, Any]:
    if not settings.analytics_enabled:
        return {"enabled": False}
    with connect() as conn:
        total = conn.execute("SELECT COUNT(*) FROM ai_runs").fetchone()[0]
        by_status = conn.execute(
            """
            SELECT purpose, status, COUNT(*) AS count, CAST(AVG(latency_ms) AS INTEGER) AS avg_latency_ms
            FROM ai_runs
            GROUP BY purpose, status
            ORDER BY purpose, status
            """
        ).fetchall()
        latest = conn.execute(
            """
            SELECT created_at, run_id, purpose, provider, model, status, error_code, latency_ms
            FROM ai_runs
            ORDER BY id DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()
    return {
        "enabled": True,
        "total": total,
        "by_status": [_row_to_dict(row) for row in by_status],
        "latest": [_row_to_dict(row) for row in latest],
    }
