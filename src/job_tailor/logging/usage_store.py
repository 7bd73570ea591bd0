"""SQLite-backed usage log storage."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from job_tailor.logging.models import UsageLog

DEFAULT_DB_PATH = Path.home() / ".job-tailor" / "usage.db"


class UsageStore:
    """SQLite-backed store for request usage logs with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS usage_logs (
                    id TEXT PRIMARY KEY,
                    session_id TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    mode TEXT NOT NULL,
                    model TEXT,
                    score INTEGER,
                    elapsed_seconds REAL NOT NULL DEFAULT 0.0,
                    input_tokens INTEGER NOT NULL DEFAULT 0,
                    output_tokens INTEGER NOT NULL DEFAULT 0,
                    success INTEGER NOT NULL DEFAULT 1,
                    error_message TEXT
                )
            """)

    def save_log(self, log: UsageLog) -> None:
        """Persist a usage log entry."""
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO usage_logs
                   (id, session_id, timestamp, mode, model, score,
                    elapsed_seconds, input_tokens, output_tokens,
                    success, error_message)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    log.id,
                    log.session_id,
                    log.timestamp.isoformat(),
                    log.mode,
                    log.model,
                    log.score,
                    log.elapsed_seconds,
                    log.input_tokens,
                    log.output_tokens,
                    1 if log.success else 0,
                    log.error_message,
                ),
            )

    def get_logs(self, mode: str | None = None, limit: int = 100) -> list[UsageLog]:
        """Return the most recent logs, newest first."""
        query = "SELECT * FROM usage_logs"
        params: list = []
        if mode:
            query += " WHERE mode = ?"
            params.append(mode)
        query += " ORDER BY timestamp DESC LIMIT ?"
        params.append(limit)

        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_log(r) for r in rows]

    def get_stats(self) -> dict:
        """Aggregate counts and token totals."""
        with self._connect() as conn:
            row = conn.execute("""
                SELECT COUNT(*),
                       COALESCE(SUM(success), 0),
                       COALESCE(SUM(input_tokens), 0),
                       COALESCE(SUM(output_tokens), 0),
                       AVG(score)
                FROM usage_logs
            """).fetchone()
        total, succeeded, input_tokens, output_tokens, avg_score = row
        return {
            "total": total,
            "succeeded": succeeded,
            "failed": total - succeeded,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "avg_score": round(avg_score, 1) if avg_score is not None else None,
        }

    @staticmethod
    def _row_to_log(row: sqlite3.Row) -> UsageLog:
        return UsageLog(
            id=row["id"],
            session_id=row["session_id"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            mode=row["mode"],
            model=row["model"],
            score=row["score"],
            elapsed_seconds=row["elapsed_seconds"],
            input_tokens=row["input_tokens"],
            output_tokens=row["output_tokens"],
            success=bool(row["success"]),
            error_message=row["error_message"],
        )
