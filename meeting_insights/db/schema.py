"""
SQLite schema DDL for the meeting store.

All statements use ``IF NOT EXISTS`` so ``apply_schema()`` is **idempotent**:
safe to call on an already-initialized database (e.g. on every CLI start or
in tests).

Tables:
  1. meetings : one row per imported meeting, with its usefulness score.

``meeting_id`` uses ``AUTOINCREMENT`` so ids never repeat while rows exist;
``MeetingRepository.clear()`` resets the counter in ``sqlite_sequence``.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# ── DDL statements ─────────────────────────────────────────────────────────────

_DDL_MEETINGS = """
CREATE TABLE IF NOT EXISTS meetings (
    meeting_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    title             TEXT    NOT NULL,
    duration_minutes  INTEGER NOT NULL CHECK (duration_minutes >= 0),
    participants      INTEGER NOT NULL CHECK (participants >= 0),
    actual_speakers   INTEGER NOT NULL CHECK (actual_speakers >= 0),
    decision_made     INTEGER NOT NULL DEFAULT 0,
    agenda_provided   INTEGER NOT NULL DEFAULT 0,
    follow_up_sent    INTEGER NOT NULL DEFAULT 0,
    could_be_async    INTEGER NOT NULL DEFAULT 0,
    meeting_date      TEXT    NOT NULL,
    usefulness_score  INTEGER NOT NULL CHECK (usefulness_score BETWEEN 0 AND 100),
    created_at        TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""

_DDL_MEETINGS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_meetings_date
    ON meetings(meeting_date);
CREATE INDEX IF NOT EXISTS idx_meetings_score
    ON meetings(usefulness_score);
"""

_ALL_DDL: list[str] = [
    _DDL_MEETINGS,
    _DDL_MEETINGS_INDEXES,
]

ALL_TABLE_NAMES: list[str] = [
    "meetings",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes.

    Idempotent: safe to call on an already-initialized database.

    Args:
        conn: An open ``sqlite3.Connection``.
    """
    logger.debug("Applying schema to database...")

    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.info("Schema applied: %d table(s), indexes created/verified.", len(ALL_TABLE_NAMES))


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return the table names present in the database, sorted."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]
