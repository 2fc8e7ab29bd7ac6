"""
Repository for scored meetings: the SQLite ``MeetingStore``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from meeting_insights.db.repositories.base import BaseRepository
from meeting_insights.models.meeting import Meeting, MeetingInput

logger = logging.getLogger(__name__)


class MeetingRepository(BaseRepository):
    """Read/write access to the ``meetings`` table.

    There is no update: a meeting's fields and score are fixed once inserted.
    """

    def insert(
        self,
        meeting_input: MeetingInput,
        usefulness_score: int,
        date: datetime,
    ) -> Meeting:
        """Insert a scored meeting and return the stored record.

        Args:
            meeting_input: Normalized fields.
            usefulness_score: Score computed for this input.
            date: Meeting date to persist.

        Returns:
            The ``Meeting`` with its newly assigned ``meeting_id``.
        """
        cursor = self.execute(
            """
            INSERT INTO meetings (
                title, duration_minutes, participants, actual_speakers,
                decision_made, agenda_provided, follow_up_sent, could_be_async,
                meeting_date, usefulness_score
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (
                meeting_input.title,
                meeting_input.duration_minutes,
                meeting_input.participants,
                meeting_input.actual_speakers,
                int(meeting_input.decision_made),
                int(meeting_input.agenda_provided),
                int(meeting_input.follow_up_sent),
                int(meeting_input.could_be_async),
                date.isoformat(),
                usefulness_score,
            ),
        )
        return Meeting.from_input(
            meeting_id=cursor.lastrowid,  # type: ignore[arg-type]
            meeting_input=meeting_input,
            usefulness_score=usefulness_score,
            date=date,
        )

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        """Fetch one meeting, or ``None`` if no such id exists."""
        row = self.fetchone(
            "SELECT * FROM meetings WHERE meeting_id = ?;", (meeting_id,)
        )
        return _row_to_meeting(row) if row else None

    def get_all(self) -> list[Meeting]:
        """Fetch every meeting in id (insertion) order."""
        rows = self.fetchall("SELECT * FROM meetings ORDER BY meeting_id;")
        return [_row_to_meeting(r) for r in rows]

    def count(self) -> int:
        """Return the number of stored meetings."""
        return int(self.scalar("SELECT COUNT(*) FROM meetings;") or 0)

    def clear(self) -> None:
        """Delete every meeting and restart ids at 1.

        Safe to call on an empty table.
        """
        removed = self.count()
        self.execute("DELETE FROM meetings;")
        self.execute("DELETE FROM sqlite_sequence WHERE name = 'meetings';")
        logger.info("Cleared %d meeting(s) from database.", removed)


# ── Private helper ────────────────────────────────────────────────────────────

def _row_to_meeting(row: sqlite3.Row) -> Meeting:
    """Convert a ``meetings`` row to a ``Meeting``."""
    return Meeting(
        meeting_id=row["meeting_id"],
        title=row["title"],
        duration_minutes=row["duration_minutes"],
        participants=row["participants"],
        actual_speakers=row["actual_speakers"],
        decision_made=bool(row["decision_made"]),
        agenda_provided=bool(row["agenda_provided"]),
        follow_up_sent=bool(row["follow_up_sent"]),
        could_be_async=bool(row["could_be_async"]),
        date=datetime.fromisoformat(row["meeting_date"]),
        usefulness_score=row["usefulness_score"],
    )
