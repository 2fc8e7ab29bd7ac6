"""
In-memory meeting store.

Used by the test suite and by ``import-meetings --dry-run`` to score a file
without touching the database.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from meeting_insights.db.store import IdSequence
from meeting_insights.models.meeting import Meeting, MeetingInput

logger = logging.getLogger(__name__)


class InMemoryMeetingStore:
    """Dict-backed ``MeetingStore``.

    Args:
        sequence: Id generator; a fresh ``IdSequence`` starting at 1 if omitted.
    """

    def __init__(self, sequence: Optional[IdSequence] = None) -> None:
        self._sequence = sequence or IdSequence()
        self._meetings: dict[int, Meeting] = {}

    def insert(
        self,
        meeting_input: MeetingInput,
        usefulness_score: int,
        date: datetime,
    ) -> Meeting:
        meeting = Meeting.from_input(
            meeting_id=self._sequence.next(),
            meeting_input=meeting_input,
            usefulness_score=usefulness_score,
            date=date,
        )
        self._meetings[meeting.meeting_id] = meeting
        return meeting

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        return self._meetings.get(meeting_id)

    def get_all(self) -> list[Meeting]:
        return [self._meetings[k] for k in sorted(self._meetings)]

    def count(self) -> int:
        return len(self._meetings)

    def clear(self) -> None:
        removed = len(self._meetings)
        self._meetings.clear()
        self._sequence.reset()
        logger.info("Cleared %d meeting(s) from memory store.", removed)
