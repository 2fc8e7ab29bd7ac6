"""
Meeting models: normalized CSV input and the persisted, scored record.

``MeetingInput`` is what the row normalizer produces from one CSV row.
``Meeting`` is the stored record: the same fields plus the store-assigned
``meeting_id``, a concrete ``date`` and the ``usefulness_score`` computed once
at creation time.

Both models are frozen. Aggregation never mutates a ``Meeting``; it always
builds new output models (see ``models/analytics.py``).

Numeric fields must be whole numbers in ``[0, MAX_COUNT]``, the range a
SQLite INTEGER column stores. The normalizer defaults missing values to 0 and
the scorer guards ``participants == 0``. ``actual_speakers`` is not
cross-checked against ``participants`` here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from meeting_insights.taxonomy.meeting_taxonomy import USEFUL_SCORE_THRESHOLD, ScoreBand

# Largest value a SQLite INTEGER column can hold.
MAX_COUNT = 2**63 - 1


class MeetingInput(BaseModel):
    """A validated, typed meeting row ready for scoring.

    Attributes:
        title: Meeting title (may be empty).
        duration_minutes: Length of the meeting in minutes.
        participants: Number of invitees who attended.
        actual_speakers: Number of attendees who spoke.
        decision_made: A decision was reached.
        agenda_provided: An agenda was shared beforehand.
        follow_up_sent: Notes or actions were sent afterwards.
        could_be_async: The organiser judged it replaceable by async work.
        date: When the meeting happened, or ``None`` to let the store assign one.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    duration_minutes: int = Field(default=0, ge=0, le=MAX_COUNT)
    participants: int = Field(default=0, ge=0, le=MAX_COUNT)
    actual_speakers: int = Field(default=0, ge=0, le=MAX_COUNT)
    decision_made: bool = False
    agenda_provided: bool = False
    follow_up_sent: bool = False
    could_be_async: bool = False
    date: Optional[datetime] = None


class Meeting(BaseModel):
    """A persisted meeting record with its immutable usefulness score.

    Attributes:
        meeting_id: Store-assigned id, unique and increasing until the store
            is cleared.
        date: Meeting date (assigned at creation if the input had none).
        usefulness_score: Heuristic score in [0, 100].
        (remaining fields as in ``MeetingInput``)
    """

    model_config = ConfigDict(frozen=True)

    meeting_id: int
    title: str
    duration_minutes: int = Field(ge=0, le=MAX_COUNT)
    participants: int = Field(ge=0, le=MAX_COUNT)
    actual_speakers: int = Field(ge=0, le=MAX_COUNT)
    decision_made: bool
    agenda_provided: bool
    follow_up_sent: bool
    could_be_async: bool
    date: datetime
    usefulness_score: int = Field(ge=0, le=100)

    @classmethod
    def from_input(
        cls,
        meeting_id: int,
        meeting_input: MeetingInput,
        usefulness_score: int,
        date: datetime,
    ) -> "Meeting":
        """Build a record from a normalized input and store-assigned values."""
        return cls(
            meeting_id=meeting_id,
            title=meeting_input.title,
            duration_minutes=meeting_input.duration_minutes,
            participants=meeting_input.participants,
            actual_speakers=meeting_input.actual_speakers,
            decision_made=meeting_input.decision_made,
            agenda_provided=meeting_input.agenda_provided,
            follow_up_sent=meeting_input.follow_up_sent,
            could_be_async=meeting_input.could_be_async,
            date=date,
            usefulness_score=usefulness_score,
        )

    @property
    def is_useful(self) -> bool:
        return self.usefulness_score >= USEFUL_SCORE_THRESHOLD

    @property
    def score_band(self) -> ScoreBand:
        return ScoreBand.for_score(self.usefulness_score)
