"""Tests for meeting_insights.analytics.scorer."""

from __future__ import annotations

import pytest

from meeting_insights.analytics.scorer import score_meeting, speaker_ratio
from meeting_insights.ingestion.meeting_csv import normalize_row
from meeting_insights.models.meeting import MeetingInput


def _input(**overrides) -> MeetingInput:
    fields = {
        "title": "t",
        "duration_minutes": 30,
        "participants": 4,
        "actual_speakers": 4,
        "decision_made": True,
    }
    fields.update(overrides)
    return MeetingInput(**fields)


# ── speaker_ratio ─────────────────────────────────────────────────────────────


def test_speaker_ratio_basic() -> None:
    assert speaker_ratio(3, 4) == pytest.approx(0.75)


def test_speaker_ratio_zero_participants() -> None:
    """No attendees means a ratio of 0, not a ZeroDivisionError."""
    assert speaker_ratio(0, 0) == 0.0
    assert speaker_ratio(3, 0) == 0.0


# ── score_meeting ─────────────────────────────────────────────────────────────


def test_boundary_row_scores_100(sample_row) -> None:
    """YES/1/no/false row with 3 of 4 speakers scores exactly 100."""
    meeting = normalize_row(sample_row, 1)
    assert (
        meeting.decision_made,
        meeting.agenda_provided,
        meeting.follow_up_sent,
        meeting.could_be_async,
    ) == (True, True, False, False)
    assert score_meeting(meeting) == 100


def test_score_clamped_at_100() -> None:
    """Every bonus at once would be 110; the result is capped."""
    meeting = _input(agenda_provided=True, follow_up_sent=True)
    assert score_meeting(meeting) == 100


def test_score_clamped_at_0() -> None:
    """Every penalty stacks to -20 before the clamp."""
    meeting = MeetingInput(
        duration_minutes=95,
        participants=16,
        actual_speakers=0,
        could_be_async=True,
    )
    assert score_meeting(meeting) == 0


def test_zero_participants_gets_low_engagement_penalty() -> None:
    """50 - 15 (no decision) - 10 (ratio 0) = 25."""
    assert score_meeting(MeetingInput()) == 25


@pytest.mark.parametrize(
    "participants, speakers, expected",
    [
        (10, 8, 90),   # 0.8  > 0.7 → +15
        (10, 7, 85),   # 0.7 is not > 0.7 → +10
        (4, 2, 80),    # 0.5 is not > 0.5 → +5
        (10, 3, 65),   # 0.3 is not > 0.3 → -10
    ],
)
def test_speaker_ratio_tiers_are_strict(participants: int, speakers: int, expected: int) -> None:
    meeting = _input(participants=participants, actual_speakers=speakers)
    assert score_meeting(meeting) == expected


def test_duration_penalties_stack() -> None:
    """A 95-minute meeting loses 5 + 10."""
    assert score_meeting(_input(duration_minutes=60)) == 90
    assert score_meeting(_input(duration_minutes=61)) == 85
    assert score_meeting(_input(duration_minutes=95)) == 75


def test_participant_penalties_stack() -> None:
    assert score_meeting(_input(participants=11, actual_speakers=11)) == 85
    assert score_meeting(_input(participants=16, actual_speakers=16)) == 75


def test_async_and_no_decision_penalties() -> None:
    """50 - 15 (no decision) + 15 (ratio 1.0) - 15 (async) = 35."""
    meeting = _input(decision_made=False, could_be_async=True)
    assert score_meeting(meeting) == 35


def test_score_is_deterministic(sample_meeting_input) -> None:
    scores = {score_meeting(sample_meeting_input) for _ in range(5)}
    assert scores == {100}


def test_score_ignores_title_and_date(sample_meeting_input) -> None:
    renamed = sample_meeting_input.model_copy(update={"title": "Other"})
    assert score_meeting(renamed) == score_meeting(sample_meeting_input)
