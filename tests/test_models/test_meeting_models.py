"""Tests for meeting models and the score band taxonomy."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from meeting_insights.models.meeting import MAX_COUNT, Meeting, MeetingInput
from meeting_insights.taxonomy.meeting_taxonomy import RecommendationType, ScoreBand


def test_meeting_input_defaults() -> None:
    m = MeetingInput()
    assert m.title == ""
    assert m.duration_minutes == 0
    assert m.date is None


def test_meeting_input_rejects_negative() -> None:
    with pytest.raises(ValidationError):
        MeetingInput(participants=-1)


def test_meeting_input_rejects_counts_beyond_sqlite_integer() -> None:
    with pytest.raises(ValidationError):
        MeetingInput(duration_minutes=MAX_COUNT + 1)
    assert MeetingInput(duration_minutes=MAX_COUNT).duration_minutes == MAX_COUNT


def test_meeting_input_is_frozen() -> None:
    m = MeetingInput(title="a")
    with pytest.raises(ValidationError):
        m.title = "b"


def test_meeting_from_input(sample_meeting_input) -> None:
    when = datetime(2025, 3, 5, tzinfo=timezone.utc)
    m = Meeting.from_input(7, sample_meeting_input, 100, when)

    assert m.meeting_id == 7
    assert m.title == sample_meeting_input.title
    assert m.date == when
    assert m.is_useful


@pytest.mark.parametrize("score", [-1, 101])
def test_meeting_score_bounds(sample_meeting_input, score: int) -> None:
    with pytest.raises(ValidationError):
        Meeting.from_input(1, sample_meeting_input, score, datetime.now(tz=timezone.utc))


@pytest.mark.parametrize(
    "score, band",
    [
        (100, ScoreBand.HIGH),
        (70, ScoreBand.HIGH),
        (69, ScoreBand.MEDIUM),
        (40, ScoreBand.MEDIUM),
        (39, ScoreBand.LOW),
        (0, ScoreBand.LOW),
    ],
)
def test_score_band(score: int, band: ScoreBand) -> None:
    assert ScoreBand.for_score(score) is band


def test_recommendation_type_values() -> None:
    assert [t.value for t in RecommendationType] == ["decline", "async", "optimize"]
