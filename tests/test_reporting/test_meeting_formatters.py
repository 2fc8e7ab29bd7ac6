"""Tests for meeting_insights.reporting.formatters."""

from __future__ import annotations

import pytest

from meeting_insights.analytics.aggregator import breakdown_metrics, summarize
from meeting_insights.analytics.recommender import recommend
from meeting_insights.models.analytics import MeetingSummary, TrendPoint
from meeting_insights.reporting.formatters import (
    format_meeting_detail,
    format_meeting_table,
    format_metrics,
    format_minutes_to_hours,
    format_recommendations,
    format_summary,
    format_trends,
)


# ── format_minutes_to_hours ───────────────────────────────────────────────────


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, "0 min"),
        (45, "45 min"),
        (60, "1 hour"),
        (90, "1 hour 30 min"),
        (120, "2 hours"),
        (150, "2 hours 30 min"),
    ],
)
def test_format_minutes_to_hours(minutes: int, expected: str) -> None:
    assert format_minutes_to_hours(minutes) == expected


# ── Summary / metrics / trends ────────────────────────────────────────────────


def test_format_summary_empty() -> None:
    text = format_summary(MeetingSummary())
    assert "Meeting Summary" in text
    assert "no meetings imported" in text


def test_format_summary_values(make_meeting) -> None:
    meetings = [
        make_meeting(usefulness_score=80, duration_minutes=60),
        make_meeting(usefulness_score=30, duration_minutes=90, could_be_async=True),
    ]
    text = format_summary(summarize(meetings))

    assert "Total meetings     : 2" in text
    assert "Useful meetings    : 1 (50%)" in text
    assert "Time to reclaim    : 1.5h" in text
    assert "Async candidates   : 1" in text


def test_format_metrics_bars(make_meeting) -> None:
    meetings = [make_meeting(decision_made=True), make_meeting()]
    text = format_metrics(breakdown_metrics(meetings))

    assert "Decisions made    50%  ##########" in text
    assert "Could be async     0%" in text


def test_format_trends_empty() -> None:
    assert "no dated meetings" in format_trends([])


def test_format_trends_lines() -> None:
    trends = [
        TrendPoint(week="Week 10", week_number=10, usefulness_percentage=100),
        TrendPoint(week="Week 11", week_number=11, usefulness_percentage=0),
    ]
    lines = format_trends(trends).splitlines()
    assert lines[-2].startswith("  Week 10    100%")
    assert lines[-1].rstrip() == "  Week 11      0%"


# ── Recommendations ───────────────────────────────────────────────────────────


def test_format_recommendations_empty() -> None:
    assert "No meetings need attention." in format_recommendations([])


def test_format_recommendations_content(make_meeting) -> None:
    recs = recommend(
        [make_meeting(title="Status Update", usefulness_score=35, participants=9)]
    )
    text = format_recommendations(recs)

    assert "1. [DECLINE]" in text
    assert "Status Update" in text
    assert "(30 min, 9 participants)" in text
    assert "-> Request an agenda or clear purpose before accepting" in text


# ── Meeting tables ────────────────────────────────────────────────────────────


def test_format_meeting_table_empty() -> None:
    assert "no meetings imported" in format_meeting_table([])


def test_format_meeting_table_rows(make_meeting) -> None:
    meetings = [
        make_meeting(title="Planning", usefulness_score=85),
        make_meeting(title="Retro", usefulness_score=55),
        make_meeting(title="Sync", usefulness_score=10),
    ]
    text = format_meeting_table(meetings)

    assert "[HIGH]" in text
    assert "[MEDIUM]" in text
    assert "[LOW]" in text
    assert "2025-03-12" in text
    assert "showing" not in text


def test_format_meeting_table_truncates(make_meeting) -> None:
    meetings = [make_meeting() for _ in range(5)]
    text = format_meeting_table(meetings, top_n=2)
    assert "showing 2 of 5 meetings" in text


def test_format_meeting_detail(make_meeting) -> None:
    meeting = make_meeting(title="", duration_minutes=75, decision_made=True)
    text = format_meeting_detail(meeting)

    assert f"Meeting #{meeting.meeting_id}" in text
    assert "(untitled)" in text
    assert "1 hour 15 min" in text
    assert "Decision made   : yes" in text
    assert "Could be async  : no" in text
    assert "50/100 [MEDIUM]" in text
