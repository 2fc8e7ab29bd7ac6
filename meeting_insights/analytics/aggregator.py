"""
Aggregations over a collection of scored meetings.

Every function takes the full record set (any iterable of ``Meeting``), is
pure, and returns a fresh output model. An empty collection is valid input
and yields the zero-valued structure.

Rounding
--------
Percentages and hour figures use ``round_half_up`` (``2.5 → 3``), not
Python's banker's rounding, so published numbers match the dashboard
exactly::

    useful_meetings_percentage = round_half_up(useful / total * 100)
    time_saved_hours           = round_half_up(low_value_minutes / 6) / 10
    hours_per_week             = round_half_up(total_minutes / 60 / 4 * 10) / 10

``hours_per_week`` assumes the data covers a fixed 4-week window.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Iterator

from meeting_insights.models.analytics import MeetingMetrics, MeetingSummary, TrendPoint
from meeting_insights.models.meeting import Meeting
from meeting_insights.utils.math_utils import percentage, round_half_up, round_one_decimal
from meeting_insights.utils.time_utils import week_number

LOW_VALUE_SCORE_THRESHOLD = 50
OBSERVATION_WINDOW_WEEKS = 4


def summarize(meetings: Iterable[Meeting]) -> MeetingSummary:
    """Compute the headline summary for the dashboard cards.

    Args:
        meetings: All scored meetings.

    Returns:
        ``MeetingSummary``; all zeros for an empty collection.
    """
    records = list(meetings)
    total = len(records)

    useful = sum(1 for m in records if m.is_useful)
    async_candidates = sum(1 for m in records if m.could_be_async)

    low_value_minutes = sum(
        m.duration_minutes for m in records
        if m.usefulness_score < LOW_VALUE_SCORE_THRESHOLD
    )
    total_minutes = sum(m.duration_minutes for m in records)

    return MeetingSummary(
        total_meetings=total,
        useful_meetings=useful,
        useful_meetings_percentage=percentage(useful, total),
        time_saved_hours=round_half_up(low_value_minutes / 6) / 10,
        async_candidates=async_candidates,
        hours_per_week=round_one_decimal(total_minutes / 60 / OBSERVATION_WINDOW_WEEKS),
    )


def breakdown_metrics(meetings: Iterable[Meeting]) -> MeetingMetrics:
    """Compute the per-criterion percentage breakdown.

    "Actions" has no column of its own; a meeting counts as producing actions
    when it reached a decision or sent a follow-up.

    Args:
        meetings: All scored meetings.

    Returns:
        ``MeetingMetrics``; all zeros for an empty collection.
    """
    records = list(meetings)
    total = len(records)
    if total == 0:
        return MeetingMetrics()

    decisions = sum(1 for m in records if m.decision_made)
    actions = sum(1 for m in records if m.decision_made or m.follow_up_sent)
    agendas = sum(1 for m in records if m.agenda_provided)
    follow_ups = sum(1 for m in records if m.follow_up_sent)
    async_count = sum(1 for m in records if m.could_be_async)

    return MeetingMetrics(
        decisions_percentage=percentage(decisions, total),
        actions_percentage=percentage(actions, total),
        agendas_percentage=percentage(agendas, total),
        follow_ups_percentage=percentage(follow_ups, total),
        async_percentage=percentage(async_count, total),
    )


def group_by_week(meetings: Iterable[Meeting]) -> dict[int, list[Meeting]]:
    """Bucket meetings by ``week_number(meeting.date)``, preserving input order."""
    by_week: dict[int, list[Meeting]] = defaultdict(list)
    for m in meetings:
        by_week[week_number(m.date)].append(m)
    return dict(by_week)


def compute_trends(meetings: Iterable[Meeting]) -> Iterator[TrendPoint]:
    """Yield the share of useful meetings per populated week, oldest week first.

    The grouping is done eagerly when this function is called; the returned
    generator only formats points. Calling again on the same input yields the
    same sequence.

    Args:
        meetings: All scored meetings.

    Returns:
        Iterator of ``TrendPoint`` labelled ``"Week {n}"``, ascending by ``n``.
    """
    by_week = group_by_week(meetings)
    return _trend_points(by_week)


def _trend_points(by_week: dict[int, list[Meeting]]) -> Iterator[TrendPoint]:
    for week in sorted(by_week):
        bucket = by_week[week]
        useful = sum(1 for m in bucket if m.is_useful)
        yield TrendPoint(
            week=f"Week {week}",
            week_number=week,
            usefulness_percentage=percentage(useful, len(bucket)),
        )
