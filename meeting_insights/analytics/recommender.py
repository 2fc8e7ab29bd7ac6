"""
Meeting recommendations: pick a few meetings to decline, move async, or shorten.

Selection rules (each applied independently to the full record set)
--------------------------------------------------------------------
    ASYNC    : could_be_async  AND  score < 60  AND  participants > 5
    DECLINE  : score < 40  AND  participants > 8  AND  NOT decision_made
    OPTIMIZE : 40 <= score < 70  AND  duration_minutes > 45

Each rule keeps the first ``MAX_PER_CATEGORY`` matches in input order. The
categories are not de-duplicated against each other, so one meeting can
appear as both an async and a decline candidate. Output order is all async
suggestions, then decline, then optimize, numbered 1, 2, 3, ...

A meeting scoring 70 or more never matches any rule.
"""

from __future__ import annotations

from typing import Callable, Iterable

from meeting_insights.models.analytics import MeetingRecommendation
from meeting_insights.models.meeting import Meeting
from meeting_insights.taxonomy.meeting_taxonomy import RecommendationType

MAX_PER_CATEGORY = 2

ASYNC_MAX_SCORE = 60
ASYNC_MIN_PARTICIPANTS = 5
DECLINE_MAX_SCORE = 40
DECLINE_MIN_PARTICIPANTS = 8
OPTIMIZE_MIN_SCORE = 40
OPTIMIZE_MAX_SCORE = 70
OPTIMIZE_MIN_DURATION = 45
MIN_FOCUSED_AGENDA_MINUTES = 15

ASYNC_SUGGESTION = "Use a collaborative document, project task, or chat thread instead."
DECLINE_SUGGESTION = "Request an agenda or clear purpose before accepting"


def is_async_candidate(m: Meeting) -> bool:
    return (
        m.could_be_async
        and m.usefulness_score < ASYNC_MAX_SCORE
        and m.participants > ASYNC_MIN_PARTICIPANTS
    )


def is_decline_candidate(m: Meeting) -> bool:
    return (
        m.usefulness_score < DECLINE_MAX_SCORE
        and m.participants > DECLINE_MIN_PARTICIPANTS
        and not m.decision_made
    )


def is_optimize_candidate(m: Meeting) -> bool:
    return (
        OPTIMIZE_MIN_SCORE <= m.usefulness_score < OPTIMIZE_MAX_SCORE
        and m.duration_minutes > OPTIMIZE_MIN_DURATION
    )


def focused_agenda_minutes(duration_minutes: int) -> int:
    """Half the current length, but never below 15 minutes."""
    return max(MIN_FOCUSED_AGENDA_MINUTES, duration_minutes // 2)


def build_reason(m: Meeting, rec_type: RecommendationType) -> tuple[str, str]:
    """Return the ``(reason, suggestion)`` text for one meeting and category.

    The wording is fixed; dashboards match on it.
    """
    if rec_type == RecommendationType.ASYNC:
        return (
            f"Low engagement ({m.actual_speakers} of {m.participants} participants spoke) "
            "and no decisions made.",
            ASYNC_SUGGESTION,
        )
    if rec_type == RecommendationType.DECLINE:
        return (
            f"Low value score ({m.usefulness_score}%), too many participants "
            f"({m.participants}) and no decisions made.",
            DECLINE_SUGGESTION,
        )
    return (
        f"Meeting length ({m.duration_minutes} mins) could be reduced while "
        "maintaining its value.",
        f"Suggest a focused {focused_agenda_minutes(m.duration_minutes)}-minute agenda",
    )


_RULES: tuple[tuple[RecommendationType, Callable[[Meeting], bool]], ...] = (
    (RecommendationType.ASYNC, is_async_candidate),
    (RecommendationType.DECLINE, is_decline_candidate),
    (RecommendationType.OPTIMIZE, is_optimize_candidate),
)


def recommend(meetings: Iterable[Meeting]) -> list[MeetingRecommendation]:
    """Build the recommendation list for the dashboard.

    Args:
        meetings: All scored meetings, in store order.

    Returns:
        Up to ``3 * MAX_PER_CATEGORY`` recommendations; empty for no meetings.
    """
    records = list(meetings)
    recommendations: list[MeetingRecommendation] = []

    for rec_type, matches in _RULES:
        candidates = [m for m in records if matches(m)][:MAX_PER_CATEGORY]
        for m in candidates:
            reason, suggestion = build_reason(m, rec_type)
            recommendations.append(
                MeetingRecommendation(
                    recommendation_id=len(recommendations) + 1,
                    title=m.title,
                    duration_minutes=m.duration_minutes,
                    participants=m.participants,
                    recommendation_type=rec_type,
                    reason=reason,
                    suggestion=suggestion,
                )
            )

    return recommendations
