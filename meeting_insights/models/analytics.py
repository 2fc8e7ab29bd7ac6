"""
Analytics output models: the views derived from a collection of meetings.

None of these are persisted. They are rebuilt from the full record set on
every ``get_analytics()`` call. All models are frozen.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from meeting_insights.models.meeting import Meeting
from meeting_insights.taxonomy.meeting_taxonomy import RecommendationType


class MeetingSummary(BaseModel):
    """Headline numbers for the dashboard summary cards.

    Attributes:
        total_meetings: Number of records.
        useful_meetings: Records scoring >= 70.
        useful_meetings_percentage: ``useful / total`` as a whole percentage.
        time_saved_hours: Hours spent in meetings scoring < 50, one decimal.
        async_candidates: Records flagged ``could_be_async``.
        hours_per_week: Total meeting hours over a fixed 4-week window, one decimal.
    """

    model_config = ConfigDict(frozen=True)

    total_meetings: int = 0
    useful_meetings: int = 0
    useful_meetings_percentage: int = 0
    time_saved_hours: float = 0.0
    async_candidates: int = 0
    hours_per_week: float = 0.0


class MeetingMetrics(BaseModel):
    """Whole-number percentages of meetings meeting each good-practice criterion."""

    model_config = ConfigDict(frozen=True)

    decisions_percentage: int = 0
    actions_percentage: int = 0
    agendas_percentage: int = 0
    follow_ups_percentage: int = 0
    async_percentage: int = 0


class TrendPoint(BaseModel):
    """Share of useful meetings within one week bucket."""

    model_config = ConfigDict(frozen=True)

    week: str
    week_number: int
    usefulness_percentage: int = Field(ge=0, le=100)


class MeetingRecommendation(BaseModel):
    """A suggestion for one meeting.

    ``recommendation_id`` is a 1-based position in the recommendation list and
    is unrelated to the source meeting's id.
    """

    model_config = ConfigDict(frozen=True)

    recommendation_id: int
    title: str
    duration_minutes: int
    participants: int
    recommendation_type: RecommendationType
    reason: str
    suggestion: Optional[str] = None


class MeetingAnalytics(BaseModel):
    """Composite dashboard view over the full record set."""

    model_config = ConfigDict(frozen=True)

    summary: MeetingSummary
    metrics: MeetingMetrics
    trends: list[TrendPoint]
    recommendations: list[MeetingRecommendation]
    records: list[Meeting]
