"""
Analytics read path: one composite view over the current record set.
"""

from __future__ import annotations

import logging
from typing import Optional

from meeting_insights.analytics.aggregator import breakdown_metrics, compute_trends, summarize
from meeting_insights.analytics.recommender import recommend
from meeting_insights.db.store import MeetingStore
from meeting_insights.models.analytics import MeetingAnalytics
from meeting_insights.models.meeting import Meeting

logger = logging.getLogger(__name__)


def build_analytics(meetings: list[Meeting]) -> MeetingAnalytics:
    """Run every aggregation over an already-loaded list of meetings."""
    return MeetingAnalytics(
        summary=summarize(meetings),
        metrics=breakdown_metrics(meetings),
        trends=list(compute_trends(meetings)),
        recommendations=recommend(meetings),
        records=meetings,
    )


def get_analytics(store: MeetingStore) -> MeetingAnalytics:
    """Load all meetings from ``store`` and build the dashboard view."""
    meetings = store.get_all()
    analytics = build_analytics(meetings)
    logger.info(
        "Analytics built over %d meeting(s): %d trend point(s), %d recommendation(s).",
        len(meetings), len(analytics.trends), len(analytics.recommendations),
    )
    return analytics


def get_meeting(store: MeetingStore, meeting_id: int) -> Optional[Meeting]:
    """Return one meeting, or ``None`` when the id does not exist."""
    return store.get_by_id(meeting_id)
