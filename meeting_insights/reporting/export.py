"""
Export helpers for dashboards and manual analysis.

``export`` writes three files: the analytics JSON plus one CSV each for
meetings and recommendations. The ``flatten_*`` helpers turn models into flat
rows with yes/no flags, and both writers return the path they wrote.

``analytics_to_dict()`` is the wire adapter: it turns a ``MeetingAnalytics``
into the camelCase JSON the web dashboard reads.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from meeting_insights.models.analytics import MeetingAnalytics, MeetingRecommendation
from meeting_insights.models.meeting import Meeting

MEETING_EXPORT_COLUMNS = [
    "id",
    "title",
    "durationMinutes",
    "participants",
    "actualSpeakers",
    "decisionMade",
    "agendaProvided",
    "followUpSent",
    "couldBeAsync",
    "date",
    "usefulnessScore",
]

RECOMMENDATION_EXPORT_COLUMNS = [
    "id",
    "title",
    "durationMinutes",
    "participants",
    "recommendationType",
    "reason",
    "suggestion",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write flattened meeting or recommendation rows as CSV.

    With ``fieldnames`` (``MEETING_EXPORT_COLUMNS`` or
    ``RECOMMENDATION_EXPORT_COLUMNS``) the header is written even for an
    empty store, so a spreadsheet import keeps its columns. Without them the
    first row decides the columns, and no rows means an empty file. Keys not
    in the column list are dropped.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = fieldnames or (list(records[0]) if records else [])
    if not columns:
        path.write_text("", encoding="utf-8")
        return path
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Dump an ``analytics_to_dict()`` payload (or any JSON-able value) to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


# ── Wire shape ───────────────────────────────────────────────────────────────


def meeting_to_dict(meeting: Meeting) -> dict[str, Any]:
    """One meeting in camelCase with an ISO-8601 date."""
    return {
        "id": meeting.meeting_id,
        "title": meeting.title,
        "durationMinutes": meeting.duration_minutes,
        "participants": meeting.participants,
        "actualSpeakers": meeting.actual_speakers,
        "decisionMade": meeting.decision_made,
        "agendaProvided": meeting.agenda_provided,
        "followUpSent": meeting.follow_up_sent,
        "couldBeAsync": meeting.could_be_async,
        "date": meeting.date.isoformat(),
        "usefulnessScore": meeting.usefulness_score,
    }


def recommendation_to_dict(rec: MeetingRecommendation) -> dict[str, Any]:
    return {
        "id": rec.recommendation_id,
        "title": rec.title,
        "durationMinutes": rec.duration_minutes,
        "participants": rec.participants,
        "recommendationType": rec.recommendation_type.value,
        "reason": rec.reason,
        "suggestion": rec.suggestion,
    }


def analytics_to_dict(analytics: MeetingAnalytics) -> dict[str, Any]:
    """Convert the composite analytics view to its camelCase wire dict.

    ``TrendPoint.week_number`` is a sort key only and is not emitted.
    """
    s = analytics.summary
    m = analytics.metrics
    return {
        "summary": {
            "totalMeetings": s.total_meetings,
            "usefulMeetings": s.useful_meetings,
            "usefulMeetingsPercentage": s.useful_meetings_percentage,
            "timeSavedHours": s.time_saved_hours,
            "asyncCandidates": s.async_candidates,
            "hoursPerWeek": s.hours_per_week,
        },
        "metrics": {
            "decisionsPercentage": m.decisions_percentage,
            "actionsPercentage": m.actions_percentage,
            "agendasPercentage": m.agendas_percentage,
            "followUpsPercentage": m.follow_ups_percentage,
            "asyncPercentage": m.async_percentage,
        },
        "trends": [
            {"week": t.week, "usefulnessPercentage": t.usefulness_percentage}
            for t in analytics.trends
        ],
        "recommendations": [recommendation_to_dict(r) for r in analytics.recommendations],
        "records": [meeting_to_dict(r) for r in analytics.records],
    }


def flatten_meetings_for_export(meetings: list[Meeting]) -> list[dict]:
    """One flat CSV row per meeting, booleans written as ``yes``/``no``."""
    rows: list[dict] = []
    for meeting in meetings:
        row = meeting_to_dict(meeting)
        for key in ("decisionMade", "agendaProvided", "followUpSent", "couldBeAsync"):
            row[key] = "yes" if row[key] else "no"
        rows.append(row)
    return rows


def flatten_recommendations_for_export(
    recommendations: list[MeetingRecommendation],
) -> list[dict]:
    """One flat CSV row per recommendation; a missing suggestion becomes ``""``."""
    rows: list[dict] = []
    for rec in recommendations:
        row = recommendation_to_dict(rec)
        row["suggestion"] = row["suggestion"] or ""
        rows.append(row)
    return rows
