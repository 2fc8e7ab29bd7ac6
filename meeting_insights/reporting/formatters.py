"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept analytics models / meeting lists and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Score bands
-----------
Meeting tables tag each score with its band so the useful meetings stand out::

  82  [HIGH]
  55  [MEDIUM]
  20  [LOW]
"""

from __future__ import annotations

from meeting_insights.models.analytics import (
    MeetingMetrics,
    MeetingRecommendation,
    MeetingSummary,
    TrendPoint,
)
from meeting_insights.models.meeting import Meeting


# ── Durations ────────────────────────────────────────────────────────────────


def format_minutes_to_hours(minutes: int) -> str:
    """Render a duration as ``"45 min"``, ``"2 hours"`` or ``"1 hour 30 min"``."""
    hours, remaining = divmod(minutes, 60)
    if hours == 0:
        return f"{remaining} min"
    unit = "hour" if hours == 1 else "hours"
    if remaining == 0:
        return f"{hours} {unit}"
    return f"{hours} {unit} {remaining} min"


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


# ── Summary and metrics ──────────────────────────────────────────────────────


def format_summary(summary: MeetingSummary) -> str:
    """Format the headline summary cards.

    Args:
        summary: Output of ``summarize()``.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Meeting Summary ===")
    if summary.total_meetings == 0:
        lines.append("  (no meetings imported -- run 'import-meetings' first)")
        return "\n".join(lines)

    lines.append(f"  Total meetings     : {summary.total_meetings}")
    lines.append(
        f"  Useful meetings    : {summary.useful_meetings} "
        f"({summary.useful_meetings_percentage}%)"
    )
    lines.append(f"  Time to reclaim    : {summary.time_saved_hours:.1f}h")
    lines.append(f"  Async candidates   : {summary.async_candidates}")
    lines.append(f"  Hours per week     : {summary.hours_per_week:.1f}h")
    return "\n".join(lines)


def format_metrics(metrics: MeetingMetrics) -> str:
    """Format the per-criterion percentages as a small bar chart."""
    rows = [
        ("Decisions made", metrics.decisions_percentage),
        ("Action items", metrics.actions_percentage),
        ("Agenda provided", metrics.agendas_percentage),
        ("Follow-up sent", metrics.follow_ups_percentage),
        ("Could be async", metrics.async_percentage),
    ]
    lines: list[str] = ["", "=== Meeting Practices ==="]
    for label, pct in rows:
        bar = "#" * (pct // 5)
        lines.append(f"  {label:<16} {pct:>3}%  {bar}")
    return "\n".join(lines)


def format_trends(trends: list[TrendPoint]) -> str:
    """Format the weekly usefulness trend, oldest week first."""
    lines: list[str] = ["", "=== Usefulness Trend ==="]
    if not trends:
        lines.append("  (no dated meetings)")
        return "\n".join(lines)
    for point in trends:
        bar = "#" * (point.usefulness_percentage // 5)
        lines.append(f"  {point.week:<10} {point.usefulness_percentage:>3}%  {bar}")
    return "\n".join(lines)


# ── Recommendations ──────────────────────────────────────────────────────────


def format_recommendations(recommendations: list[MeetingRecommendation]) -> str:
    """Format recommendations grouped in the order they were produced.

    Args:
        recommendations: Output of ``recommend()``.

    Returns:
        Multi-line string.
    """
    lines: list[str] = ["", "=== Recommendations ==="]
    if not recommendations:
        lines.append("  No meetings need attention.")
        return "\n".join(lines)

    for rec in recommendations:
        tag = f"[{rec.recommendation_type.value.upper()}]"
        lines.append("")
        lines.append(
            f"  {rec.recommendation_id}. {tag:<10} {rec.title}"
            f"  ({format_minutes_to_hours(rec.duration_minutes)}, "
            f"{rec.participants} participants)"
        )
        lines.append(f"     {rec.reason}")
        if rec.suggestion:
            lines.append(f"     -> {rec.suggestion}")
    return "\n".join(lines)


# ── Meeting tables ───────────────────────────────────────────────────────────


def format_meeting_table(meetings: list[Meeting], top_n: int = 50) -> str:
    """Format stored meetings as a fixed-width table.

    Args:
        meetings: Records in store order.
        top_n: Maximum rows to print.

    Returns:
        Multi-line string.
    """
    lines: list[str] = ["", "=== Meetings ==="]
    if not meetings:
        lines.append("  (no meetings imported -- run 'import-meetings' first)")
        return "\n".join(lines)

    header = (
        f"  {'ID':>4}  {'Date':<10}  {'Title':<30}  {'Length':>14}  "
        f"{'People':>6}  {'Score':>5}  {'Band':<8}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for m in meetings[:top_n]:
        lines.append(
            f"  {m.meeting_id:>4}  {m.date.date().isoformat():<10}  {m.title[:30]:<30}  "
            f"{format_minutes_to_hours(m.duration_minutes):>14}  {m.participants:>6}  "
            f"{m.usefulness_score:>5}  [{m.score_band.value.upper()}]"
        )

    if len(meetings) > top_n:
        lines.append(f"  ... showing {top_n} of {len(meetings)} meetings (use --top-n N)")
    return "\n".join(lines)


def format_meeting_detail(meeting: Meeting) -> str:
    """Format every field of a single meeting."""
    lines = [
        "",
        f"=== Meeting #{meeting.meeting_id} ===",
        f"  Title           : {meeting.title or '(untitled)'}",
        f"  Date            : {meeting.date.isoformat()}",
        f"  Duration        : {format_minutes_to_hours(meeting.duration_minutes)}",
        f"  Participants    : {meeting.participants}",
        f"  Actual speakers : {meeting.actual_speakers}",
        f"  Decision made   : {_yes_no(meeting.decision_made)}",
        f"  Agenda provided : {_yes_no(meeting.agenda_provided)}",
        f"  Follow-up sent  : {_yes_no(meeting.follow_up_sent)}",
        f"  Could be async  : {_yes_no(meeting.could_be_async)}",
        f"  Usefulness      : {meeting.usefulness_score}/100 "
        f"[{meeting.score_band.value.upper()}]",
    ]
    return "\n".join(lines)
