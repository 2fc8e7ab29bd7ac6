"""
Usefulness scoring: a fixed additive heuristic over one meeting's fields.

Score formula (integer, clamped to 0–100)
-----------------------------------------
Start at 50, then apply every rule below in order::

    decision made                     +25   (otherwise −15)
    speaker ratio > 0.7               +15
                  > 0.5               +10
                  > 0.3                +5
                  otherwise           −10
    agenda provided                   +10
    follow-up sent                    +10
    could be async                    −15
    duration > 60 min                  −5
    duration > 90 min                 −10   (on top of the −5)
    participants > 10                  −5
    participants > 15                 −10   (on top of the −5)

Speaker ratio is ``actual_speakers / participants``; with zero participants
the ratio is 0. Duration and participant penalties stack, so a 95-minute
meeting loses 15 points. The result is clamped only once, at the end.

Pure functions, no DB or I/O.
"""

from __future__ import annotations

from meeting_insights.models.meeting import MeetingInput

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

DECISION_BONUS = 25
NO_DECISION_PENALTY = 15

# (ratio must exceed, points); first match wins
_SPEAKER_RATIO_TIERS: tuple[tuple[float, int], ...] = (
    (0.7, 15),
    (0.5, 10),
    (0.3, 5),
)
LOW_ENGAGEMENT_PENALTY = 10

AGENDA_BONUS = 10
FOLLOW_UP_BONUS = 10
ASYNC_PENALTY = 15

LONG_MEETING_MINUTES = 60
LONG_MEETING_PENALTY = 5
VERY_LONG_MEETING_MINUTES = 90
VERY_LONG_MEETING_PENALTY = 10

LARGE_MEETING_PARTICIPANTS = 10
LARGE_MEETING_PENALTY = 5
VERY_LARGE_MEETING_PARTICIPANTS = 15
VERY_LARGE_MEETING_PENALTY = 10


def speaker_ratio(actual_speakers: int, participants: int) -> float:
    """Return the share of participants who spoke; 0.0 when nobody attended."""
    if participants == 0:
        return 0.0
    return actual_speakers / participants


def score_meeting(meeting: MeetingInput) -> int:
    """Compute the usefulness score for a normalized meeting.

    Deterministic: the same input always yields the same score.

    Args:
        meeting: Normalized meeting fields.

    Returns:
        Integer score in [0, 100].
    """
    score = BASE_SCORE

    if meeting.decision_made:
        score += DECISION_BONUS
    else:
        score -= NO_DECISION_PENALTY

    score += _engagement_points(speaker_ratio(meeting.actual_speakers, meeting.participants))

    if meeting.agenda_provided:
        score += AGENDA_BONUS
    if meeting.follow_up_sent:
        score += FOLLOW_UP_BONUS

    if meeting.could_be_async:
        score -= ASYNC_PENALTY

    if meeting.duration_minutes > LONG_MEETING_MINUTES:
        score -= LONG_MEETING_PENALTY
    if meeting.duration_minutes > VERY_LONG_MEETING_MINUTES:
        score -= VERY_LONG_MEETING_PENALTY

    if meeting.participants > LARGE_MEETING_PARTICIPANTS:
        score -= LARGE_MEETING_PENALTY
    if meeting.participants > VERY_LARGE_MEETING_PARTICIPANTS:
        score -= VERY_LARGE_MEETING_PENALTY

    return _clamp(score, MIN_SCORE, MAX_SCORE)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _engagement_points(ratio: float) -> int:
    for threshold, points in _SPEAKER_RATIO_TIERS:
        if ratio > threshold:
            return points
    return -LOW_ENGAGEMENT_PENALTY


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))
