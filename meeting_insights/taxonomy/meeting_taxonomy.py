"""
Meeting taxonomy: recommendation categories and usefulness score bands.

  - ``RecommendationType``: what the dashboard suggests doing with a meeting.
  - ``ScoreBand``: coarse colour band for a usefulness score.

This module has NO imports from any other ``meeting_insights`` package.
"""

from enum import StrEnum

USEFUL_SCORE_THRESHOLD = 70
"""Scores at or above this value count as a useful meeting."""

MEDIUM_SCORE_THRESHOLD = 40


class RecommendationType(StrEnum):
    """Action suggested for a low- or medium-value meeting."""

    DECLINE = "decline"
    """Low value, crowded, no decision: ask for a purpose before accepting."""

    ASYNC = "async"
    """Could be handled with a document or chat thread instead."""

    OPTIMIZE = "optimize"
    """Worth keeping, but shorter."""


class ScoreBand(StrEnum):
    """Usefulness band shown next to a score (dot colour in the dashboard)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def for_score(cls, score: int) -> "ScoreBand":
        """Return the band for a usefulness score in [0, 100]."""
        if score >= USEFUL_SCORE_THRESHOLD:
            return cls.HIGH
        if score >= MEDIUM_SCORE_THRESHOLD:
            return cls.MEDIUM
        return cls.LOW
