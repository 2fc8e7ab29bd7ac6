"""
Date helpers for meeting import and weekly trend bucketing.

Week numbers
------------
Trend buckets use a simple week-of-year number rather than ISO-8601 weeks::

    week = ceil((days_since_jan1 + jan1_weekday + 1) / 7)

where ``jan1_weekday`` is Sunday-indexed (Sunday = 0 ... Saturday = 6).
Weeks therefore start on Sunday and January 1st is always in week 1.
The year is not part of the key: 2 January 2025 and 2 January 2026 share
week 1.

Random import dates
-------------------
Undated CSV rows are spread over the last ``window_days`` days so that the
weekly trend chart has distinguishable buckets. The clock and the random
source are always passed in so tests can pin both.
"""

from __future__ import annotations

import math
import random
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(tz=timezone.utc)


def sunday_weekday(d: date) -> int:
    """Return the weekday of ``d`` with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def week_number(when: date | datetime) -> int:
    """Return the Sunday-based week-of-year number for ``when`` (1..54).

    Args:
        when: A date or datetime; only the calendar date is used.

    Returns:
        Week number as defined in the module docstring.
    """
    day = when.date() if isinstance(when, datetime) else when
    jan1 = date(day.year, 1, 1)
    days_since_jan1 = (day - jan1).days
    return math.ceil((days_since_jan1 + sunday_weekday(jan1) + 1) / 7)


def start_of_day(when: datetime) -> datetime:
    """Truncate ``when`` to midnight, keeping its timezone."""
    return when.replace(hour=0, minute=0, second=0, microsecond=0)


def random_past_date(
    now: datetime,
    window_days: int,
    rng: Optional[random.Random] = None,
) -> datetime:
    """Return midnight of a day chosen uniformly from the last ``window_days`` days.

    Today counts as one of the days, so the offset is in ``[0, window_days - 1]``.

    Args:
        now: Reference "current" time.
        window_days: Size of the window in days (>= 1).
        rng: Random source; a fresh unseeded ``random.Random`` if omitted.

    Raises:
        ValueError: If ``window_days < 1``.
    """
    if window_days < 1:
        raise ValueError(f"window_days must be >= 1, got {window_days}.")
    rng = rng or random.Random()
    offset = rng.randrange(window_days)
    return start_of_day(now) - timedelta(days=offset)


def parse_meeting_date(value: str) -> datetime:
    """Parse an ISO date or datetime string from a CSV ``Date`` column.

    Plain dates become midnight UTC. Datetimes without an offset are taken as
    UTC. A trailing ``Z`` is accepted.

    Raises:
        ValueError: If the string is not ISO 8601.
    """
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(
            f"Invalid date '{value}'. Expected ISO 8601, e.g. '2025-03-14' "
            "or '2025-03-14T10:00:00Z'."
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
