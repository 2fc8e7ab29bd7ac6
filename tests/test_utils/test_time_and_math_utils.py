"""Tests for meeting_insights.utils.time_utils and utils.math_utils."""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta, timezone

import pytest

from meeting_insights.utils.math_utils import percentage, round_half_up, round_one_decimal
from meeting_insights.utils.time_utils import (
    parse_meeting_date,
    random_past_date,
    sunday_weekday,
    week_number,
)


# ── week_number ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2025, 1, 1), 1),    # Wednesday
        (date(2025, 1, 4), 1),    # Saturday, end of week 1
        (date(2025, 1, 5), 2),    # Sunday starts week 2
        (date(2025, 3, 5), 10),
        (date(2025, 3, 12), 11),
        (date(2025, 12, 31), 53),
        (date(2023, 1, 7), 1),    # year starting on a Sunday
        (date(2023, 1, 8), 2),
    ],
)
def test_week_number(day: date, expected: int) -> None:
    assert week_number(day) == expected


def test_week_number_accepts_datetime() -> None:
    assert week_number(datetime(2025, 3, 12, 23, 59, tzinfo=timezone.utc)) == 11


def test_sunday_weekday() -> None:
    assert sunday_weekday(date(2025, 3, 9)) == 0   # Sunday
    assert sunday_weekday(date(2025, 3, 15)) == 6  # Saturday


# ── random_past_date ──────────────────────────────────────────────────────────


def test_random_past_date_in_window() -> None:
    now = datetime(2025, 3, 12, 15, 30, tzinfo=timezone.utc)
    midnight = datetime(2025, 3, 12, tzinfo=timezone.utc)
    rng = random.Random(0)
    for _ in range(50):
        d = random_past_date(now, 7, rng)
        assert midnight - timedelta(days=6) <= d <= midnight


def test_random_past_date_rejects_empty_window() -> None:
    with pytest.raises(ValueError, match="window_days"):
        random_past_date(datetime.now(tz=timezone.utc), 0)


# ── parse_meeting_date ────────────────────────────────────────────────────────


def test_parse_meeting_date_variants() -> None:
    utc = timezone.utc
    assert parse_meeting_date("2025-03-05") == datetime(2025, 3, 5, tzinfo=utc)
    assert parse_meeting_date(" 2025-03-05T10:00:00Z ") == datetime(2025, 3, 5, 10, tzinfo=utc)
    offset = parse_meeting_date("2025-03-05T10:00:00+02:00")
    assert offset == datetime(2025, 3, 5, 8, tzinfo=utc)


def test_parse_meeting_date_invalid() -> None:
    with pytest.raises(ValueError, match="Invalid date"):
        parse_meeting_date("05/03/2025")


# ── math_utils ────────────────────────────────────────────────────────────────


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(0.0) == 0


def test_round_one_decimal() -> None:
    assert round_one_decimal(0.5625) == pytest.approx(0.6)
    assert round_one_decimal(1.25) == pytest.approx(1.3)


def test_percentage() -> None:
    assert percentage(1, 8) == 13
    assert percentage(2, 3) == 67
    assert percentage(5, 0) == 0
