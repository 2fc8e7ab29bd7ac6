"""
Shared pytest fixtures for the Meeting Insights test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the schema
    applied. Created anew for each test that requests it.
  - ``memory_store``: An empty ``InMemoryMeetingStore``.
  - ``fixed_clock``: A clock pinned to Wednesday 2025-03-12 15:30 UTC.
  - ``restore_root_logger``: Undoes ``configure_logging()`` after CLI tests.
  - Sample domain object factories for use in multiple test modules.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Callable, Generator

import pytest

from meeting_insights.db.memory_store import InMemoryMeetingStore
from meeting_insights.db.schema import apply_schema
from meeting_insights.models.meeting import Meeting, MeetingInput

FIXED_NOW = datetime(2025, 3, 12, 15, 30, tzinfo=timezone.utc)


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the schema applied.

    Connection is closed after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def memory_store() -> InMemoryMeetingStore:
    return InMemoryMeetingStore()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


# ── Sample domain object factories ────────────────────────────────────────────

@pytest.fixture
def sample_row() -> dict[str, str]:
    """A raw CSV row as ``csv.DictReader`` would yield it."""
    return {
        "Meeting_Title": "Weekly Sync",
        "Duration_Minutes": "30",
        "Participants": "4",
        "Actual_Speakers": "3",
        "Decision_Made": "YES",
        "Agenda_Provided": "1",
        "Follow_Up_Sent": "no",
        "Could_Be_Async": "false",
    }


@pytest.fixture
def sample_meeting_input() -> MeetingInput:
    """A valid ``MeetingInput`` for testing (scores 100)."""
    return MeetingInput(
        title="Weekly Sync",
        duration_minutes=30,
        participants=4,
        actual_speakers=3,
        decision_made=True,
        agenda_provided=True,
        follow_up_sent=False,
        could_be_async=False,
    )


@pytest.fixture
def make_meeting() -> Callable[..., Meeting]:
    """Factory for ``Meeting`` records with an explicit score.

    Every field has a neutral default; pass keyword overrides as needed.
    """
    counter = {"next_id": 1}

    def _make(**overrides) -> Meeting:
        fields = {
            "meeting_id": counter["next_id"],
            "title": f"Meeting {counter['next_id']}",
            "duration_minutes": 30,
            "participants": 4,
            "actual_speakers": 2,
            "decision_made": False,
            "agenda_provided": False,
            "follow_up_sent": False,
            "could_be_async": False,
            "date": FIXED_NOW,
            "usefulness_score": 50,
        }
        fields.update(overrides)
        counter["next_id"] += 1
        return Meeting(**fields)

    return _make


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Undo ``configure_logging()`` root-handler changes after the test."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
