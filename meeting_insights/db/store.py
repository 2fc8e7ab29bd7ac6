"""
Storage contract shared by the SQLite repository and the in-memory store.

The store owns record identity: it assigns ``meeting_id`` values that are
unique and increasing for the store's lifetime and restart at 1 only after
``clear()``. Callers never choose ids.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from meeting_insights.models.meeting import Meeting, MeetingInput


class MeetingStore(Protocol):
    """Persistence backend for scored meetings."""

    def insert(
        self,
        meeting_input: MeetingInput,
        usefulness_score: int,
        date: datetime,
    ) -> Meeting:
        ...

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        ...

    def get_all(self) -> list[Meeting]:
        ...

    def count(self) -> int:
        ...

    def clear(self) -> None:
        ...


class IdSequence:
    """Monotonic id generator owned by a store instance.

    >>> seq = IdSequence()
    >>> seq.next(), seq.next()
    (1, 2)
    >>> seq.reset(); seq.next()
    1
    """

    def __init__(self, start: int = 1) -> None:
        self._start = start
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        return self._next

    def reset(self) -> None:
        self._next = self._start
