"""
Meeting import: normalize, score and store a batch of raw CSV rows.

Import flow
-----------
1. Normalize every row independently (``normalize_rows``). Bad rows become
   ``"Row N: reason"`` warnings; the batch carries on.
2. If no row survived, raise ``BatchRejectedError`` and leave the store as it
   was (no clear, no inserts).
3. If ``clear_existing``, wipe the store (ids restart at 1).
4. For each good row, in file order: pick a date (the row's own, or a random
   day in the configured window), score it once, insert it.

The clock and random source are parameters so tests can pin dates.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from meeting_insights.analytics.scorer import score_meeting
from meeting_insights.db.store import MeetingStore
from meeting_insights.ingestion.meeting_csv import normalize_rows
from meeting_insights.models.meeting import Meeting, MeetingInput
from meeting_insights.utils.time_utils import Clock, random_past_date, utcnow

logger = logging.getLogger(__name__)

DEFAULT_DATE_WINDOW_DAYS = 30


class BatchRejectedError(ValueError):
    """No row in an import batch passed validation.

    Attributes:
        warnings: Per-row failure messages (may be empty for an empty batch).
    """

    def __init__(self, warnings: list[str]) -> None:
        self.warnings = list(warnings)
        if warnings:
            msg = f"CSV validation failed: all {len(warnings)} row(s) were rejected."
        else:
            msg = "CSV validation failed: no data rows found."
        super().__init__(msg)


@dataclass
class ImportResult:
    """Outcome of a successful import.

    Attributes:
        created_count: Meetings written to the store.
        warnings: Messages for rows that were skipped.
        meetings: The created records, in file order.
    """

    created_count: int
    warnings: list[str] = field(default_factory=list)
    meetings: list[Meeting] = field(default_factory=list)


def create_meeting(
    store: MeetingStore,
    meeting_input: MeetingInput,
    clock: Clock = utcnow,
    rng: Optional[random.Random] = None,
    date_window_days: int = DEFAULT_DATE_WINDOW_DAYS,
) -> Meeting:
    """Score and store a single normalized meeting.

    Args:
        store: Destination store (assigns the id).
        meeting_input: Normalized meeting.
        clock: Returns "now"; used only when the input has no date.
        rng: Random source for undated inputs.
        date_window_days: Spread for undated inputs.

    Returns:
        The stored ``Meeting``.
    """
    date = meeting_input.date or random_past_date(clock(), date_window_days, rng)
    return store.insert(meeting_input, score_meeting(meeting_input), date)


def import_batch(
    store: MeetingStore,
    raw_rows: Iterable[Any],
    clear_existing: bool = False,
    clock: Clock = utcnow,
    rng: Optional[random.Random] = None,
    date_window_days: int = DEFAULT_DATE_WINDOW_DAYS,
) -> ImportResult:
    """Import raw CSV rows into ``store``.

    Args:
        store: Destination store.
        raw_rows: Header-keyed row mappings in file order.
        clear_existing: Remove every existing meeting first.
        clock: Returns "now" for undated rows.
        rng: Random source for undated rows; one ``random.Random`` is shared
            across the whole batch.
        date_window_days: Undated rows land within this many days of ``clock()``.

    Returns:
        ``ImportResult`` with the created count and any row warnings.

    Raises:
        BatchRejectedError: If no row validated. The store is untouched.
    """
    normalized = normalize_rows(raw_rows)

    if not normalized.inputs:
        logger.error(
            "Import rejected: 0 valid rows, %d warning(s).", len(normalized.warnings)
        )
        raise BatchRejectedError(normalized.warnings)

    if clear_existing:
        store.clear()

    rng = rng or random.Random()
    created = [
        create_meeting(store, meeting_input, clock, rng, date_window_days)
        for meeting_input in normalized.inputs
    ]

    logger.info(
        "Imported %d meeting(s) (%d row warning(s), clear_existing=%s).",
        len(created), len(normalized.warnings), clear_existing,
    )
    return ImportResult(
        created_count=len(created),
        warnings=normalized.warnings,
        meetings=created,
    )
