"""
CSV reader and row normalizer for meeting exports.

Format: comma delimited, with a header row. Expected columns::

  Meeting_Title, Duration_Minutes, Participants, Actual_Speakers,
  Decision_Made, Agenda_Provided, Follow_Up_Sent, Could_Be_Async

Optional column:
  Date  → ISO 8601 date or datetime; the store assigns one when empty.

Header names may carry surrounding whitespace; keys are trimmed before lookup.

Missing values:
  A missing or empty value (``None``, ``""``, ``0``, ``False``) falls back to
  0 for numbers, ``False`` for booleans and ``""`` for the title. Nothing is
  required; a row only fails when a value is present but unusable.

Numeric columns (Duration_Minutes, Participants, Actual_Speakers):
  Strings are trimmed and parsed; ints and floats are accepted as-is.
  Integer strings are parsed exactly. Non-numeric, non-finite, negative,
  fractional and oversized (above ``MAX_COUNT``) values fail the row.

Boolean columns (Decision_Made, Agenda_Provided, Follow_Up_Sent, Could_Be_Async):
  yes/true (any case) or the literal 1  → True
  any other string                       → False
  Python bools pass through; the number 1 is True, other numbers False.

Rows are validated independently. ``normalize_rows()`` collects a warning per
failed row and keeps going; deciding whether a batch with failures is still
acceptable is up to the caller (see ``pipeline/importer.py``).
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from meeting_insights.models.meeting import MAX_COUNT, MeetingInput
from meeting_insights.utils.time_utils import parse_meeting_date

logger = logging.getLogger(__name__)

TITLE_COLUMN = "Meeting_Title"
DURATION_COLUMN = "Duration_Minutes"
PARTICIPANTS_COLUMN = "Participants"
SPEAKERS_COLUMN = "Actual_Speakers"
DECISION_COLUMN = "Decision_Made"
AGENDA_COLUMN = "Agenda_Provided"
FOLLOW_UP_COLUMN = "Follow_Up_Sent"
ASYNC_COLUMN = "Could_Be_Async"
DATE_COLUMN = "Date"

MEETING_CSV_COLUMNS: tuple[str, ...] = (
    TITLE_COLUMN,
    DURATION_COLUMN,
    PARTICIPANTS_COLUMN,
    SPEAKERS_COLUMN,
    DECISION_COLUMN,
    AGENDA_COLUMN,
    FOLLOW_UP_COLUMN,
    ASYNC_COLUMN,
)

_TRUTHY_STRINGS = frozenset({"yes", "true"})


class RowValidationError(ValueError):
    """A single CSV row could not be normalized.

    Attributes:
        row_index: 1-based position of the row among the data rows.
        message: Human-readable reason.
    """

    def __init__(self, row_index: int, message: str) -> None:
        self.row_index = row_index
        self.message = message
        super().__init__(f"Row {row_index}: {message}")


@dataclass
class NormalizationResult:
    """Outcome of normalizing a batch of raw rows.

    Attributes:
        inputs: Successfully normalized rows, in input order.
        warnings: One ``"Row N: reason"`` string per failed row.
    """

    inputs: list[MeetingInput] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ── Reading ───────────────────────────────────────────────────────────────────

def read_meeting_csv(path: Path) -> list[dict[str, str]]:
    """Read a meeting CSV into a list of header-keyed row dicts.

    Blank lines and lines starting with ``#`` are skipped. Values are left as
    raw strings; normalization happens in ``normalize_row()``.

    Args:
        path: Path to the CSV file.

    Returns:
        One dict per data row.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file has no header row.
    """
    if not path.exists():
        raise FileNotFoundError(f"Meeting CSV file not found: {path}")

    with open(path, encoding="utf-8-sig", newline="") as f:
        lines = (line for line in f if line.strip() and not line.lstrip().startswith("#"))
        reader = csv.DictReader(lines)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        header = {name.strip() for name in reader.fieldnames if name}
        missing = [col for col in MEETING_CSV_COLUMNS if col not in header]
        if missing:
            logger.warning(
                "Meeting CSV %s lacks columns %s; they will default to 0/False/empty.",
                path.name, missing,
            )

        rows = list(reader)

    logger.info("Read %d row(s) from %s", len(rows), path.name)
    return rows


# ── Normalization ─────────────────────────────────────────────────────────────

def normalize_row(row: Mapping[str, Any], row_index: int) -> MeetingInput:
    """Coerce one raw CSV row into a validated :class:`MeetingInput`.

    Args:
        row: Column name → raw value (str, number, bool or None).
        row_index: 1-based row position, used in error messages.

    Returns:
        Normalized ``MeetingInput``.

    Raises:
        RowValidationError: If any present value cannot be coerced.
    """
    clean = {str(key).strip(): value for key, value in row.items() if key is not None}

    try:
        return MeetingInput(
            title=_parse_title(clean.get(TITLE_COLUMN)),
            duration_minutes=_parse_count(clean, DURATION_COLUMN),
            participants=_parse_count(clean, PARTICIPANTS_COLUMN),
            actual_speakers=_parse_count(clean, SPEAKERS_COLUMN),
            decision_made=_parse_flag(clean, DECISION_COLUMN),
            agenda_provided=_parse_flag(clean, AGENDA_COLUMN),
            follow_up_sent=_parse_flag(clean, FOLLOW_UP_COLUMN),
            could_be_async=_parse_flag(clean, ASYNC_COLUMN),
            date=_parse_date(clean),
        )
    except ValidationError as exc:
        raise RowValidationError(row_index, _summarize_validation_error(exc)) from exc
    except ValueError as exc:
        raise RowValidationError(row_index, str(exc)) from exc


def normalize_rows(rows: Iterable[Any]) -> NormalizationResult:
    """Normalize every row independently, collecting failures as warnings.

    Entries that are not mappings (e.g. a stray ``None`` from a parser) are
    skipped without a warning.

    Args:
        rows: Raw rows in file order.

    Returns:
        ``NormalizationResult`` with the good rows and one warning per bad row.
    """
    result = NormalizationResult()

    for i, row in enumerate(rows, start=1):
        if not isinstance(row, Mapping):
            logger.debug("Skipping row %d: not a mapping (%r)", i, type(row).__name__)
            continue
        try:
            result.inputs.append(normalize_row(row, i))
        except RowValidationError as exc:
            logger.warning("Validation error in %s", exc)
            result.warnings.append(str(exc))

    logger.info(
        "Normalized %d row(s), %d failed validation.",
        len(result.inputs), len(result.warnings),
    )
    return result


# ── Private helpers ───────────────────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    """Mirror the 'missing' rule: None, empty string, 0 and False fall back."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def _parse_title(value: Any) -> str:
    if _is_blank(value):
        return ""
    return str(value)


def _parse_count(row: Mapping[str, Any], key: str) -> int:
    """Parse a whole number in ``[0, MAX_COUNT]``; blank values become 0.

    Integer strings are parsed exactly; only strings like ``"6.0"`` or
    ``"1e3"`` go through ``float``.
    """
    value = row.get(key)
    if _is_blank(value):
        return 0

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _check_count(key, value, value)
    if isinstance(value, float):
        return _check_count(key, value, _float_to_int(key, value, value))
    if not isinstance(value, str):
        raise ValueError(f"Invalid number for '{key}': unsupported type {type(value).__name__}.")

    text = value.strip()
    if not text:
        return 0
    try:
        number = int(text)
    except ValueError:
        try:
            parsed = float(text)
        except ValueError:
            raise ValueError(f"Invalid number for '{key}': '{value}'.")
        number = _float_to_int(key, value, parsed)
    return _check_count(key, value, number)


def _float_to_int(key: str, raw: Any, number: float) -> int:
    if not math.isfinite(number):
        raise ValueError(f"Invalid number for '{key}': '{raw}' is not finite.")
    if not number.is_integer():
        raise ValueError(f"Invalid number for '{key}': {raw} is not a whole number.")
    return int(number)


def _check_count(key: str, raw: Any, number: int) -> int:
    if number < 0:
        raise ValueError(f"Invalid number for '{key}': {raw} is negative.")
    if number > MAX_COUNT:
        raise ValueError(
            f"Invalid number for '{key}': {raw} exceeds the maximum of {MAX_COUNT}."
        )
    return number


def _parse_flag(row: Mapping[str, Any], key: str) -> bool:
    """Map a yes/true/1 string (any case) to True; blank values are False."""
    value = row.get(key)
    if _is_blank(value):
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if not isinstance(value, str):
        raise ValueError(
            f"Invalid flag for '{key}': expected a yes/no string, "
            f"got {type(value).__name__}."
        )
    return value.lower() in _TRUTHY_STRINGS or value == "1"


def _parse_date(row: Mapping[str, Any]) -> Optional[datetime]:
    value = row.get(DATE_COLUMN)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    return parse_meeting_date(text)


def _summarize_validation_error(exc: ValidationError) -> str:
    """Condense a pydantic error into ``field: message; ...``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or str(exc)
