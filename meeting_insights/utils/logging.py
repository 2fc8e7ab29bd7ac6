"""
Logging setup for Meeting Insights.

Call ``configure_logging(config)`` once at CLI entry, before any import or
analytics work. Library modules only do ``logging.getLogger(__name__)``.

Output goes to stdout and, when ``log_file`` is set, to that file as well.
With ``json_format = true`` each record is a single JSON object::

    {"ts": "2026-03-02T09:15:00Z", "level": "WARNING", "logger": "...", "msg": "Row 4: ..."}

Fields passed through ``extra=`` are copied into the JSON object.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from meeting_insights.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_BUILTIN_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class _UtcFormatter(logging.Formatter):
    """Text formatter whose ``asctime`` is UTC, matching the JSON ``ts``."""

    converter = time.gmtime


class _JsonFormatter(logging.Formatter):
    """Render each record as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": created.strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (k, v) for k, v in vars(record).items()
            if k not in _BUILTIN_ATTRS and not k.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _make_formatter(config: "LoggingConfig") -> logging.Formatter:
    if config.json_format:
        return _JsonFormatter()
    return _UtcFormatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)


def _make_handlers(config: "LoggingConfig") -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def configure_logging(config: "LoggingConfig") -> None:
    """Replace the root logger's handlers according to ``config``.

    Safe to call more than once; each call discards the previous handlers.

    Args:
        config: Logging section of ``AppConfig``.
    """
    level = logging.getLevelName(config.level)
    formatter = _make_formatter(config)

    handlers = _make_handlers(config)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger(__name__).debug(
        "Logging configured: level=%s file=%s json=%s",
        config.level, config.log_file or "-", config.json_format,
    )
