"""
SQLite connection management.

``get_connection()`` yields a connection with:
  - ``sqlite3.Row`` rows (dict-style access in repositories),
  - foreign keys on and a busy timeout,
  - WAL journaling for file databases, so ``analytics`` can read during an import,
  - commit on clean exit, rollback on error, close always.

``open_meeting_db()`` is the same thing driven by ``DatabaseConfig``, with the
schema applied first; CLI commands use it so they work on a fresh file::

    from meeting_insights.db.connection import open_meeting_db

    with open_meeting_db(config.database) as conn:
        MeetingRepository(conn).get_all()
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional

from meeting_insights.db.schema import apply_schema

if TYPE_CHECKING:
    from meeting_insights.config import DatabaseConfig

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Iterator[sqlite3.Connection]:
    """Open ``db_path`` and yield a configured connection.

    Args:
        db_path: SQLite file (parent directories are created) or ``":memory:"``.
        wal_mode: Switch file databases to WAL journaling.
        busy_timeout_ms: How long to wait on a locked database.

    Yields:
        The open connection; committed if the block exits cleanly.

    Raises:
        sqlite3.OperationalError: If the file cannot be opened or stays locked.
    """
    on_disk = db_path != IN_MEMORY
    if on_disk:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    conn.row_factory = sqlite3.Row
    try:
        for pragma in (
            "foreign_keys = ON",
            f"busy_timeout = {int(busy_timeout_ms)}",
            *(("journal_mode = WAL",) if wal_mode and on_disk else ()),
        ):
            conn.execute(f"PRAGMA {pragma};")
        logger.debug("Opened SQLite database %s (wal=%s)", db_path, wal_mode and on_disk)

        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def open_meeting_db(
    database: "DatabaseConfig",
    db_path: Optional[str] = None,
) -> Iterator[sqlite3.Connection]:
    """Connect using ``[database]`` settings and make sure the schema exists.

    Args:
        database: The ``database`` section of ``AppConfig``.
        db_path: Overrides ``database.db_path`` (e.g. a ``--db-path`` flag).
    """
    with get_connection(
        db_path or database.db_path,
        wal_mode=database.wal_mode,
        busy_timeout_ms=database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)
        yield conn
