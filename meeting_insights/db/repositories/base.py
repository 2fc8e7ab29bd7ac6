"""
Base repository with the SQL execution helpers every repository shares.

Repositories receive an open ``sqlite3.Connection`` (usually from
``get_connection()``); they never open, commit or close it themselves.

  - No ORM: SQL is explicit and lives in repository methods.
  - Repositories speak pydantic models, not raw dicts.
  - ``sqlite3.Row`` rows give dict-like access throughout.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

logger = logging.getLogger(__name__)

Params = tuple[Any, ...] | dict[str, Any]


class BaseRepository:
    """Shared SQL helpers.

    Attributes:
        conn: The active ``sqlite3.Connection``.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        """Execute one statement, logging it at DEBUG."""
        logger.debug("SQL: %s | params: %s", sql.strip(), params)
        return self.conn.execute(sql, params)

    def fetchone(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        """Return the first row of a query, or ``None``."""
        return self.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        """Return every row of a query."""
        return self.execute(sql, params).fetchall()

    def scalar(self, sql: str, params: Params = ()) -> Any:
        """Return the first column of the first row, or ``None`` for no rows."""
        row = self.fetchone(sql, params)
        return row[0] if row is not None else None
