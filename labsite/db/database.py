"""SQLite file holding the site's content tables and research documents."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator, Optional

from labsite.db.schema import SCHEMA_DDL


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class Database:
    """
    The site's content database, opened lazily on first use.

    One connection is shared by every repository the ``Store`` builds.
    Repositories write through ``transaction()`` and read through the
    ``fetch*`` helpers, which hand back plain dicts ready for
    ``<Entity>.from_row``.  Defaults to ``Settings.database_path``.
    """

    def __init__(self, path: Optional[Path | str] = None):
        if path is None:
            from labsite.config import get_db_path
            path = get_db_path()
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None

    # -- opening and schema ----------------------------------------------------

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # the server answers requests from a thread pool
            self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def init(self) -> None:
        """Create the content tables and the ``documents`` table if missing."""
        conn = self.connection()
        conn.executescript(SCHEMA_DDL)
        conn.commit()

    # -- writes ----------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield the connection; commit when the block exits, roll back if it raises."""
        conn = self.connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    # -- reads -----------------------------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        return self.connection().execute(sql, params)

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        row = self.connection().execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        rows = self.connection().execute(sql, params).fetchall()
        return [dict(r) for r in rows]

    def count(self, table: str) -> int:
        row = self.fetchone(f"SELECT COUNT(*) AS n FROM {table}")
        return row["n"] if row else 0


def like_pattern(query: str) -> str:
    """Case-folded ``LIKE`` pattern for a substring search (use ``ESCAPE '\\'``)."""
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_clause(columns: tuple[str, ...]) -> str:
    return " OR ".join(f"LOWER({c}) LIKE ? ESCAPE '\\'" for c in columns)
