"""Repository for ``publications`` and their ``publication_keywords``."""

from __future__ import annotations

import logging
import sqlite3
from collections import defaultdict
from typing import Any, Optional

from labsite.db.database import Database, like_pattern, utc_now
from labsite.models.common import merge
from labsite.models.publication import Publication, PublicationCreate, PublicationPatch

logger = logging.getLogger(__name__)

_ORDER = "ORDER BY year DESC, title ASC"


class PublicationRepository:
    """Publications with a one-to-many keyword table kept in step on every write."""

    def __init__(self, db: Database):
        self._db = db

    # -- row mapping -----------------------------------------------------------

    def _keywords_for(self, ids: list[int]) -> dict[int, list[str]]:
        if not ids:
            return {}
        marks = ", ".join("?" for _ in ids)
        rows = self._db.fetchall(
            f"SELECT publication_id, keyword FROM publication_keywords "
            f"WHERE publication_id IN ({marks}) ORDER BY id",
            tuple(ids),
        )
        grouped: dict[int, list[str]] = defaultdict(list)
        for r in rows:
            grouped[r["publication_id"]].append(r["keyword"])
        return grouped

    def _hydrate(self, rows: list[dict[str, Any]]) -> list[Publication]:
        keywords = self._keywords_for([r["id"] for r in rows])
        return [Publication.from_row(r, keywords.get(r["id"], [])) for r in rows]

    @staticmethod
    def _write_keywords(conn: sqlite3.Connection, pub_id: int, keywords: list[str]) -> None:
        conn.execute("DELETE FROM publication_keywords WHERE publication_id = ?", (pub_id,))
        conn.executemany(
            "INSERT INTO publication_keywords (publication_id, keyword) VALUES (?, ?)",
            [(pub_id, k) for k in keywords if k],
        )

    # -- Create ----------------------------------------------------------------

    def create(self, data: PublicationCreate) -> Publication:
        pub = Publication(id=0, **data.model_dump())
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO publications
                   (title, authors, journal, year, volume, issue, pages, doi,
                    abstract, pdf_url, is_highlighted, citation_count)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                pub.to_row(),
            )
            pub.id = cursor.lastrowid
            self._write_keywords(conn, pub.id, pub.keywords)
        logger.info(f"Created publication {pub.id}: {pub.title}")
        return self.get_by_id(pub.id)  # type: ignore[return-value]

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, pub_id: int) -> Optional[Publication]:
        row = self._db.fetchone("SELECT * FROM publications WHERE id = ?", (pub_id,))
        return self._hydrate([row])[0] if row else None

    def list_all(
        self,
        year: Optional[int] = None,
        highlighted: Optional[bool] = None,
    ) -> list[Publication]:
        clauses: list[str] = []
        params: list[Any] = []
        if year is not None:
            clauses.append("year = ?")
            params.append(year)
        if highlighted is not None:
            clauses.append("is_highlighted = ?")
            params.append(1 if highlighted else 0)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._db.fetchall(f"SELECT * FROM publications{where} {_ORDER}", tuple(params))
        return self._hydrate(rows)

    def list_highlighted(self) -> list[Publication]:
        return self.list_all(highlighted=True)

    def list_by_year(self, year: int) -> list[Publication]:
        return self.list_all(year=year)

    def list_years(self) -> list[int]:
        rows = self._db.fetchall("SELECT DISTINCT year FROM publications ORDER BY year DESC")
        return [r["year"] for r in rows]

    def search(self, query: str) -> list[Publication]:
        """Case-insensitive match on title, authors, journal or any keyword."""
        pattern = like_pattern(query)
        rows = self._db.fetchall(
            f"""SELECT * FROM publications p
               WHERE LOWER(p.title) LIKE ? ESCAPE '\\'
                  OR LOWER(p.authors) LIKE ? ESCAPE '\\'
                  OR LOWER(p.journal) LIKE ? ESCAPE '\\'
                  OR EXISTS (SELECT 1 FROM publication_keywords k
                             WHERE k.publication_id = p.id
                               AND LOWER(k.keyword) LIKE ? ESCAPE '\\')
               {_ORDER}""",
            (pattern,) * 4,
        )
        return self._hydrate(rows)

    def count(self) -> int:
        return self._db.count("publications")

    # -- Update ----------------------------------------------------------------

    def update(self, pub_id: int, patch: PublicationPatch) -> Optional[Publication]:
        existing = self.get_by_id(pub_id)
        if existing is None:
            return None
        updated = merge(existing, patch)

        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE publications
                   SET title = ?, authors = ?, journal = ?, year = ?, volume = ?,
                       issue = ?, pages = ?, doi = ?, abstract = ?, pdf_url = ?,
                       is_highlighted = ?, citation_count = ?, updated_at = ?
                   WHERE id = ?""",
                (*updated.to_row(), utc_now(), pub_id),
            )
            self._write_keywords(conn, pub_id, updated.keywords)
        logger.info(f"Updated publication {pub_id}: {sorted(patch.changes())}")
        return self.get_by_id(pub_id)

    # -- Delete ----------------------------------------------------------------

    def delete(self, pub_id: int) -> bool:
        # keywords go with the row via ON DELETE CASCADE
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM publications WHERE id = ?", (pub_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted publication {pub_id}")
        return deleted
