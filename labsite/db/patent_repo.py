"""Repository for the ``patents`` table."""

from __future__ import annotations

import logging
from typing import Any, Optional

from labsite.db.database import Database, like_pattern, search_clause, utc_now
from labsite.models.common import merge
from labsite.models.patent import (
    Patent, PatentCreate, PatentPatch, PatentStatus, PatentType,
)

logger = logging.getLogger(__name__)

_SEARCH_COLUMNS = ("title", "inventors", "patent_number", "COALESCE(abstract, '')")
_ORDER = "ORDER BY application_date DESC, id DESC"


class PatentRepository:
    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, data: PatentCreate) -> Patent:
        patent = Patent(id=0, **data.model_dump())
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO patents
                   (title, inventors, patent_number, application_date, grant_date,
                    abstract, keywords, status, type, pdf_url, is_highlighted)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                patent.to_row(),
            )
        patent.id = cursor.lastrowid
        logger.info(f"Created patent {patent.id}: {patent.patent_number}")
        return self.get_by_id(patent.id)  # type: ignore[return-value]

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, patent_id: int) -> Optional[Patent]:
        row = self._db.fetchone("SELECT * FROM patents WHERE id = ?", (patent_id,))
        return Patent.from_row(row) if row else None

    def list_all(
        self,
        status: Optional[PatentStatus] = None,
        patent_type: Optional[PatentType] = None,
        highlighted: Optional[bool] = None,
    ) -> list[Patent]:
        clauses: list[str] = []
        params: list[Any] = []
        if status:
            clauses.append("status = ?")
            params.append(PatentStatus(status).value)
        if patent_type:
            clauses.append("type = ?")
            params.append(PatentType(patent_type).value)
        if highlighted is not None:
            clauses.append("is_highlighted = ?")
            params.append(1 if highlighted else 0)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._db.fetchall(f"SELECT * FROM patents{where} {_ORDER}", tuple(params))
        return [Patent.from_row(r) for r in rows]

    def list_by_status(self, status: PatentStatus) -> list[Patent]:
        return self.list_all(status=status)

    def list_by_type(self, patent_type: PatentType) -> list[Patent]:
        return self.list_all(patent_type=patent_type)

    def list_highlighted(self) -> list[Patent]:
        return self.list_all(highlighted=True)

    def search(self, query: str) -> list[Patent]:
        """Case-insensitive match on title, inventors, patent number and abstract."""
        pattern = like_pattern(query)
        rows = self._db.fetchall(
            f"SELECT * FROM patents WHERE {search_clause(_SEARCH_COLUMNS)} {_ORDER}",
            (pattern,) * len(_SEARCH_COLUMNS),
        )
        return [Patent.from_row(r) for r in rows]

    def count(self) -> int:
        return self._db.count("patents")

    # -- Update ----------------------------------------------------------------

    def update(self, patent_id: int, patch: PatentPatch) -> Optional[Patent]:
        existing = self.get_by_id(patent_id)
        if existing is None:
            return None
        updated = merge(existing, patch)

        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE patents
                   SET title = ?, inventors = ?, patent_number = ?,
                       application_date = ?, grant_date = ?, abstract = ?,
                       keywords = ?, status = ?, type = ?, pdf_url = ?,
                       is_highlighted = ?, updated_at = ?
                   WHERE id = ?""",
                (*updated.to_row(), utc_now(), patent_id),
            )
        logger.info(f"Updated patent {patent_id}: {sorted(patch.changes())}")
        return self.get_by_id(patent_id)

    # -- Delete ----------------------------------------------------------------

    def delete(self, patent_id: int) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM patents WHERE id = ?", (patent_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted patent {patent_id}")
        return deleted
