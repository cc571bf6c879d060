"""Repository for the ``news`` table."""

from __future__ import annotations

import logging
from typing import Optional

from labsite.db.database import Database, like_pattern, search_clause, utc_now
from labsite.models.common import merge
from labsite.models.news import News, NewsCreate, NewsPatch

logger = logging.getLogger(__name__)

_SEARCH_COLUMNS = ("title", "content", "COALESCE(author, '')")
_ORDER = "ORDER BY publish_date DESC, id DESC"


class NewsRepository:
    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, data: NewsCreate) -> News:
        item = News(id=0, **data.model_dump())
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO news
                   (title, content, publish_date, author, image_url, is_published)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                item.to_row(),
            )
        item.id = cursor.lastrowid
        logger.info(f"Created news {item.id}: {item.title}")
        return self.get_by_id(item.id)  # type: ignore[return-value]

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, news_id: int) -> Optional[News]:
        row = self._db.fetchone("SELECT * FROM news WHERE id = ?", (news_id,))
        return News.from_row(row) if row else None

    def list_all(self, published_only: bool = False, limit: Optional[int] = None) -> list[News]:
        where = " WHERE is_published = 1" if published_only else ""
        sql = f"SELECT * FROM news{where} {_ORDER}"
        params: tuple = ()
        if limit is not None and limit > 0:
            sql += " LIMIT ?"
            params = (limit,)
        return [News.from_row(r) for r in self._db.fetchall(sql, params)]

    def list_published(self) -> list[News]:
        return self.list_all(published_only=True)

    def list_recent(self, limit: int = 4) -> list[News]:
        return self.list_all(limit=limit)

    def search(self, query: str) -> list[News]:
        pattern = like_pattern(query)
        rows = self._db.fetchall(
            f"SELECT * FROM news WHERE {search_clause(_SEARCH_COLUMNS)} {_ORDER}",
            (pattern,) * len(_SEARCH_COLUMNS),
        )
        return [News.from_row(r) for r in rows]

    def count(self) -> int:
        return self._db.count("news")

    # -- Update ----------------------------------------------------------------

    def update(self, news_id: int, patch: NewsPatch) -> Optional[News]:
        existing = self.get_by_id(news_id)
        if existing is None:
            return None
        updated = merge(existing, patch)

        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE news
                   SET title = ?, content = ?, publish_date = ?, author = ?,
                       image_url = ?, is_published = ?, updated_at = ?
                   WHERE id = ?""",
                (*updated.to_row(), utc_now(), news_id),
            )
        logger.info(f"Updated news {news_id}: {sorted(patch.changes())}")
        return self.get_by_id(news_id)

    # -- Delete ----------------------------------------------------------------

    def delete(self, news_id: int) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM news WHERE id = ?", (news_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted news {news_id}")
        return deleted
