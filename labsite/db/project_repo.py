"""Repository for the ``projects`` table.

The API calls a project's title ``name`` and its funding source ``source``;
the columns keep the older ``title`` / ``funding_source`` names.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from labsite.db.database import Database, like_pattern, search_clause, utc_now
from labsite.models.common import merge
from labsite.models.project import Project, ProjectCreate, ProjectPatch

logger = logging.getLogger(__name__)

_SEARCH_COLUMNS = ("title", "description", "COALESCE(funding_source, '')", "leader")
_ORDER = "ORDER BY start_date DESC, id DESC"


class ProjectRepository:
    def __init__(self, db: Database):
        self._db = db

    def create(self, data: ProjectCreate) -> Project:
        project = Project(id=0, **data.model_dump())
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO projects
                   (title, description, start_date, end_date, funding_source,
                    funding_amount, leader, is_active)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                project.to_row(),
            )
        project.id = cursor.lastrowid
        logger.info(f"Created project {project.id}: {project.name}")
        return self.get_by_id(project.id)  # type: ignore[return-value]

    def get_by_id(self, project_id: int) -> Optional[Project]:
        row = self._db.fetchone("SELECT * FROM projects WHERE id = ?", (project_id,))
        return Project.from_row(row) if row else None

    def list_all(self, is_active: Optional[bool] = None) -> list[Project]:
        where = ""
        params: tuple[Any, ...] = ()
        if is_active is not None:
            where = " WHERE is_active = ?"
            params = (1 if is_active else 0,)
        rows = self._db.fetchall(f"SELECT * FROM projects{where} {_ORDER}", params)
        return [Project.from_row(r) for r in rows]

    def list_by_status(self, is_active: bool) -> list[Project]:
        return self.list_all(is_active=is_active)

    def search(self, query: str) -> list[Project]:
        """Case-insensitive match on name, description, funding source and leader."""
        pattern = like_pattern(query)
        rows = self._db.fetchall(
            f"SELECT * FROM projects WHERE {search_clause(_SEARCH_COLUMNS)} {_ORDER}",
            (pattern,) * len(_SEARCH_COLUMNS),
        )
        return [Project.from_row(r) for r in rows]

    def count(self) -> int:
        return self._db.count("projects")

    def update(self, project_id: int, patch: ProjectPatch) -> Optional[Project]:
        existing = self.get_by_id(project_id)
        if existing is None:
            return None
        updated = merge(existing, patch)

        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE projects
                   SET title = ?, description = ?, start_date = ?, end_date = ?,
                       funding_source = ?, funding_amount = ?, leader = ?,
                       is_active = ?, updated_at = ?
                   WHERE id = ?""",
                (*updated.to_row(), utc_now(), project_id),
            )
        logger.info(f"Updated project {project_id}: {sorted(patch.changes())}")
        return self.get_by_id(project_id)

    def delete(self, project_id: int) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted project {project_id}")
        return deleted
