"""Repository for the ``todos`` table."""

from __future__ import annotations

import logging
from typing import Optional

from labsite.db.database import Database, utc_now
from labsite.models.common import merge
from labsite.models.todo import TodoCreate, TodoItem, TodoPatch

logger = logging.getLogger(__name__)

# open items first, earliest deadline first, undated last
_ORDER = "ORDER BY completed ASC, deadline IS NULL, deadline ASC, id ASC"


class TodoRepository:
    def __init__(self, db: Database):
        self._db = db

    def create(self, data: TodoCreate) -> TodoItem:
        completed_at = utc_now() if data.completed else None
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO todos
                   (text, deadline, completed, priority, created_by, completed_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    data.text, data.deadline, 1 if data.completed else 0,
                    data.priority.value, data.created_by, completed_at,
                ),
            )
        logger.info(f"Created todo {cursor.lastrowid}")
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]

    def get_by_id(self, todo_id: int) -> Optional[TodoItem]:
        row = self._db.fetchone("SELECT * FROM todos WHERE id = ?", (todo_id,))
        return TodoItem.from_row(row) if row else None

    def list_all(self, completed: Optional[bool] = None) -> list[TodoItem]:
        where = ""
        params: tuple = ()
        if completed is not None:
            where = " WHERE completed = ?"
            params = (1 if completed else 0,)
        rows = self._db.fetchall(f"SELECT * FROM todos{where} {_ORDER}", params)
        return [TodoItem.from_row(r) for r in rows]

    def list_by_user(self, user_id: int) -> list[TodoItem]:
        rows = self._db.fetchall(
            f"SELECT * FROM todos WHERE created_by = ? {_ORDER}", (user_id,)
        )
        return [TodoItem.from_row(r) for r in rows]

    def count(self) -> int:
        return self._db.count("todos")

    def update(self, todo_id: int, patch: TodoPatch) -> Optional[TodoItem]:
        existing = self.get_by_id(todo_id)
        if existing is None:
            return None
        updated = merge(existing, patch)
        if updated.completed and not existing.completed:
            updated.completed_at = utc_now()
        elif not updated.completed:
            updated.completed_at = None
        return self._write(updated)

    def toggle(self, todo_id: int) -> Optional[TodoItem]:
        """Flip ``completed``; returns the updated item or ``None`` if absent."""
        existing = self.get_by_id(todo_id)
        if existing is None:
            return None
        return self.update(todo_id, TodoPatch(completed=not existing.completed))

    def _write(self, item: TodoItem) -> Optional[TodoItem]:
        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE todos
                   SET text = ?, deadline = ?, completed = ?, priority = ?,
                       created_by = ?, completed_at = ?, updated_at = ?
                   WHERE id = ?""",
                (
                    item.text, item.deadline, 1 if item.completed else 0,
                    item.priority.value, item.created_by, item.completed_at,
                    utc_now(), item.id,
                ),
            )
        logger.info(f"Updated todo {item.id}")
        return self.get_by_id(item.id)

    def delete(self, todo_id: int) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted todo {todo_id}")
        return deleted
