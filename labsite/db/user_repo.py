"""Repository for the ``users`` table.

Passwords are stored as salted hashes produced by
``werkzeug.security.generate_password_hash``; the hash column is never
mapped onto the ``User`` model.
"""

from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from labsite.db.database import Database, utc_now
from labsite.models.common import merge
from labsite.models.user import User, UserCreate, UserPatch

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, data: UserCreate) -> User:
        """Insert a new user. Raises ``sqlite3.IntegrityError`` on duplicate username/email."""
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO users
                   (username, password_hash, name, email, role, is_active)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    data.username, generate_password_hash(data.password),
                    data.name, data.email, data.role.value,
                    1 if data.is_active else 0,
                ),
            )
        logger.info(f"Created user {cursor.lastrowid}: {data.username}")
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, user_id: int) -> Optional[User]:
        row = self._db.fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
        return User.from_row(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        row = self._db.fetchone("SELECT * FROM users WHERE username = ?", (username,))
        return User.from_row(row) if row else None

    def list_all(self) -> list[User]:
        rows = self._db.fetchall("SELECT * FROM users ORDER BY username ASC")
        return [User.from_row(r) for r in rows]

    def count(self) -> int:
        return self._db.count("users")

    # -- Authentication --------------------------------------------------------

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the active user whose salted hash matches *password*, else ``None``."""
        row = self._db.fetchone(
            "SELECT id, password_hash, is_active FROM users WHERE username = ?", (username,)
        )
        if not row or not row["is_active"]:
            return None
        if not check_password_hash(row["password_hash"], password):
            logger.warning(f"Failed login for {username!r}")
            return None
        with self._db.transaction() as conn:
            conn.execute(
                "UPDATE users SET last_login = ? WHERE id = ?", (utc_now(), row["id"])
            )
        return self.get_by_id(row["id"])

    def set_password(self, user_id: int, password: str) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?",
                (generate_password_hash(password), utc_now(), user_id),
            )
        return cursor.rowcount > 0

    # -- Update ----------------------------------------------------------------

    def update(self, user_id: int, patch: UserPatch) -> Optional[User]:
        existing = self.get_by_id(user_id)
        if existing is None:
            return None
        password = patch.changes().get("password")
        profile = UserPatch(**patch.model_dump(exclude_unset=True, exclude={"password"}))
        updated = merge(existing, profile)

        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE users
                   SET username = ?, name = ?, email = ?, role = ?, is_active = ?,
                       updated_at = ?
                   WHERE id = ?""",
                (
                    updated.username, updated.name, updated.email,
                    updated.role.value, 1 if updated.is_active else 0,
                    utc_now(), user_id,
                ),
            )
        if password:
            self.set_password(user_id, password)
        logger.info(f"Updated user {user_id}: {sorted(patch.changes())}")
        return self.get_by_id(user_id)

    # -- Delete ----------------------------------------------------------------

    def delete(self, user_id: int) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted user {user_id}")
        return deleted
