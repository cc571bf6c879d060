"""Repository for the ``team_members`` table: full CRUD with ACID transactions."""

from __future__ import annotations

import logging
from typing import Any, Optional

from labsite.db.database import Database, like_pattern, search_clause, utc_now
from labsite.models.common import merge
from labsite.models.team_member import (
    CATEGORY_RANK, MemberCategory, TeamMember, TeamMemberCreate, TeamMemberPatch,
)

logger = logging.getLogger(__name__)

_SEARCH_COLUMNS = ("name", "title", "research", "email")


class TeamMemberRepository:
    """Single-Responsibility repository for team member persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, data: TeamMemberCreate) -> TeamMember:
        member = TeamMember(
            id=0,
            join_date=data.resolved_join_date(),
            **data.model_dump(exclude={"join_date"}),
        )
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO team_members
                   (name, title, degree, research, email, category,
                    google_scholar, research_gate, orcid, bio, photo_url,
                    is_active, join_date)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                member.to_row(),
            )
        member.id = cursor.lastrowid
        logger.info(f"Created team member {member.id}: {member.name}")
        return self.get_by_id(member.id)  # type: ignore[return-value]

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, member_id: int) -> Optional[TeamMember]:
        row = self._db.fetchone("SELECT * FROM team_members WHERE id = ?", (member_id,))
        return TeamMember.from_row(row) if row else None

    def search(self, query: str) -> list[TeamMember]:
        """Case-insensitive partial match on name, title, research and email."""
        pattern = like_pattern(query)
        rows = self._db.fetchall(
            f"SELECT * FROM team_members WHERE {search_clause(_SEARCH_COLUMNS)} ORDER BY name ASC",
            (pattern,) * len(_SEARCH_COLUMNS),
        )
        return [TeamMember.from_row(r) for r in rows]

    # -- List / Filter ---------------------------------------------------------

    def list_all(
        self,
        category: Optional[MemberCategory] = None,
        active_only: Optional[bool] = None,
        order_by: str = "name",
    ) -> list[TeamMember]:
        clauses: list[str] = []
        params: list[Any] = []
        if category:
            clauses.append("category = ?")
            params.append(MemberCategory(category).value)
        if active_only is not None:
            clauses.append("is_active = ?")
            params.append(1 if active_only else 0)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._db.fetchall(
            f"SELECT * FROM team_members{where} ORDER BY name ASC", tuple(params)
        )
        members = [TeamMember.from_row(r) for r in rows]
        if order_by == "category":
            # stable sort keeps name order within each category
            members.sort(key=lambda m: CATEGORY_RANK[m.category.value])
        return members

    def list_by_category(self, category: MemberCategory) -> list[TeamMember]:
        return self.list_all(category=category)

    def count(self) -> int:
        return self._db.count("team_members")

    # -- Update ----------------------------------------------------------------

    def update(self, member_id: int, patch: TeamMemberPatch) -> Optional[TeamMember]:
        """Merge *patch* over the stored member and write back every column."""
        existing = self.get_by_id(member_id)
        if existing is None:
            return None
        updated = merge(existing, patch)

        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE team_members
                   SET name = ?, title = ?, degree = ?, research = ?, email = ?,
                       category = ?, google_scholar = ?, research_gate = ?,
                       orcid = ?, bio = ?, photo_url = ?, is_active = ?,
                       join_date = ?, updated_at = ?
                   WHERE id = ?""",
                (*updated.to_row(), utc_now(), member_id),
            )
        logger.info(f"Updated team member {member_id}: {sorted(patch.changes())}")
        return self.get_by_id(member_id)

    # -- Delete ----------------------------------------------------------------

    def delete(self, member_id: int) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute("DELETE FROM team_members WHERE id = ?", (member_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted team member {member_id}")
        return deleted
