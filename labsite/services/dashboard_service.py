"""Admin dashboard summary: row counts plus the latest news."""

from __future__ import annotations

from typing import Any

from labsite.db.store import Store

RECENT_NEWS_LIMIT = 4


class DashboardService:
    def __init__(self, store: Store):
        self._store = store

    def summary(self) -> dict[str, Any]:
        s = self._store
        return {
            "teamMemberCount": s.team_members.count(),
            "publicationCount": s.publications.count(),
            "projectCount": s.projects.count(),
            "newsCount": s.news.count(),
            "patentCount": s.patents.count(),
            "todoItemCount": s.todos.count(),
            "recentNews": [n.to_dict() for n in s.news.list_recent(RECENT_NEWS_LIMIT)],
        }
