"""Composition of the database and every repository.

A ``Store`` is built once per application (or per test) and handed to the
HTTP layer; nothing in the package keeps a module-level connection.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from labsite.config import Settings
from labsite.db.database import Database
from labsite.db.document_store import (
    DocumentBackend, JsonDocumentBackend, SqliteDocumentBackend,
)
from labsite.db.news_repo import NewsRepository
from labsite.db.ordered_repo import OrderedItemRepository
from labsite.db.patent_repo import PatentRepository
from labsite.db.project_repo import ProjectRepository
from labsite.db.publication_repo import PublicationRepository
from labsite.db.team_member_repo import TeamMemberRepository
from labsite.db.todo_repo import TodoRepository
from labsite.db.user_repo import UserRepository
from labsite.models.research import ResearchArea, ResearchDirection, ResearchFeature

logger = logging.getLogger(__name__)


class Store:
    """Holds the open ``Database`` and one repository per entity."""

    def __init__(
        self,
        db: Database,
        document_backend: str = "json",
        data_dir: Optional[Path] = None,
    ):
        self.db = db
        self.team_members = TeamMemberRepository(db)
        self.publications = PublicationRepository(db)
        self.patents = PatentRepository(db)
        self.projects = ProjectRepository(db)
        self.news = NewsRepository(db)
        self.todos = TodoRepository(db)
        self.users = UserRepository(db)

        folder = data_dir or db.path.parent

        def backend(key: str) -> DocumentBackend:
            if document_backend == "sqlite":
                return SqliteDocumentBackend(db, key)
            return JsonDocumentBackend(folder / f"{key}.json", key)

        self.research_areas = OrderedItemRepository(backend("researchAreas"), ResearchArea)
        self.research_directions = OrderedItemRepository(
            backend("researchDirections"), ResearchDirection
        )
        self.research_features = OrderedItemRepository(
            backend("researchFeatures"), ResearchFeature
        )
        logger.debug(f"Store ready: db={db.path} documents={document_backend}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        db = Database(path=settings.database_path)
        db.init()
        return cls(db, document_backend=settings.DOCUMENT_BACKEND, data_dir=settings.DATA_DIR)

    def close(self) -> None:
        self.db.close()
