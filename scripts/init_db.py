#!/usr/bin/env python3
"""Initialize the database and optionally seed it from a YAML file.

The YAML file may contain any of these top-level lists: ``team_members``,
``publications``, ``patents``, ``projects``, ``news``, ``users``,
``research_areas``, ``research_directions``, ``research_features`` and
``todos``.  Keys may be snake_case or camelCase.  User passwords are hashed
on insert.
"""

from __future__ import annotations

import argparse
import sqlite3
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import yaml
from pydantic import ValidationError

from labsite.config import get_settings
from labsite.db.database import Database
from labsite.db.store import Store
from labsite.models import (
    NewsCreate, PatentCreate, ProjectCreate, PublicationCreate,
    ResearchAreaCreate, ResearchDirectionCreate, ResearchFeatureCreate,
    TeamMemberCreate, TodoCreate, UserCreate,
)

# YAML section -> (store attribute, payload model)
SECTIONS: dict[str, tuple[str, Any]] = {
    "users": ("users", UserCreate),
    "team_members": ("team_members", TeamMemberCreate),
    "publications": ("publications", PublicationCreate),
    "patents": ("patents", PatentCreate),
    "projects": ("projects", ProjectCreate),
    "news": ("news", NewsCreate),
    "research_areas": ("research_areas", ResearchAreaCreate),
    "research_directions": ("research_directions", ResearchDirectionCreate),
    "research_features": ("research_features", ResearchFeatureCreate),
    "todos": ("todos", TodoCreate),
}


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--seed", type=str, help="YAML file with seed data")
    parser.add_argument("--db-path", type=str, help="Override database path")
    parser.add_argument(
        "--documents", choices=("json", "sqlite"),
        help="Storage for research areas/directions/features (default from settings)",
    )
    args = parser.parse_args()

    settings = get_settings()
    db = Database(path=Path(args.db_path) if args.db_path else settings.database_path)
    db.init()
    print(f"Database initialized at: {db.path}")

    store = Store(
        db,
        document_backend=args.documents or settings.DOCUMENT_BACKEND,
        data_dir=db.path.parent if args.db_path else settings.DATA_DIR,
    )
    if args.seed:
        seed(store, Path(args.seed))

    store.close()
    print("Done.")


def seed(store: Store, path: Path) -> dict[str, int]:
    """Insert every entry of the YAML file; returns the number created per section."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    created: dict[str, int] = {}
    for section, (attr, model) in SECTIONS.items():
        repo = getattr(store, attr)
        created[section] = 0
        for entry in data.get(section, []) or []:
            try:
                item = repo.create(model.model_validate(entry))
            except (ValidationError, sqlite3.IntegrityError) as e:
                print(f"  Skipping {section} entry {_label(entry)}: {e}")
                continue
            created[section] += 1
            print(f"  Created {section} #{item.id}: {_label(entry)}")
    return created


def _label(entry: Any) -> str:
    if not isinstance(entry, dict):
        return "?"
    for key in ("name", "title", "username", "text"):
        if entry.get(key):
            return str(entry[key])
    return "?"


if __name__ == "__main__":
    main()
