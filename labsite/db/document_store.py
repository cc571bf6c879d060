"""Storage backends for small ordered collections kept as one JSON document.

A document is ``{"<key>": [item, ...], "nextId": N}``.  ``nextId`` is the id
the next created item receives; ids are never handed out twice even after
the highest item is deleted.  Documents written by older versions without
``nextId`` fall back to ``max(id) + 1``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from labsite.db.database import Database, utc_now
from labsite.errors import InvalidDocumentError

logger = logging.getLogger(__name__)

Items = list[dict[str, Any]]


class DocumentBackend(Protocol):
    """Read/write a whole collection document."""

    name: str

    def read(self) -> tuple[Items, int]:
        ...

    def write(self, items: Items, next_id: int) -> None:
        ...


def _next_id(items: Items, stored: Any) -> int:
    floor = max((int(i.get("id", 0)) for i in items), default=0) + 1
    try:
        return max(int(stored), floor)
    except (TypeError, ValueError):
        return floor


def _atomic_write_text(path: Path, data: str) -> None:
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    with tmp_path.open("w", encoding="utf-8") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())
    tmp_path.replace(path)


class JsonDocumentBackend:
    """One flat JSON file per collection, e.g. ``data/researchAreas.json``."""

    def __init__(self, path: Path | str, key: str):
        self.path = Path(path)
        self.key = key
        self.name = key

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.write([], 1)

    def read(self) -> tuple[Items, int]:
        self._ensure_file()
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise InvalidDocumentError(f"Invalid JSON data in {self.path}") from exc
        items = data.get(self.key) if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise InvalidDocumentError(f"{self.path} has no '{self.key}' list")
        return items, _next_id(items, data.get("nextId"))

    def write(self, items: Items, next_id: int) -> None:
        payload = json.dumps({self.key: items, "nextId": next_id}, ensure_ascii=False, indent=2)
        _atomic_write_text(self.path, payload)


class SqliteDocumentBackend:
    """The same document stored as one row of the ``documents`` table."""

    def __init__(self, db: Database, collection: str):
        self._db = db
        self.collection = collection
        self.name = collection

    def read(self) -> tuple[Items, int]:
        row = self._db.fetchone(
            "SELECT body, next_id FROM documents WHERE collection = ?", (self.collection,)
        )
        if row is None:
            return [], 1
        try:
            items = json.loads(row["body"])
        except json.JSONDecodeError as exc:
            raise InvalidDocumentError(f"Invalid JSON in document '{self.collection}'") from exc
        if not isinstance(items, list):
            raise InvalidDocumentError(f"Document '{self.collection}' is not a list")
        return items, _next_id(items, row["next_id"])

    def write(self, items: Items, next_id: int) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO documents (collection, body, next_id, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(collection) DO UPDATE SET
                       body = excluded.body,
                       next_id = excluded.next_id,
                       updated_at = excluded.updated_at""",
                (self.collection, json.dumps(items, ensure_ascii=False), next_id, utc_now()),
            )
