"""Tests for the research area / direction / feature repositories.

The same cases run against the JSON-file backend and the SQLite document
backend.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from labsite.db.database import Database
from labsite.db.document_store import JsonDocumentBackend, SqliteDocumentBackend
from labsite.db.ordered_repo import OrderedItemRepository
from labsite.errors import InvalidDocumentError
from labsite.models.research import (
    OrderedItemPatch, ResearchArea, ResearchAreaCreate, ResearchAreaPatch,
    ResearchDirection, ResearchDirectionCreate,
)


class _OrderedRepoCases:
    """Mixed into one TestCase per backend; subclasses provide ``make_backend``."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.db = Database(path=self.dir / "app.db")
        self.db.init()
        self.areas = OrderedItemRepository(self.make_backend("researchAreas"), ResearchArea)
        self.directions = OrderedItemRepository(
            self.make_backend("researchDirections"), ResearchDirection
        )

    def tearDown(self):
        self.db.close()
        self.tmp.cleanup()

    def _add(self, title: str, order=None) -> ResearchDirection:
        return self.directions.create(ResearchDirectionCreate(title=title, order=order))

    def test_empty_collection(self):
        self.assertEqual(self.directions.list_all(), [])
        self.assertEqual(self.directions.count(), 0)

    def test_create_appends_order(self):
        first = self._add("a")
        second = self._add("b")
        self.assertEqual((first.id, first.order), (1, 1))
        self.assertEqual((second.id, second.order), (2, 2))
        self.assertEqual(first.description, "")
        self.assertTrue(first.created_at)
        self.assertEqual(self.directions.get_by_id(2), second)

    def test_non_positive_order_on_create_becomes_next(self):
        self._add("a", order=5)
        self.assertEqual(self._add("b", order=0).order, 6)
        self.assertEqual(self._add("c", order=-3).order, 7)

    def test_explicit_order_is_kept(self):
        self._add("a")
        self.assertEqual(self._add("b", order=10).order, 10)

    def test_update_coerces_non_positive_order(self):
        item = self._add("a", order=3)
        updated = self.directions.update(item.id, OrderedItemPatch(order=-2))
        self.assertEqual(updated.order, 1)
        self.assertEqual(updated.title, "a")

    def test_update_changes_only_given_fields(self):
        item = self._add("a")
        updated = self.directions.update(item.id, OrderedItemPatch(description="new"))
        self.assertEqual(updated.description, "new")
        self.assertEqual(updated.order, item.order)
        self.assertEqual(updated.created_at, item.created_at)
        self.assertEqual(self.directions.get_by_id(item.id).description, "new")

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.directions.update(9, OrderedItemPatch(title="x")))

    def test_delete_renumbers_survivors(self):
        for title in ("a", "b", "c", "d"):
            self._add(title)
        self.assertTrue(self.directions.delete(2))
        items = self.directions.list_all()
        self.assertEqual([i.title for i in items], ["a", "c", "d"])
        self.assertEqual([i.order for i in items], [1, 2, 3])
        self.assertFalse(self.directions.delete(2))

    def test_delete_breaks_order_ties_by_id(self):
        self._add("a", order=2)
        self._add("b", order=2)
        self._add("c", order=1)
        self._add("x", order=9)
        self.directions.delete(4)
        items = self.directions.list_all()
        self.assertEqual([(i.title, i.order) for i in items], [("c", 1), ("a", 2), ("b", 3)])

    def test_ids_are_not_reused(self):
        self._add("a")
        last = self._add("b")
        self.directions.delete(last.id)
        self.assertEqual(self._add("c").id, last.id + 1)

    def test_active_only(self):
        self._add("a")
        hidden = self.directions.create(ResearchDirectionCreate(title="b", is_active=False))
        self.assertEqual(len(self.directions.list_all()), 2)
        self.assertNotIn(hidden.id, [i.id for i in self.directions.list_all(active_only=True)])

    def test_area_link_defaults_to_anchor(self):
        area = self.areas.create(ResearchAreaCreate(title="Vision", description="Images"))
        self.assertEqual(area.link, f"/main/research#{area.id}")
        custom = self.areas.create(
            ResearchAreaCreate(title="Graphs", description="Nodes", link="/graphs")
        )
        self.assertEqual(custom.link, "/graphs")
        updated = self.areas.update(custom.id, ResearchAreaPatch(title="Graph learning"))
        self.assertEqual(updated.link, "/graphs")

    def test_collections_are_independent(self):
        self.areas.create(ResearchAreaCreate(title="Vision", description="Images"))
        self.assertEqual(self.directions.count(), 0)


class TestJsonDocumentBackend(_OrderedRepoCases, unittest.TestCase):
    def make_backend(self, key: str):
        return JsonDocumentBackend(self.dir / f"{key}.json", key)

    def test_file_layout(self):
        self._add("a")
        data = json.loads((self.dir / "researchDirections.json").read_text(encoding="utf-8"))
        self.assertEqual(data["nextId"], 2)
        self.assertEqual(data["researchDirections"][0]["title"], "a")
        self.assertIn("isActive", data["researchDirections"][0])
        self.assertFalse((self.dir / "researchDirections.json.tmp").exists())

    def test_file_without_next_id(self):
        path = self.dir / "researchDirections.json"
        path.write_text(json.dumps({"researchDirections": [
            {"id": 4, "title": "legacy", "description": "", "order": 1, "isActive": True},
        ]}), encoding="utf-8")
        self.assertEqual(self._add("new").id, 5)

    def test_corrupt_file_raises(self):
        (self.dir / "researchDirections.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(InvalidDocumentError):
            self.directions.list_all()


class TestSqliteDocumentBackend(_OrderedRepoCases, unittest.TestCase):
    def make_backend(self, key: str):
        return SqliteDocumentBackend(self.db, key)

    def test_stored_in_documents_table(self):
        self._add("a")
        row = self.db.fetchone(
            "SELECT body, next_id FROM documents WHERE collection = ?", ("researchDirections",)
        )
        self.assertEqual(row["next_id"], 2)
        self.assertEqual(json.loads(row["body"])[0]["title"], "a")
        self.assertFalse((self.dir / "researchDirections.json").exists())


if __name__ == "__main__":
    unittest.main()
