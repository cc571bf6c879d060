"""Unit tests for the DB layer: schema, transactions and the table repositories.

Every test uses a fresh temporary SQLite file so tests are isolated.
"""

from __future__ import annotations

import sqlite3
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from labsite.db.database import Database, like_pattern
from labsite.db.schema import TABLES
from labsite.db.news_repo import NewsRepository
from labsite.db.patent_repo import PatentRepository
from labsite.db.project_repo import ProjectRepository
from labsite.db.publication_repo import PublicationRepository
from labsite.db.team_member_repo import TeamMemberRepository
from labsite.db.todo_repo import TodoRepository
from labsite.db.user_repo import UserRepository
from labsite.models.common import from_flag
from labsite.models import (
    MemberCategory, NewsCreate, NewsPatch, PatentCreate, PatentPatch,
    PatentStatus, PatentType, ProjectCreate, ProjectPatch, PublicationCreate,
    PublicationPatch, TeamMemberCreate, TeamMemberPatch, TodoCreate,
    TodoPatch, TodoPriority, UserCreate, UserPatch,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_db() -> Database:
    """Return a Database backed by a fresh temporary file."""
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    db = Database(path=Path(tmp.name))
    db.init()
    return db


def _member(**overrides) -> TeamMemberCreate:
    defaults = dict(
        name="Zhang Ming",
        title="Professor",
        research="Computer vision",
        email="zhang@lab.edu",
        category=MemberCategory.PROFESSOR,
        join_date="2015-09-01",
    )
    defaults.update(overrides)
    return TeamMemberCreate(**defaults)


def _publication(**overrides) -> PublicationCreate:
    defaults = dict(
        title="Robust Segmentation",
        authors="Zhang Ming, Li Hua",
        journal="IEEE TMI",
        year=2024,
        keywords=["segmentation", "medical imaging"],
    )
    defaults.update(overrides)
    return PublicationCreate(**defaults)


def _patent(**overrides) -> PatentCreate:
    defaults = dict(
        title="Lesion detection method",
        inventors="Zhang Ming",
        patent_number="CN2023001",
        application_date="2023-05-20",
        status=PatentStatus.PENDING,
        type=PatentType.INVENTION,
        keywords=["CT", "detection"],
    )
    defaults.update(overrides)
    return PatentCreate(**defaults)


def _project(**overrides) -> ProjectCreate:
    defaults = dict(
        name="Trustworthy AI",
        start_date="2023-01-01",
        source="NSFC",
        funding_amount=580000,
        leader="Zhang Ming",
    )
    defaults.update(overrides)
    return ProjectCreate(**defaults)


def _news(**overrides) -> NewsCreate:
    defaults = dict(title="Paper accepted", content="Good news", publish_date="2024-02-10")
    defaults.update(overrides)
    return NewsCreate(**defaults)


# ===========================================================================
# 1. Database core
# ===========================================================================

class TestDatabaseCore(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()

    def tearDown(self):
        self.db.close()

    def test_tables_created(self):
        tables = self.db.fetchall(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        names = {t["name"] for t in tables}
        expected = set(TABLES)
        self.assertTrue(expected.issubset(names), f"Missing tables: {expected - names}")

    def test_init_is_idempotent(self):
        self.db.init()
        self.assertEqual(self.db.count("news"), 0)

    def test_foreign_keys_enabled(self):
        row = self.db.fetchone("PRAGMA foreign_keys")
        self.assertEqual(row["foreign_keys"], 1)

    def test_transaction_rollback(self):
        try:
            with self.db.transaction() as conn:
                conn.execute(
                    "INSERT INTO news (title, content, publish_date) VALUES (?, ?, ?)",
                    ("t", "c", "2024-01-01"),
                )
                raise ValueError("Force rollback")
        except ValueError:
            pass
        self.assertEqual(self.db.count("news"), 0)

    def test_like_pattern_escapes_wildcards(self):
        self.assertEqual(like_pattern("50%_Off"), "%50\\%\\_off%")

    def test_reopens_after_close(self):
        db = Database(path=str(self.db.path))
        self.assertIsInstance(db.path, Path)
        db.execute("INSERT INTO news (title, content, publish_date) VALUES ('t', 'c', '2024-01-01')")
        db.connection().commit()
        db.close()
        self.assertEqual(db.count("news"), 1)
        db.close()


class TestRowMapping(unittest.TestCase):
    def test_flag_columns(self):
        self.assertFalse(from_flag(0))
        self.assertTrue(from_flag(1))
        self.assertFalse(from_flag("0"))
        self.assertTrue(from_flag("1"))

    def test_null_flag_uses_default(self):
        self.assertFalse(from_flag(None))
        self.assertTrue(from_flag(None, default=True))


# ===========================================================================
# 2. Team members
# ===========================================================================

class TestTeamMemberRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = TeamMemberRepository(self.db)

    def tearDown(self):
        self.db.close()

    def test_create_and_get(self):
        created = self.repo.create(_member())
        self.assertGreater(created.id, 0)
        fetched = self.repo.get_by_id(created.id)
        self.assertEqual(fetched, created)
        self.assertTrue(fetched.is_active)

    def test_join_date_defaults_to_today(self):
        created = self.repo.create(_member(join_date=None))
        self.assertRegex(created.join_date, r"^\d{4}-\d{2}-\d{2}$")

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.repo.get_by_id(999))

    def test_search_is_case_insensitive(self):
        self.repo.create(_member())
        self.repo.create(_member(name="Li Hua", email="li@lab.edu", research="Graphs"))
        results = self.repo.search("zhang")
        self.assertEqual([m.name for m in results], ["Zhang Ming"])

    def test_list_sorted_by_name_and_category(self):
        self.repo.create(_member(name="Wang Fang", email="w@lab.edu", category=MemberCategory.STUDENT))
        self.repo.create(_member(name="Zhang Ming"))
        self.repo.create(_member(name="Li Hua", email="l@lab.edu", category=MemberCategory.POSTDOC))

        self.assertEqual(
            [m.name for m in self.repo.list_all()], ["Li Hua", "Wang Fang", "Zhang Ming"]
        )
        self.assertEqual(
            [m.name for m in self.repo.list_all(order_by="category")],
            ["Zhang Ming", "Li Hua", "Wang Fang"],
        )
        students = self.repo.list_by_category(MemberCategory.STUDENT)
        self.assertEqual([m.name for m in students], ["Wang Fang"])

    def test_update_changes_only_given_fields(self):
        created = self.repo.create(_member())
        updated = self.repo.update(created.id, TeamMemberPatch(title="Chair Professor"))
        self.assertEqual(updated.title, "Chair Professor")
        self.assertEqual(updated.email, created.email)
        self.assertEqual(updated.research, created.research)

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.repo.update(42, TeamMemberPatch(title="x")))

    def test_patch_rejects_null_for_required_field(self):
        with self.assertRaises(ValidationError):
            TeamMemberPatch(name=None)

    def test_delete_twice(self):
        created = self.repo.create(_member())
        self.assertTrue(self.repo.delete(created.id))
        self.assertIsNone(self.repo.get_by_id(created.id))
        self.assertFalse(self.repo.delete(created.id))

    def test_ids_are_not_reused(self):
        self.repo.create(_member())
        second = self.repo.create(_member(name="Li Hua", email="li@lab.edu"))
        self.repo.delete(second.id)
        third = self.repo.create(_member(name="Wang Fang", email="w@lab.edu"))
        self.assertEqual(third.id, second.id + 1)


# ===========================================================================
# 3. Publications
# ===========================================================================

class TestPublicationRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = PublicationRepository(self.db)

    def tearDown(self):
        self.db.close()

    def test_create_round_trip_with_keywords(self):
        created = self.repo.create(_publication())
        fetched = self.repo.get_by_id(created.id)
        self.assertEqual(fetched.keywords, ["segmentation", "medical imaging"])
        self.assertEqual(fetched.citation_count, 0)
        self.assertTrue(fetched.is_highlighted)

    def test_sorted_by_year_desc_then_title(self):
        self.repo.create(_publication(title="B paper", year=2023))
        self.repo.create(_publication(title="A paper", year=2023))
        self.repo.create(_publication(title="C paper", year=2024))
        titles = [p.title for p in self.repo.list_all()]
        self.assertEqual(titles, ["C paper", "A paper", "B paper"])
        self.assertEqual(self.repo.list_years(), [2024, 2023])
        self.assertEqual([p.title for p in self.repo.list_by_year(2023)], ["A paper", "B paper"])

    def test_search_matches_keywords(self):
        self.repo.create(_publication())
        self.repo.create(_publication(title="Graph Attention", keywords=["graphs"]))
        self.assertEqual([p.title for p in self.repo.search("MEDICAL")], ["Robust Segmentation"])

    def test_highlighted_filter(self):
        self.repo.create(_publication())
        self.repo.create(_publication(title="Minor", is_highlighted=False))
        self.assertEqual([p.title for p in self.repo.list_highlighted()], ["Robust Segmentation"])

    def test_update_replaces_keywords(self):
        created = self.repo.create(_publication())
        updated = self.repo.update(
            created.id, PublicationPatch(keywords=["new"], citation_count=7)
        )
        self.assertEqual(updated.keywords, ["new"])
        self.assertEqual(updated.citation_count, 7)
        self.assertEqual(updated.title, created.title)

    def test_delete_cascades_keywords(self):
        created = self.repo.create(_publication())
        self.assertTrue(self.repo.delete(created.id))
        self.assertEqual(self.db.count("publication_keywords"), 0)

    def test_create_returns_stored_keywords(self):
        created = self.repo.create(_publication(keywords=["a", ""]))
        self.assertEqual(created.keywords, ["a"])
        self.assertEqual(self.repo.get_by_id(created.id), created)

    def test_negative_citation_count_rejected(self):
        with self.assertRaises(ValidationError):
            _publication(citation_count=-1)


# ===========================================================================
# 4. Patents
# ===========================================================================

class TestPatentRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = PatentRepository(self.db)

    def tearDown(self):
        self.db.close()

    def test_keywords_stored_as_json(self):
        created = self.repo.create(_patent())
        row = self.db.fetchone("SELECT keywords FROM patents WHERE id = ?", (created.id,))
        self.assertEqual(row["keywords"], '["CT", "detection"]')
        self.assertEqual(self.repo.get_by_id(created.id).keywords, ["CT", "detection"])

    def test_filters_and_sort(self):
        self.repo.create(_patent(patent_number="A", application_date="2021-01-01"))
        self.repo.create(_patent(
            patent_number="B", application_date="2023-01-01",
            status=PatentStatus.GRANTED, type=PatentType.UTILITY,
        ))
        self.assertEqual([p.patent_number for p in self.repo.list_all()], ["B", "A"])
        self.assertEqual(
            [p.patent_number for p in self.repo.list_by_status(PatentStatus.GRANTED)], ["B"]
        )
        self.assertEqual(
            [p.patent_number for p in self.repo.list_by_type(PatentType.INVENTION)], ["A"]
        )

    def test_search_by_number(self):
        self.repo.create(_patent())
        self.assertEqual(len(self.repo.search("cn2023")), 1)

    def test_invalid_status_rejected(self):
        with self.assertRaises(ValidationError):
            _patent(status="approved")

    def test_update_status(self):
        created = self.repo.create(_patent())
        updated = self.repo.update(
            created.id, PatentPatch(status=PatentStatus.GRANTED, grant_date="2024-06-01")
        )
        self.assertEqual(updated.status, PatentStatus.GRANTED)
        self.assertEqual(updated.grant_date, "2024-06-01")
        self.assertEqual(updated.keywords, created.keywords)

    def test_create_matches_read_back(self):
        created = self.repo.create(_patent(grant_date="", keywords=[]))
        self.assertEqual(self.repo.get_by_id(created.id), created)

    def test_delete_twice(self):
        created = self.repo.create(_patent())
        self.assertTrue(self.repo.delete(created.id))
        self.assertIsNone(self.repo.get_by_id(created.id))
        self.assertFalse(self.repo.delete(created.id))


# ===========================================================================
# 5. Projects
# ===========================================================================

class TestProjectRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = ProjectRepository(self.db)

    def tearDown(self):
        self.db.close()

    def test_name_and_source_map_to_columns(self):
        created = self.repo.create(_project())
        row = self.db.fetchone("SELECT title, funding_source FROM projects WHERE id = ?", (created.id,))
        self.assertEqual(row["title"], "Trustworthy AI")
        self.assertEqual(row["funding_source"], "NSFC")
        self.assertEqual(self.repo.get_by_id(created.id), created)

    def test_list_by_status_and_search(self):
        self.repo.create(_project())
        self.repo.create(_project(name="Old grant", start_date="2018-01-01", is_active=False))
        self.assertEqual([p.name for p in self.repo.list_by_status(False)], ["Old grant"])
        self.assertEqual([p.name for p in self.repo.list_all()], ["Trustworthy AI", "Old grant"])
        self.assertEqual(len(self.repo.search("nsfc")), 2)

    def test_update(self):
        created = self.repo.create(_project())
        updated = self.repo.update(created.id, ProjectPatch(end_date="2026-12-31"))
        self.assertEqual(updated.end_date, "2026-12-31")
        self.assertEqual(updated.source, "NSFC")

    def test_create_matches_read_back(self):
        created = self.repo.create(_project(source="", leader="", end_date=""))
        self.assertEqual(self.repo.get_by_id(created.id), created)

    def test_delete_twice(self):
        created = self.repo.create(_project())
        self.assertTrue(self.repo.delete(created.id))
        self.assertIsNone(self.repo.get_by_id(created.id))
        self.assertFalse(self.repo.delete(created.id))


# ===========================================================================
# 6. News
# ===========================================================================

class TestNewsRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = NewsRepository(self.db)
        self.repo.create(_news(title="Old", publish_date="2023-01-01"))
        self.repo.create(_news(title="Newest", publish_date="2024-05-01"))
        self.repo.create(_news(title="Middle", publish_date="2023-06-01", is_published=False))

    def tearDown(self):
        self.db.close()

    def test_sorted_by_publish_date_desc(self):
        self.assertEqual([n.title for n in self.repo.list_all()], ["Newest", "Middle", "Old"])

    def test_limit_and_recent(self):
        self.assertEqual([n.title for n in self.repo.list_all(limit=2)], ["Newest", "Middle"])
        self.assertEqual(len(self.repo.list_recent()), 3)

    def test_published_only(self):
        self.assertEqual([n.title for n in self.repo.list_published()], ["Newest", "Old"])

    def test_update_unpublish(self):
        item = self.repo.list_all()[0]
        updated = self.repo.update(item.id, NewsPatch(is_published=False))
        self.assertFalse(updated.is_published)
        self.assertEqual(updated.content, item.content)

    def test_to_dict_keeps_publish_date_key(self):
        data = self.repo.list_all()[0].to_dict()
        self.assertIn("publish_date", data)
        self.assertIn("isPublished", data)

    def test_create_matches_read_back(self):
        created = self.repo.create(_news(image_url="", author=""))
        self.assertIsNone(created.image_url)
        self.assertEqual(self.repo.get_by_id(created.id), created)

    def test_delete_twice(self):
        item = self.repo.list_all()[0]
        self.assertTrue(self.repo.delete(item.id))
        self.assertIsNone(self.repo.get_by_id(item.id))
        self.assertFalse(self.repo.delete(item.id))
        self.assertEqual(self.repo.count(), 2)


# ===========================================================================
# 7. Todos
# ===========================================================================

class TestTodoRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = TodoRepository(self.db)

    def tearDown(self):
        self.db.close()

    def test_defaults(self):
        todo = self.repo.create(TodoCreate(text="Update site"))
        self.assertFalse(todo.completed)
        self.assertEqual(todo.priority, TodoPriority.MEDIUM)
        self.assertIsNone(todo.completed_at)
        self.assertTrue(todo.created_at)

    def test_toggle_stamps_and_clears_completed_at(self):
        todo = self.repo.create(TodoCreate(text="Update site"))
        done = self.repo.toggle(todo.id)
        self.assertTrue(done.completed)
        self.assertIsNotNone(done.completed_at)
        reopened = self.repo.toggle(todo.id)
        self.assertFalse(reopened.completed)
        self.assertIsNone(reopened.completed_at)
        self.assertIsNone(self.repo.toggle(999))

    def test_open_items_first_then_deadline(self):
        self.repo.create(TodoCreate(text="no deadline"))
        self.repo.create(TodoCreate(text="late", deadline="2024-12-01"))
        self.repo.create(TodoCreate(text="soon", deadline="2024-01-01"))
        self.repo.create(TodoCreate(text="done", completed=True))
        self.assertEqual(
            [t.text for t in self.repo.list_all()], ["soon", "late", "no deadline", "done"]
        )
        self.assertEqual([t.text for t in self.repo.list_all(completed=True)], ["done"])

    def test_update_priority(self):
        todo = self.repo.create(TodoCreate(text="x"))
        updated = self.repo.update(todo.id, TodoPatch(priority=TodoPriority.HIGH))
        self.assertEqual(updated.priority, TodoPriority.HIGH)
        self.assertEqual(updated.text, "x")

    def test_creator_deleted_sets_null(self):
        users = UserRepository(self.db)
        user = users.create(UserCreate(username="admin", password="secret1", email="a@lab.edu"))
        todo = self.repo.create(TodoCreate(text="x", created_by=user.id))
        self.assertEqual([t.id for t in self.repo.list_by_user(user.id)], [todo.id])
        users.delete(user.id)
        self.assertIsNone(self.repo.get_by_id(todo.id).created_by)

    def test_create_matches_read_back(self):
        todo = self.repo.create(TodoCreate(text="x", deadline=""))
        self.assertEqual(self.repo.get_by_id(todo.id), todo)

    def test_delete_twice(self):
        todo = self.repo.create(TodoCreate(text="x"))
        self.assertTrue(self.repo.delete(todo.id))
        self.assertIsNone(self.repo.get_by_id(todo.id))
        self.assertFalse(self.repo.delete(todo.id))


# ===========================================================================
# 8. Users
# ===========================================================================

class TestUserRepository(unittest.TestCase):
    def setUp(self):
        self.db = _make_db()
        self.repo = UserRepository(self.db)
        self.user = self.repo.create(
            UserCreate(username="admin", password="secret1", email="admin@lab.edu")
        )

    def tearDown(self):
        self.db.close()

    def test_create_matches_read_back(self):
        self.assertEqual(self.repo.get_by_id(self.user.id), self.user)

    def test_password_is_hashed(self):
        row = self.db.fetchone("SELECT password_hash FROM users WHERE id = ?", (self.user.id,))
        self.assertNotEqual(row["password_hash"], "secret1")
        self.assertNotIn("secret1", row["password_hash"])

    def test_to_dict_has_no_password(self):
        data = self.user.to_dict()
        self.assertNotIn("password", data)
        self.assertNotIn("passwordHash", data)

    def test_authenticate(self):
        self.assertIsNone(self.repo.authenticate("admin", "wrong"))
        self.assertIsNone(self.repo.authenticate("nobody", "secret1"))
        user = self.repo.authenticate("admin", "secret1")
        self.assertEqual(user.id, self.user.id)
        self.assertIsNotNone(user.last_login)

    def test_inactive_user_cannot_authenticate(self):
        self.repo.update(self.user.id, UserPatch(is_active=False))
        self.assertIsNone(self.repo.authenticate("admin", "secret1"))

    def test_update_password(self):
        self.repo.update(self.user.id, UserPatch(password="another1", name="Admin"))
        self.assertIsNone(self.repo.authenticate("admin", "secret1"))
        user = self.repo.authenticate("admin", "another1")
        self.assertEqual(user.name, "Admin")

    def test_duplicate_username_raises(self):
        with self.assertRaises(sqlite3.IntegrityError):
            self.repo.create(UserCreate(username="admin", password="secret2", email="b@lab.edu"))

    def test_short_password_rejected(self):
        with self.assertRaises(ValidationError):
            UserCreate(username="x", password="123", email="x@lab.edu")


if __name__ == "__main__":
    unittest.main()
