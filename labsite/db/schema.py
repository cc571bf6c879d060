"""Database schema DDL: all table definitions for the website store."""

SCHEMA_DDL = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys = ON;

-- ==========================================================================
-- Team Members
-- ==========================================================================
CREATE TABLE IF NOT EXISTS team_members (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            TEXT NOT NULL,
    title           TEXT NOT NULL,
    degree          TEXT,
    research        TEXT NOT NULL,
    email           TEXT NOT NULL,
    category        TEXT NOT NULL
                    CHECK(category IN ('professor','associate','postdoc','student')),
    google_scholar  TEXT,
    research_gate   TEXT,
    orcid           TEXT,
    bio             TEXT,
    photo_url       TEXT,
    is_active       INTEGER NOT NULL DEFAULT 1,
    join_date       TEXT NOT NULL,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_team_members_category ON team_members(category);
CREATE INDEX IF NOT EXISTS idx_team_members_name ON team_members(name);

-- ==========================================================================
-- Publications (+ keywords, one-to-many)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS publications (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    title           TEXT NOT NULL,
    authors         TEXT NOT NULL,
    journal         TEXT NOT NULL,
    year            INTEGER NOT NULL,
    volume          TEXT,
    issue           TEXT,
    pages           TEXT,
    doi             TEXT,
    abstract        TEXT,
    pdf_url         TEXT,
    is_highlighted  INTEGER NOT NULL DEFAULT 1,
    citation_count  INTEGER NOT NULL DEFAULT 0,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_publications_year ON publications(year);

CREATE TABLE IF NOT EXISTS publication_keywords (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    publication_id  INTEGER NOT NULL REFERENCES publications(id) ON DELETE CASCADE,
    keyword         TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_publication_keywords_pub ON publication_keywords(publication_id);

-- ==========================================================================
-- Projects (leader is denormalised text, not a foreign key)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS projects (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    title           TEXT NOT NULL,
    description     TEXT NOT NULL DEFAULT '',
    start_date      TEXT NOT NULL,
    end_date        TEXT,
    funding_source  TEXT,
    funding_amount  REAL,
    leader          TEXT NOT NULL DEFAULT '',
    is_active       INTEGER NOT NULL DEFAULT 1,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_projects_leader ON projects(leader);

-- ==========================================================================
-- News
-- ==========================================================================
CREATE TABLE IF NOT EXISTS news (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    title           TEXT NOT NULL,
    content         TEXT NOT NULL,
    publish_date    TEXT NOT NULL,
    author          TEXT,
    image_url       TEXT,
    is_published    INTEGER NOT NULL DEFAULT 1,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_news_publish_date ON news(publish_date);

-- ==========================================================================
-- Patents (keywords JSON-encoded)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS patents (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    title            TEXT NOT NULL,
    inventors        TEXT NOT NULL,
    patent_number    TEXT NOT NULL,
    application_date TEXT NOT NULL,
    grant_date       TEXT,
    abstract         TEXT,
    keywords         TEXT NOT NULL DEFAULT '[]',
    status           TEXT NOT NULL CHECK(status IN ('pending','granted','expired')),
    type             TEXT NOT NULL CHECK(type IN ('invention','utility','design')),
    pdf_url          TEXT,
    is_highlighted   INTEGER NOT NULL DEFAULT 1,
    created_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_patents_status ON patents(status);
CREATE INDEX IF NOT EXISTS idx_patents_type ON patents(type);
CREATE INDEX IF NOT EXISTS idx_patents_application_date ON patents(application_date);

-- ==========================================================================
-- Users (salted password hashes only)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS users (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    username        TEXT NOT NULL UNIQUE,
    password_hash   TEXT NOT NULL,
    name            TEXT,
    email           TEXT NOT NULL UNIQUE,
    role            TEXT NOT NULL DEFAULT 'editor'
                    CHECK(role IN ('admin','editor')),
    is_active       INTEGER NOT NULL DEFAULT 1,
    last_login      TEXT,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

-- ==========================================================================
-- Todos
-- ==========================================================================
CREATE TABLE IF NOT EXISTS todos (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    text            TEXT NOT NULL,
    deadline        TEXT,
    completed       INTEGER NOT NULL DEFAULT 0,
    priority        TEXT NOT NULL DEFAULT 'medium'
                    CHECK(priority IN ('high','medium','low')),
    created_by      INTEGER REFERENCES users(id) ON DELETE SET NULL,
    completed_at    TEXT,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_todos_created_by ON todos(created_by);

-- ==========================================================================
-- Documents (research areas / directions / features, sqlite backend)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS documents (
    collection      TEXT PRIMARY KEY,
    body            TEXT NOT NULL DEFAULT '[]',
    next_id         INTEGER NOT NULL DEFAULT 1,
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);
"""

TABLES = (
    "team_members", "publications", "publication_keywords", "projects",
    "news", "patents", "users", "todos", "documents",
)
