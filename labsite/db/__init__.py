"""SQLite store, document backends and the per-entity repositories."""

from labsite.db.database import Database
from labsite.db.store import Store

__all__ = ["Database", "Store"]
