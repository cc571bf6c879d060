"""Request dependencies and small helpers shared by the routers."""

from __future__ import annotations

from typing import Annotated, Optional, Sequence, TypeVar

from fastapi import Path, Request

from labsite.config import Settings
from labsite.db.store import Store
from labsite.errors import RecordNotFoundError

T = TypeVar("T")

# ids are SQLite INTEGER keys; anything outside 1..2**63-1 is rejected with a 400
ItemId = Annotated[int, Path(ge=1, le=2**63 - 1)]


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """``"true"``/``"1"`` -> True, ``"false"``/``"0"`` -> False, anything else -> None."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    return None


def apply_limit(items: Sequence[T], limit: Optional[str]) -> list[T]:
    """Keep the first *limit* items; a missing, non-numeric or non-positive limit keeps all."""
    try:
        n = int(limit) if limit is not None else 0
    except ValueError:
        n = 0
    return list(items[:n]) if n > 0 else list(items)


def not_found(entity: str, item_id: int) -> RecordNotFoundError:
    return RecordNotFoundError(entity, item_id)


DELETED = {"success": True}
