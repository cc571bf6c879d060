"""Repository for the order-bearing research collections.

Areas, directions and features share one implementation.  The storage
backend (JSON file or SQLite document row) is injected; callers never see
which one is in use.

Ordering rules:
  * create: a missing or non-positive ``order`` becomes ``max(order) + 1``
    (1 for an empty collection);
  * update: a non-positive ``order`` becomes 1;
  * delete: survivors are sorted by ``(order, id)`` and renumbered 1..N.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from labsite.db.database import utc_now
from labsite.db.document_store import DocumentBackend
from labsite.models.common import merge
from labsite.models.research import OrderedItem, OrderedItemCreate, OrderedItemPatch

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=OrderedItem)


class OrderedItemRepository(Generic[T]):
    def __init__(self, backend: DocumentBackend, model: type[T]):
        self._backend = backend
        self._model = model

    @property
    def name(self) -> str:
        return self._backend.name

    def _load(self) -> tuple[list[T], int]:
        raw, next_id = self._backend.read()
        return [self._model.from_dict(r) for r in raw], next_id

    def _save(self, items: list[T], next_id: int) -> None:
        self._backend.write([i.to_dict() for i in items], next_id)

    @staticmethod
    def _sorted(items: list[T]) -> list[T]:
        return sorted(items, key=lambda i: (i.order, i.id))

    # -- Read ------------------------------------------------------------------

    def list_all(self, active_only: bool = False) -> list[T]:
        items, _ = self._load()
        if active_only:
            items = [i for i in items if i.is_active]
        return self._sorted(items)

    def get_by_id(self, item_id: int) -> Optional[T]:
        items, _ = self._load()
        return next((i for i in items if i.id == item_id), None)

    def count(self) -> int:
        items, _ = self._load()
        return len(items)

    # -- Create ----------------------------------------------------------------

    def create(self, data: OrderedItemCreate) -> T:
        items, next_id = self._load()
        order = data.order
        if order is None or order <= 0:
            order = max((i.order for i in items), default=0) + 1

        now = utc_now()
        fields: dict[str, Any] = data.model_dump(exclude={"order"})
        item = self._model(id=next_id, order=order, created_at=now, updated_at=now, **fields)
        items.append(item)
        self._save(items, next_id + 1)
        logger.info(f"Created {self.name} item {item.id}: {item.title}")
        return item

    # -- Update ----------------------------------------------------------------

    def update(self, item_id: int, patch: OrderedItemPatch) -> Optional[T]:
        items, next_id = self._load()
        for index, existing in enumerate(items):
            if existing.id == item_id:
                break
        else:
            return None

        updated = merge(existing, patch)
        if updated.order <= 0:
            updated.order = 1
        updated.updated_at = utc_now()
        items[index] = updated
        self._save(items, next_id)
        logger.info(f"Updated {self.name} item {item_id}: {sorted(patch.changes())}")
        return updated

    # -- Delete ----------------------------------------------------------------

    def delete(self, item_id: int) -> bool:
        items, next_id = self._load()
        survivors = [i for i in items if i.id != item_id]
        if len(survivors) == len(items):
            return False

        now = utc_now()
        survivors = self._sorted(survivors)
        for position, item in enumerate(survivors, start=1):
            if item.order != position:
                item.order = position
                item.updated_at = now
        self._save(survivors, next_id)
        logger.info(f"Deleted {self.name} item {item_id}, {len(survivors)} remaining")
        return True
