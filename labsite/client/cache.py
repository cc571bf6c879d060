"""Per-entity read cache for the API client.

Each entity type has one slot holding the last fetched list and the time
it was fetched.  A slot is fresh for ``ttl`` seconds.  Local mutations
patch a populated slot in place without touching its fetch time; a slot
that was never filled stays empty.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

Item = dict[str, Any]


@dataclass
class CacheSlot:
    items: list[Item]
    fetched_at: float


class EntityCache:
    def __init__(self, ttl: float = 5.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._slots: dict[str, CacheSlot] = {}

    def fresh(self, entity: str) -> Optional[list[Item]]:
        """Cached items for *entity* if fetched less than ``ttl`` seconds ago."""
        slot = self._slots.get(entity)
        if slot is None or self._clock() - slot.fetched_at >= self.ttl:
            return None
        return list(slot.items)

    def find(self, entity: str, item_id: int) -> Optional[Item]:
        slot = self._slots.get(entity)
        if slot is None:
            return None
        return next((i for i in slot.items if i.get("id") == item_id), None)

    def store(self, entity: str, items: list[Item]) -> None:
        self._slots[entity] = CacheSlot(items=list(items), fetched_at=self._clock())

    def invalidate(self, entity: Optional[str] = None) -> None:
        if entity is None:
            self._slots.clear()
        else:
            self._slots.pop(entity, None)

    # -- local reconciliation --------------------------------------------------

    def append(self, entity: str, item: Item) -> None:
        slot = self._slots.get(entity)
        if slot is not None:
            slot.items = [*slot.items, item]

    def replace(self, entity: str, item: Item) -> None:
        slot = self._slots.get(entity)
        if slot is not None:
            slot.items = [item if i.get("id") == item.get("id") else i for i in slot.items]

    def remove(self, entity: str, item_id: int) -> None:
        slot = self._slots.get(entity)
        if slot is not None:
            slot.items = [i for i in slot.items if i.get("id") != item_id]
