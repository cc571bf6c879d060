"""/api/research-areas, /api/research-directions, /api/research-features

The three collections share one router factory.  Annotations here must stay
real classes (no postponed evaluation) because the payload types are
closure variables.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from labsite.db.ordered_repo import OrderedItemRepository
from labsite.db.store import Store
from labsite.models.research import (
    OrderedItemPatch,
    ResearchAreaCreate,
    ResearchAreaPatch,
    ResearchDirectionCreate,
    ResearchFeatureCreate,
)
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool


def build_router(path: str, attr: str, label: str, create_model: type, patch_model: type) -> APIRouter:
    router = APIRouter(prefix=f"/api/{path}", tags=[path])

    def repo(store: Store = Depends(get_store)) -> OrderedItemRepository:
        return getattr(store, attr)

    @router.get("")
    async def list_items(
        active: Optional[str] = None,
        limit: Optional[str] = None,
        items: OrderedItemRepository = Depends(repo),
    ):
        rows = items.list_all(active_only=parse_bool(active) is True)
        return [i.to_dict() for i in apply_limit(rows, limit)]

    @router.get("/{item_id}")
    async def get_item(item_id: ItemId, items: OrderedItemRepository = Depends(repo)):
        item = items.get_by_id(item_id)
        if item is None:
            raise not_found(label, item_id)
        return item.to_dict()

    @router.post("", status_code=201)
    async def create_item(data: create_model, items: OrderedItemRepository = Depends(repo)):  # type: ignore[valid-type]
        return items.create(data).to_dict()

    @router.api_route("/{item_id}", methods=["PATCH", "PUT"])
    async def update_item(
        item_id: ItemId,
        patch: patch_model,  # type: ignore[valid-type]
        items: OrderedItemRepository = Depends(repo),
    ):
        item = items.update(item_id, patch)
        if item is None:
            raise not_found(label, item_id)
        return item.to_dict()

    @router.delete("/{item_id}")
    async def delete_item(item_id: ItemId, items: OrderedItemRepository = Depends(repo)):
        if not items.delete(item_id):
            raise not_found(label, item_id)
        return DELETED

    return router


areas_router = build_router(
    "research-areas", "research_areas", "Research area", ResearchAreaCreate, ResearchAreaPatch
)
directions_router = build_router(
    "research-directions", "research_directions", "Research direction",
    ResearchDirectionCreate, OrderedItemPatch,
)
features_router = build_router(
    "research-features", "research_features", "Research feature",
    ResearchFeatureCreate, OrderedItemPatch,
)
