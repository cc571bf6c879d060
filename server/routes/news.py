"""/api/news"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from labsite.db.store import Store
from labsite.models.news import NewsCreate, NewsPatch
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool

router = APIRouter(prefix="/api/news", tags=["news"])


@router.get("")
async def list_news(
    published: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[str] = None,
    store: Store = Depends(get_store),
):
    published_only = parse_bool(published) is True
    if search:
        items = store.news.search(search)
        if published_only:
            items = [n for n in items if n.is_published]
    else:
        items = store.news.list_all(published_only=published_only)
    return [n.to_dict() for n in apply_limit(items, limit)]


@router.get("/{item_id}")
async def get_news(item_id: ItemId, store: Store = Depends(get_store)):
    item = store.news.get_by_id(item_id)
    if item is None:
        raise not_found("News", item_id)
    return item.to_dict()


@router.post("", status_code=201)
async def create_news(data: NewsCreate, store: Store = Depends(get_store)):
    return store.news.create(data).to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_news(item_id: ItemId, patch: NewsPatch, store: Store = Depends(get_store)):
    item = store.news.update(item_id, patch)
    if item is None:
        raise not_found("News", item_id)
    return item.to_dict()


@router.delete("/{item_id}")
async def delete_news(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.news.delete(item_id):
        raise not_found("News", item_id)
    return DELETED
