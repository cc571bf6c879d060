"""/api/publications"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from labsite.db.store import Store
from labsite.models.publication import PublicationCreate, PublicationPatch
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool

router = APIRouter(prefix="/api/publications", tags=["publications"])


@router.get("")
async def list_publications(
    search: Optional[str] = None,
    year: Optional[int] = None,
    highlighted: Optional[str] = None,
    limit: Optional[str] = None,
    store: Store = Depends(get_store),
):
    flag = parse_bool(highlighted)
    if search:
        pubs = store.publications.search(search)
        if year is not None:
            pubs = [p for p in pubs if p.year == year]
        if flag is not None:
            pubs = [p for p in pubs if p.is_highlighted == flag]
    else:
        pubs = store.publications.list_all(year=year, highlighted=flag)
    return [p.to_dict() for p in apply_limit(pubs, limit)]


@router.get("/years")
async def list_publication_years(store: Store = Depends(get_store)):
    return store.publications.list_years()


@router.get("/{item_id}")
async def get_publication(item_id: ItemId, store: Store = Depends(get_store)):
    pub = store.publications.get_by_id(item_id)
    if pub is None:
        raise not_found("Publication", item_id)
    return pub.to_dict()


@router.post("", status_code=201)
async def create_publication(data: PublicationCreate, store: Store = Depends(get_store)):
    return store.publications.create(data).to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_publication(
    item_id: ItemId, patch: PublicationPatch, store: Store = Depends(get_store)
):
    pub = store.publications.update(item_id, patch)
    if pub is None:
        raise not_found("Publication", item_id)
    return pub.to_dict()


@router.delete("/{item_id}")
async def delete_publication(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.publications.delete(item_id):
        raise not_found("Publication", item_id)
    return DELETED
