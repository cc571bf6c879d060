"""/api/patents"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from labsite.db.store import Store
from labsite.models.patent import PatentCreate, PatentPatch, PatentStatus, PatentType
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool

router = APIRouter(prefix="/api/patents", tags=["patents"])


@router.get("")
async def list_patents(
    search: Optional[str] = None,
    status: Optional[PatentStatus] = None,
    patent_type: Optional[PatentType] = Query(None, alias="type"),
    highlighted: Optional[str] = None,
    limit: Optional[str] = None,
    store: Store = Depends(get_store),
):
    flag = parse_bool(highlighted)
    if search:
        patents = store.patents.search(search)
        if status:
            patents = [p for p in patents if p.status == status]
        if patent_type:
            patents = [p for p in patents if p.type == patent_type]
        if flag is not None:
            patents = [p for p in patents if p.is_highlighted == flag]
    else:
        patents = store.patents.list_all(
            status=status, patent_type=patent_type, highlighted=flag
        )
    return [p.to_dict() for p in apply_limit(patents, limit)]


@router.get("/{item_id}")
async def get_patent(item_id: ItemId, store: Store = Depends(get_store)):
    patent = store.patents.get_by_id(item_id)
    if patent is None:
        raise not_found("Patent", item_id)
    return patent.to_dict()


@router.post("", status_code=201)
async def create_patent(data: PatentCreate, store: Store = Depends(get_store)):
    return store.patents.create(data).to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_patent(item_id: ItemId, patch: PatentPatch, store: Store = Depends(get_store)):
    patent = store.patents.update(item_id, patch)
    if patent is None:
        raise not_found("Patent", item_id)
    return patent.to_dict()


@router.delete("/{item_id}")
async def delete_patent(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.patents.delete(item_id):
        raise not_found("Patent", item_id)
    return DELETED
