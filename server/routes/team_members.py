"""/api/team-members"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from labsite.db.store import Store
from labsite.models.team_member import (
    CATEGORY_RANK, MemberCategory, TeamMemberCreate, TeamMemberPatch,
)
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool

router = APIRouter(prefix="/api/team-members", tags=["team-members"])


@router.get("")
async def list_team_members(
    category: Optional[MemberCategory] = None,
    search: Optional[str] = None,
    is_active: Optional[str] = Query(None, alias="isActive"),
    sort: str = "name",
    limit: Optional[str] = None,
    store: Store = Depends(get_store),
):
    active = parse_bool(is_active)
    if search:
        members = store.team_members.search(search)
        if category:
            members = [m for m in members if m.category == category]
        if active is not None:
            members = [m for m in members if m.is_active == active]
        if sort == "category":
            members.sort(key=lambda m: CATEGORY_RANK[m.category.value])
    else:
        members = store.team_members.list_all(
            category=category, active_only=active, order_by=sort
        )
    return [m.to_dict() for m in apply_limit(members, limit)]


@router.get("/{item_id}")
async def get_team_member(item_id: ItemId, store: Store = Depends(get_store)):
    member = store.team_members.get_by_id(item_id)
    if member is None:
        raise not_found("Team member", item_id)
    return member.to_dict()


@router.post("", status_code=201)
async def create_team_member(data: TeamMemberCreate, store: Store = Depends(get_store)):
    return store.team_members.create(data).to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_team_member(
    item_id: ItemId, patch: TeamMemberPatch, store: Store = Depends(get_store)
):
    member = store.team_members.update(item_id, patch)
    if member is None:
        raise not_found("Team member", item_id)
    return member.to_dict()


@router.delete("/{item_id}")
async def delete_team_member(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.team_members.delete(item_id):
        raise not_found("Team member", item_id)
    return DELETED
