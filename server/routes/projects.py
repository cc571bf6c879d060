"""/api/projects"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from labsite.db.store import Store
from labsite.models.project import ProjectCreate, ProjectPatch
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("")
async def list_projects(
    search: Optional[str] = None,
    is_active: Optional[str] = Query(None, alias="isActive"),
    limit: Optional[str] = None,
    store: Store = Depends(get_store),
):
    active = parse_bool(is_active)
    if search:
        projects = store.projects.search(search)
        if active is not None:
            projects = [p for p in projects if p.is_active == active]
    else:
        projects = store.projects.list_all(is_active=active)
    return [p.to_dict() for p in apply_limit(projects, limit)]


@router.get("/{item_id}")
async def get_project(item_id: ItemId, store: Store = Depends(get_store)):
    project = store.projects.get_by_id(item_id)
    if project is None:
        raise not_found("Project", item_id)
    return project.to_dict()


@router.post("", status_code=201)
async def create_project(data: ProjectCreate, store: Store = Depends(get_store)):
    return store.projects.create(data).to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_project(item_id: ItemId, patch: ProjectPatch, store: Store = Depends(get_store)):
    project = store.projects.update(item_id, patch)
    if project is None:
        raise not_found("Project", item_id)
    return project.to_dict()


@router.delete("/{item_id}")
async def delete_project(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.projects.delete(item_id):
        raise not_found("Project", item_id)
    return DELETED
