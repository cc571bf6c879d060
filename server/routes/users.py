"""/api/users and /api/auth/login

Responses never include a password or its hash.  Login only checks the
credentials; no session or token is issued.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from labsite.db.store import Store
from labsite.models.user import LoginRequest, UserCreate, UserPatch
from server.deps import DELETED, ItemId, get_store, not_found

router = APIRouter(prefix="/api/users", tags=["users"])
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("")
async def list_users(store: Store = Depends(get_store)):
    return [u.to_dict() for u in store.users.list_all()]


@router.get("/{item_id}")
async def get_user(item_id: ItemId, store: Store = Depends(get_store)):
    user = store.users.get_by_id(item_id)
    if user is None:
        raise not_found("User", item_id)
    return user.to_dict()


@router.post("", status_code=201)
async def create_user(data: UserCreate, store: Store = Depends(get_store)):
    return store.users.create(data).to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_user(item_id: ItemId, patch: UserPatch, store: Store = Depends(get_store)):
    user = store.users.update(item_id, patch)
    if user is None:
        raise not_found("User", item_id)
    return user.to_dict()


@router.delete("/{item_id}")
async def delete_user(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.users.delete(item_id):
        raise not_found("User", item_id)
    return DELETED


@auth_router.post("/login")
async def login(data: LoginRequest, store: Store = Depends(get_store)):
    user = store.users.authenticate(data.username, data.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return user.to_dict()
