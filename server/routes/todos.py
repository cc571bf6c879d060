"""/api/todos"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from labsite.db.store import Store
from labsite.models.todo import TodoCreate, TodoPatch
from server.deps import DELETED, ItemId, apply_limit, get_store, not_found, parse_bool

router = APIRouter(prefix="/api/todos", tags=["todos"])


@router.get("")
async def list_todos(
    completed: Optional[str] = None,
    limit: Optional[str] = None,
    store: Store = Depends(get_store),
):
    todos = store.todos.list_all(completed=parse_bool(completed))
    return [t.to_dict() for t in apply_limit(todos, limit)]


@router.get("/{item_id}")
async def get_todo(item_id: ItemId, store: Store = Depends(get_store)):
    todo = store.todos.get_by_id(item_id)
    if todo is None:
        raise not_found("Todo", item_id)
    return todo.to_dict()


@router.post("", status_code=201)
async def create_todo(data: TodoCreate, store: Store = Depends(get_store)):
    return store.todos.create(data).to_dict()


@router.patch("/{item_id}/toggle")
async def toggle_todo(item_id: ItemId, store: Store = Depends(get_store)):
    todo = store.todos.toggle(item_id)
    if todo is None:
        raise not_found("Todo", item_id)
    return todo.to_dict()


@router.api_route("/{item_id}", methods=["PATCH", "PUT"])
async def update_todo(item_id: ItemId, patch: TodoPatch, store: Store = Depends(get_store)):
    todo = store.todos.update(item_id, patch)
    if todo is None:
        raise not_found("Todo", item_id)
    return todo.to_dict()


@router.delete("/{item_id}")
async def delete_todo(item_id: ItemId, store: Store = Depends(get_store)):
    if not store.todos.delete(item_id):
        raise not_found("Todo", item_id)
    return DELETED
