"""Todo item domain model: admin dashboard checklist."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag,
)


class TodoPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class TodoItem:
    id: int
    text: str
    deadline: Optional[str] = None
    completed: bool = False
    priority: TodoPriority = TodoPriority.MEDIUM
    created_by: Optional[int] = None
    created_at: str = ""
    completed_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = api_dict(self)
        data["priority"] = self.priority.value
        return data

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "TodoItem":
        return cls(
            id=row["id"],
            text=row["text"],
            deadline=row.get("deadline"),
            completed=from_flag(row.get("completed")),
            priority=TodoPriority(row.get("priority") or "medium"),
            created_by=row.get("created_by"),
            created_at=row.get("created_at", ""),
            completed_at=row.get("completed_at"),
        )


class TodoCreate(ApiModel):
    text: NonEmptyStr
    deadline: Optional[str] = None
    completed: bool = False
    priority: TodoPriority = TodoPriority.MEDIUM
    created_by: Optional[int] = None


class TodoPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({"text", "completed", "priority"})

    text: Optional[NonEmptyStr] = None
    deadline: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[TodoPriority] = None
    created_by: Optional[int] = None
