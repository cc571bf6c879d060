"""Admin user domain model.

Only a salted password hash is persisted.  ``User`` never carries the hash,
so serialising a user can not leak it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag,
)


class UserRole(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"


@dataclass
class User:
    id: int
    username: str
    email: str
    role: UserRole = UserRole.EDITOR
    name: Optional[str] = None
    is_active: bool = True
    last_login: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = api_dict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            role=UserRole(row.get("role") or "editor"),
            name=row.get("name"),
            is_active=from_flag(row.get("is_active"), default=True),
            last_login=row.get("last_login"),
        )


class UserCreate(ApiModel):
    username: NonEmptyStr
    password: str = Field(min_length=6)
    email: NonEmptyStr
    role: UserRole = UserRole.EDITOR
    name: Optional[str] = None
    is_active: bool = True


class UserPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({
        "username", "password", "email", "role", "is_active",
    })

    username: Optional[NonEmptyStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    email: Optional[NonEmptyStr] = None
    role: Optional[UserRole] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None


class LoginRequest(ApiModel):
    username: NonEmptyStr
    password: NonEmptyStr
