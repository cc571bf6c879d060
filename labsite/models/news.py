"""News domain model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from pydantic import Field

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag,
)


@dataclass
class News:
    id: int
    title: str
    content: str
    publish_date: str
    author: str = ""
    is_published: bool = True
    image_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        # publish_date keeps its snake_case name on the wire
        return api_dict(self, keep_snake=("publish_date",))

    def to_row(self) -> tuple:
        return (
            self.title, self.content, self.publish_date,
            self.author or None, self.image_url or None,
            1 if self.is_published else 0,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "News":
        return cls(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            publish_date=row["publish_date"],
            author=row.get("author") or "",
            is_published=from_flag(row.get("is_published"), default=True),
            image_url=row.get("image_url"),
        )


class NewsCreate(ApiModel):
    title: NonEmptyStr
    content: NonEmptyStr
    publish_date: NonEmptyStr = Field(alias="publish_date")
    author: str = ""
    is_published: bool = True
    image_url: Optional[str] = None


class NewsPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({
        "title", "content", "publish_date", "is_published",
    })

    title: Optional[NonEmptyStr] = None
    content: Optional[NonEmptyStr] = None
    publish_date: Optional[NonEmptyStr] = Field(default=None, alias="publish_date")
    author: Optional[str] = None
    is_published: Optional[bool] = None
    image_url: Optional[str] = None
