"""Research area / direction / feature models.

These three collections are small hand-curated lists persisted as JSON
documents.  Each item carries a 1-based ``order`` that controls display
sequence; the repository keeps it dense.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from labsite.models.common import ApiModel, EntityPatch, NonEmptyStr, api_dict


@dataclass
class OrderedItem:
    id: int
    title: str
    description: str = ""
    order: int = 1
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return api_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderedItem":
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            description=data.get("description") or "",
            order=int(data.get("order") or 1),
            is_active=bool(data.get("isActive", True)),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )


@dataclass
class ResearchArea(OrderedItem):
    link: Optional[str] = ""

    def __post_init__(self) -> None:
        if not self.link:
            self.link = f"/main/research#{self.id}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResearchArea":
        base = OrderedItem.from_dict(data)
        return cls(**vars(base), link=data.get("link") or "")


@dataclass
class ResearchDirection(OrderedItem):
    pass


@dataclass
class ResearchFeature(OrderedItem):
    pass


# -- payloads ------------------------------------------------------------------

class OrderedItemCreate(ApiModel):
    title: NonEmptyStr
    description: str = ""
    order: Optional[int] = None
    is_active: bool = True


class ResearchAreaCreate(OrderedItemCreate):
    description: NonEmptyStr
    link: Optional[str] = None


class ResearchDirectionCreate(OrderedItemCreate):
    pass


class ResearchFeatureCreate(OrderedItemCreate):
    description: NonEmptyStr


class OrderedItemPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({"title", "description", "order", "is_active"})

    title: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class ResearchAreaPatch(OrderedItemPatch):
    NOT_NULL: ClassVar[frozenset[str]] = OrderedItemPatch.NOT_NULL | {"link"}

    link: Optional[str] = None
