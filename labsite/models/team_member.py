"""Team member domain model: the group roster."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, ClassVar, Optional

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag,
)


class MemberCategory(str, Enum):
    PROFESSOR = "professor"
    ASSOCIATE = "associate"
    POSTDOC = "postdoc"
    STUDENT = "student"


# Listing order when members are grouped by category
CATEGORY_RANK: dict[str, int] = {
    MemberCategory.PROFESSOR.value: 0,
    MemberCategory.ASSOCIATE.value: 1,
    MemberCategory.POSTDOC.value: 2,
    MemberCategory.STUDENT.value: 3,
}


@dataclass
class TeamMember:
    """A member of the research group."""

    id: int
    name: str
    title: str
    research: str
    email: str
    category: MemberCategory
    join_date: str
    degree: Optional[str] = None
    google_scholar: Optional[str] = None
    research_gate: Optional[str] = None
    orcid: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        data = api_dict(self)
        data["category"] = self.category.value
        return data

    def to_row(self) -> tuple:
        return (
            self.name, self.title, self.degree, self.research, self.email,
            self.category.value, self.google_scholar, self.research_gate,
            self.orcid, self.bio, self.photo_url,
            1 if self.is_active else 0, self.join_date,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "TeamMember":
        return cls(
            id=row["id"],
            name=row["name"],
            title=row["title"],
            degree=row.get("degree"),
            research=row["research"],
            email=row["email"],
            category=MemberCategory(row["category"]),
            google_scholar=row.get("google_scholar"),
            research_gate=row.get("research_gate"),
            orcid=row.get("orcid"),
            bio=row.get("bio"),
            photo_url=row.get("photo_url"),
            is_active=from_flag(row.get("is_active"), default=True),
            join_date=row["join_date"],
        )


class TeamMemberCreate(ApiModel):
    name: NonEmptyStr
    title: NonEmptyStr
    research: NonEmptyStr
    email: NonEmptyStr
    category: MemberCategory
    join_date: Optional[str] = None
    degree: Optional[str] = None
    google_scholar: Optional[str] = None
    research_gate: Optional[str] = None
    orcid: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    is_active: bool = True

    def resolved_join_date(self) -> str:
        return self.join_date or date.today().isoformat()


class TeamMemberPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({"name", "title", "research", "email", "category", "join_date", "is_active"})

    name: Optional[NonEmptyStr] = None
    title: Optional[NonEmptyStr] = None
    research: Optional[NonEmptyStr] = None
    email: Optional[NonEmptyStr] = None
    category: Optional[MemberCategory] = None
    join_date: Optional[str] = None
    degree: Optional[str] = None
    google_scholar: Optional[str] = None
    research_gate: Optional[str] = None
    orcid: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    is_active: Optional[bool] = None
