"""Research project domain model.

The project leader is kept as free text rather than a reference to a team
member, so projects led by external collaborators need no roster entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from pydantic import Field

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag,
)


@dataclass
class Project:
    id: int
    name: str
    start_date: str
    source: str = ""
    funding_amount: Optional[float] = None
    end_date: Optional[str] = None
    leader: str = ""
    description: str = ""
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return api_dict(self)

    def to_row(self) -> tuple:
        # column order: title, description, start_date, end_date,
        # funding_source, funding_amount, leader, is_active
        return (
            self.name, self.description or "", self.start_date,
            self.end_date or None, self.source or None,
            self.funding_amount, self.leader or "",
            1 if self.is_active else 0,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Project":
        return cls(
            id=row["id"],
            name=row["title"],
            source=row.get("funding_source") or "",
            funding_amount=row.get("funding_amount"),
            start_date=row["start_date"],
            end_date=row.get("end_date"),
            leader=row.get("leader") or "",
            description=row.get("description") or "",
            is_active=from_flag(row.get("is_active"), default=True),
        )


class ProjectCreate(ApiModel):
    name: NonEmptyStr
    start_date: NonEmptyStr
    source: str = ""
    funding_amount: Optional[float] = Field(default=None, ge=0)
    end_date: Optional[str] = None
    leader: str = ""
    description: str = ""
    is_active: bool = True


class ProjectPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({
        "name", "start_date", "source", "leader", "description", "is_active",
    })

    name: Optional[NonEmptyStr] = None
    start_date: Optional[NonEmptyStr] = None
    source: Optional[str] = None
    funding_amount: Optional[float] = Field(default=None, ge=0)
    end_date: Optional[str] = None
    leader: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
