"""Patent domain model."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag, parse_json_list,
)


class PatentStatus(str, Enum):
    PENDING = "pending"
    GRANTED = "granted"
    EXPIRED = "expired"


class PatentType(str, Enum):
    INVENTION = "invention"
    UTILITY = "utility"
    DESIGN = "design"


@dataclass
class Patent:
    id: int
    title: str
    inventors: str
    patent_number: str
    application_date: str
    status: PatentStatus
    type: PatentType
    grant_date: Optional[str] = None
    abstract: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    pdf_url: Optional[str] = None
    is_highlighted: bool = True

    def keywords_json(self) -> str:
        return json.dumps(self.keywords or [], ensure_ascii=False)

    def to_dict(self) -> dict[str, Any]:
        data = api_dict(self)
        data["status"] = self.status.value
        data["type"] = self.type.value
        return data

    def to_row(self) -> tuple:
        return (
            self.title, self.inventors, self.patent_number,
            self.application_date, self.grant_date, self.abstract,
            self.keywords_json(), self.status.value, self.type.value,
            self.pdf_url, 1 if self.is_highlighted else 0,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Patent":
        return cls(
            id=row["id"],
            title=row["title"],
            inventors=row["inventors"],
            patent_number=row["patent_number"],
            application_date=row["application_date"],
            grant_date=row.get("grant_date"),
            abstract=row.get("abstract"),
            keywords=parse_json_list(row.get("keywords")),
            status=PatentStatus(row["status"]),
            type=PatentType(row["type"]),
            pdf_url=row.get("pdf_url"),
            is_highlighted=from_flag(row.get("is_highlighted"), default=True),
        )


class PatentCreate(ApiModel):
    title: NonEmptyStr
    inventors: NonEmptyStr
    patent_number: NonEmptyStr
    application_date: NonEmptyStr
    status: PatentStatus
    type: PatentType
    grant_date: Optional[str] = None
    abstract: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    pdf_url: Optional[str] = None
    is_highlighted: bool = True


class PatentPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({
        "title", "inventors", "patent_number", "application_date",
        "status", "type", "keywords", "is_highlighted",
    })

    title: Optional[NonEmptyStr] = None
    inventors: Optional[NonEmptyStr] = None
    patent_number: Optional[NonEmptyStr] = None
    application_date: Optional[NonEmptyStr] = None
    status: Optional[PatentStatus] = None
    type: Optional[PatentType] = None
    grant_date: Optional[str] = None
    abstract: Optional[str] = None
    keywords: Optional[list[str]] = None
    pdf_url: Optional[str] = None
    is_highlighted: Optional[bool] = None
