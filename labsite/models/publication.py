"""Publication domain model: journal papers with a keyword list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from pydantic import Field

from labsite.models.common import (
    ApiModel, EntityPatch, NonEmptyStr, api_dict, from_flag,
)


@dataclass
class Publication:
    id: int
    title: str
    authors: str
    journal: str
    year: int
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None
    abstract: Optional[str] = None
    pdf_url: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    citation_count: int = 0
    is_highlighted: bool = True

    def to_dict(self) -> dict[str, Any]:
        return api_dict(self)

    def to_row(self) -> tuple:
        return (
            self.title, self.authors, self.journal, self.year,
            self.volume, self.issue, self.pages, self.doi,
            self.abstract, self.pdf_url,
            1 if self.is_highlighted else 0, self.citation_count or 0,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any], keywords: Optional[list[str]] = None) -> "Publication":
        return cls(
            id=row["id"],
            title=row["title"],
            authors=row["authors"],
            journal=row["journal"],
            year=row["year"],
            volume=row.get("volume"),
            issue=row.get("issue"),
            pages=row.get("pages"),
            doi=row.get("doi"),
            abstract=row.get("abstract"),
            pdf_url=row.get("pdf_url"),
            keywords=list(keywords or []),
            citation_count=row.get("citation_count") or 0,
            is_highlighted=from_flag(row.get("is_highlighted"), default=True),
        )


class PublicationCreate(ApiModel):
    title: NonEmptyStr
    authors: NonEmptyStr
    journal: NonEmptyStr
    year: int = Field(gt=0)
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None
    abstract: Optional[str] = None
    pdf_url: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    citation_count: int = Field(default=0, ge=0)
    is_highlighted: bool = True


class PublicationPatch(EntityPatch):
    NOT_NULL: ClassVar[frozenset[str]] = frozenset({
        "title", "authors", "journal", "year", "keywords",
        "citation_count", "is_highlighted",
    })

    title: Optional[NonEmptyStr] = None
    authors: Optional[NonEmptyStr] = None
    journal: Optional[NonEmptyStr] = None
    year: Optional[int] = Field(default=None, gt=0)
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None
    abstract: Optional[str] = None
    pdf_url: Optional[str] = None
    keywords: Optional[list[str]] = None
    citation_count: Optional[int] = Field(default=None, ge=0)
    is_highlighted: Optional[bool] = None
