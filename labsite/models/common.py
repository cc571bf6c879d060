"""Shared pieces for the domain models: API payload base classes and
camelCase serialisation helpers."""

from __future__ import annotations

import dataclasses
import json
from typing import Annotated, Any, ClassVar, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, Field(min_length=1)]


class ApiModel(BaseModel):
    """Request payload: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class EntityPatch(ApiModel):
    """
    Partial update payload.  Every field is optional; only the fields that
    were present in the request are applied.  Columns listed in
    ``NOT_NULL`` may be omitted but not set to ``null``.
    """

    NOT_NULL: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required(self) -> "EntityPatch":
        for name in self.model_fields_set & self.NOT_NULL:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def api_dict(entity: Any, exclude: Iterable[str] = (), keep_snake: Iterable[str] = ()) -> dict[str, Any]:
    """Serialise a dataclass entity to its camelCase JSON shape."""
    skip = set(exclude)
    snake = set(keep_snake)
    out: dict[str, Any] = {}
    for f in dataclasses.fields(entity):
        if f.name in skip:
            continue
        key = f.name if f.name in snake else to_camel(f.name)
        out[key] = getattr(entity, f.name)
    return out


def merge(entity: Any, patch: EntityPatch) -> Any:
    """Shallow-merge the fields set on *patch* over *entity* (id untouched)."""
    changes = {k: v for k, v in patch.changes().items() if k != "id"}
    return dataclasses.replace(entity, **changes)


def from_flag(value: Any, default: bool = False) -> bool:
    """Read an INTEGER 0/1 flag column; NULL gives *default*."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true")
    return int(value) != 0


def parse_json_list(raw: Optional[str]) -> list[Any]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    return value if isinstance(value, list) else []
