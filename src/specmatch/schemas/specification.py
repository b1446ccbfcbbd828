"""Specification model consumed by the evaluation core."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Junction(str, Enum):
    """How a group combines its member results."""

    AND = "AND"
    OR = "OR"


class Predicate(BaseModel):
    """A named condition: field path -> operator map (or literal for implicit ``$eq``)."""

    id: str
    query: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")


class PredicateGroup(BaseModel):
    """AND/OR composition of predicates referenced by id."""

    id: str
    junction: Junction = Junction.AND
    members: tuple[Predicate, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("junction", mode="before")
    @classmethod
    def _normalize_junction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("members", mode="before")
    @classmethod
    def _expand_member_ids(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [{"id": item} if isinstance(item, str) else item for item in value]
        return value


class Specification(BaseModel):
    """Predicates plus groups evaluated together against one document."""

    id: str
    predicates: tuple[Predicate, ...] = ()
    groups: tuple[PredicateGroup, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")
