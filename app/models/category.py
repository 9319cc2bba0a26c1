from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

DEFAULT_COLOR = "#667eea"


class Category(BaseModel):
    """A stored category record as exchanged over the API."""

    id: int
    name: str
    description: str = ""
    color: str = DEFAULT_COLOR
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    model_config = {"extra": "ignore", "frozen": True, "populate_by_name": True}

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class CategoryCreate(BaseModel):
    """Body of ``POST /api/categories``; the name is checked by the store."""

    name: str | None = None
    description: str | None = None
    color: str | None = None

    model_config = {"extra": "ignore"}


class CategoryUpdate(BaseModel):
    """Body of ``PUT /api/categories/{id}``; only fields that were sent are applied."""

    name: str | None = None
    description: str | None = None
    color: str | None = None

    model_config = {"extra": "ignore"}


class CategoryFile(BaseModel):
    """On-disk layout of the categories JSON file."""

    categories: List[Category] = Field(default_factory=list)
    next_id: int = Field(default=1, alias="nextId", ge=1)

    model_config = {"extra": "ignore", "populate_by_name": True}
