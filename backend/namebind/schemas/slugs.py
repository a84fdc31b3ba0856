"""Slug Schemas — registration body and resolution responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class SlugCreate(BaseModel):
    slug: str = Field(min_length=1, max_length=200)
    entity_id: str = Field(min_length=1)
    name: str | None = Field(None, max_length=500)


class SlugBindingResponse(BaseModel):
    id: UUID
    slug: str
    entity_id: str
    name: str | None = None
    created_at: datetime


class SlugResolution(BaseModel):
    entity_id: str


class SlugSuggestion(BaseModel):
    slug: str
