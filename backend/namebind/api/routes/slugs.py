"""Slug Routes — resolve, register, suggest.

Invariants:
    - GET /slugs?slug= → 404 when no mapping (expected outcome, logged at INFO)
    - POST /slugs → 201 with the stored binding, 409 when the slug exists
    - GET /slugs/suggest is advisory; registration still decides

Design Decisions:
    - Query parameter for resolve keeps arbitrary slug text out of the path
"""

from fastapi import APIRouter, Depends, Query, status

from namebind.api.deps import get_slug_registry
from namebind.core.domain_types import EntityId
from namebind.core.errors import ResourceNotFoundError
from namebind.schemas.slugs import (
    SlugBindingResponse, SlugCreate, SlugResolution, SlugSuggestion,
)
from namebind.services.slug_registry import SlugRegistry

router = APIRouter(prefix="/api/v1/slugs", tags=["slugs"])


@router.get("", response_model=SlugResolution)
async def resolve_slug(
    slug: str = Query(..., min_length=1),
    registry: SlugRegistry = Depends(get_slug_registry),
):
    entity_id = await registry.resolve(slug)
    if entity_id is None:
        raise ResourceNotFoundError("Topic slug", slug)
    return SlugResolution(entity_id=entity_id)


@router.post(
    "", response_model=SlugBindingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_slug(
    body: SlugCreate, registry: SlugRegistry = Depends(get_slug_registry),
):
    row = await registry.register(body.slug, EntityId(body.entity_id), body.name)
    return SlugBindingResponse(**row)


@router.get("/suggest", response_model=SlugSuggestion)
async def suggest_slug(
    name: str = Query(..., min_length=1),
    registry: SlugRegistry = Depends(get_slug_registry),
):
    return SlugSuggestion(slug=await registry.generate_unique(name))
