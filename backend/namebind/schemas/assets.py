"""Asset Schemas — replace/save requests and asset version responses.

Invariants:
    - slot must be "icon" or "banner" (enum — 400 otherwise)
    - AssetSave needs at least one of icon/banner
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from namebind.core.domain_types import AssetSlot


class AssetReplace(BaseModel):
    slot: AssetSlot
    path: str = Field(min_length=1)
    requester: str = Field(min_length=1, max_length=128)


class AssetSave(BaseModel):
    icon: str | None = Field(None, min_length=1)
    banner: str | None = Field(None, min_length=1)
    created_by: str = Field(min_length=1, max_length=128)

    @model_validator(mode="after")
    def require_one_image(self):
        if not self.icon and not self.banner:
            raise ValueError("at least one of icon or banner is required")
        return self

    def paths(self) -> dict[AssetSlot, str]:
        slots = {AssetSlot.ICON: self.icon, AssetSlot.BANNER: self.banner}
        return {slot: path for slot, path in slots.items() if path}


class AssetVersionResponse(BaseModel):
    id: UUID
    entity_id: str
    slot: AssetSlot
    path: str
    is_active: bool
    created_by: str
    created_at: datetime


class ReplaceResponse(BaseModel):
    success: bool = True
    asset: AssetVersionResponse
    degraded_steps: list[str] = []


class SaveResponse(BaseModel):
    success: bool = True
    assets: list[AssetVersionResponse]
    degraded_steps: list[str] = []


class ActiveAssetsResponse(BaseModel):
    assets: list[AssetVersionResponse]
