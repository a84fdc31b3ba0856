"""Topic Image Routes — replace the active icon/banner, record initial images, list.

Invariants:
    - PUT replaces one slot: 403 unauthorized, 404 unknown topic, 500 insert failure
    - A 200 may still carry degraded_steps (old version left active, or topic
      pointer not updated); operators see the same steps in WARNING logs
    - POST records initial images without a moderator check

Design Decisions:
    - Errors surface through RegistryError handlers; routes only shape responses
"""

from fastapi import APIRouter, Depends, status

from namebind.api.deps import get_asset_manager
from namebind.core.domain_types import EntityId, OwnerKey
from namebind.schemas.assets import (
    ActiveAssetsResponse, AssetReplace, AssetSave, AssetVersionResponse,
    ReplaceResponse, SaveResponse,
)
from namebind.services.asset_versions import AssetVersionManager

router = APIRouter(prefix="/api/v1/topics", tags=["topic-images"])


@router.put("/{entity_id}/images", response_model=ReplaceResponse)
async def replace_topic_image(
    entity_id: str,
    body: AssetReplace,
    manager: AssetVersionManager = Depends(get_asset_manager),
):
    outcome = await manager.replace_active(
        EntityId(entity_id), body.slot, body.path, OwnerKey(body.requester),
    )
    return ReplaceResponse(
        asset=AssetVersionResponse(**outcome.asset),
        degraded_steps=outcome.degraded_steps,
    )


@router.post(
    "/{entity_id}/images", response_model=SaveResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_topic_images(
    entity_id: str,
    body: AssetSave,
    manager: AssetVersionManager = Depends(get_asset_manager),
):
    outcome = await manager.save_initial(
        EntityId(entity_id), body.paths(), OwnerKey(body.created_by),
    )
    return SaveResponse(
        assets=[AssetVersionResponse(**a) for a in outcome.assets],
        degraded_steps=outcome.degraded_steps,
    )


@router.get("/{entity_id}/images", response_model=ActiveAssetsResponse)
async def list_topic_images(
    entity_id: str,
    manager: AssetVersionManager = Depends(get_asset_manager),
):
    rows = await manager.active_assets(EntityId(entity_id))
    return ActiveAssetsResponse(assets=[AssetVersionResponse(**r) for r in rows])
