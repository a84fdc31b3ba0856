"""Asset Version Manager — one active icon/banner version per topic slot.

Invariants:
    - Unauthorized requests (requester missing from a well-formed moderator list)
      touch no asset rows
    - Missing topic row → 404; a failed topic lookup is treated as unverifiable
      authorization, not as absence
    - Sequence per replace: deactivate old (best-effort) → insert new (critical)
      → update topic pointer (best-effort); each step commits on its own
    - A failed best-effort step is logged at WARNING with degraded_step and
      reported back in ReplaceOutcome.degraded_steps; it never aborts the insert

Design Decisions:
    - Fail-open on missing/malformed moderator data is kept as the default and
      exposed as a setting (asset_auth_fail_open) so it can be flipped to
      fail-closed without code changes
    - No transaction around the three steps: the store commits per call, so a
      crash can leave two active rows (deactivate failed) or a stale topic
      pointer (pointer update failed). Neither is reconciled automatically;
      both are visible in logs
"""

import logging
from dataclasses import dataclass, field

from namebind.core.authorize_assets import check_moderator, permits
from namebind.core.domain_types import AssetSlot, AuthDecision, EntityId, OwnerKey, Table
from namebind.core.errors import ResourceNotFoundError, StoreError, UnauthorizedError
from namebind.core.store_protocols import Row, RowStore

logger = logging.getLogger(__name__)

DEACTIVATE_PREVIOUS = "deactivate_previous"
UPDATE_POINTER = "update_pointer"
FETCH_MODERATORS = "fetch_moderators"


@dataclass
class ReplaceOutcome:
    """New active asset plus any best-effort steps that did not complete."""
    asset: Row
    degraded_steps: list[str] = field(default_factory=list)


@dataclass
class SaveOutcome:
    assets: list[Row]
    degraded_steps: list[str] = field(default_factory=list)


class AssetVersionManager:
    """Replace, record, and list versioned topic images."""

    def __init__(self, store: RowStore, fail_open: bool = True):
        self.store = store
        self.fail_open = fail_open

    async def replace_active(
        self,
        entity_id: EntityId,
        slot: AssetSlot,
        new_path: str,
        requester: OwnerKey,
    ) -> ReplaceOutcome:
        """Make new_path the active asset for (entity_id, slot)."""
        degraded: list[str] = []
        await self._authorize(entity_id, requester, degraded)

        if not await self._deactivate(entity_id, slot):
            degraded.append(DEACTIVATE_PREVIOUS)

        rows = await self.store.insert(Table.ASSET_VERSIONS, {
            "entity_id": entity_id,
            "slot": slot.value,
            "path": new_path,
            "is_active": True,
            "created_by": requester,
        })

        if not await self._update_pointer(entity_id, {slot.pointer_field: new_path}):
            degraded.append(UPDATE_POINTER)

        logger.info(
            f"Active {slot.value} replaced for topic {entity_id}",
            extra={"entity_id": entity_id, "slot": slot.value},
        )
        return ReplaceOutcome(rows[0], degraded)

    async def save_initial(
        self,
        entity_id: EntityId,
        paths: dict[AssetSlot, str],
        created_by: OwnerKey,
    ) -> SaveOutcome:
        """Record first images for a topic. No moderator check (topic creation flow)."""
        degraded: list[str] = []
        for slot in paths:
            deactivated = await self._deactivate(entity_id, slot)
            if not deactivated and DEACTIVATE_PREVIOUS not in degraded:
                degraded.append(DEACTIVATE_PREVIOUS)

        assets = await self.store.insert(Table.ASSET_VERSIONS, [
            {
                "entity_id": entity_id,
                "slot": slot.value,
                "path": path,
                "is_active": True,
                "created_by": created_by,
            }
            for slot, path in paths.items()
        ])

        pointers = {slot.pointer_field: path for slot, path in paths.items()}
        if pointers and not await self._update_pointer(entity_id, pointers):
            degraded.append(UPDATE_POINTER)
        return SaveOutcome(assets, degraded)

    async def active_assets(self, entity_id: EntityId) -> list[Row]:
        return await self.store.select(
            Table.ASSET_VERSIONS, {"entity_id": entity_id, "is_active": True},
        )

    # ─── steps ──────────────────────────────────────────────────

    async def _authorize(
        self, entity_id: EntityId, requester: OwnerKey, degraded: list[str],
    ) -> None:
        try:
            topic = await self.store.select_one(Table.TOPICS, {"id": entity_id})
        except StoreError as e:
            logger.warning(
                f"Could not fetch moderators for topic {entity_id}: {e.message}",
                extra={"entity_id": entity_id, "degraded_step": FETCH_MODERATORS},
            )
            degraded.append(FETCH_MODERATORS)
            moderators = None
        else:
            if topic is None:
                raise ResourceNotFoundError("Topic", entity_id)
            moderators = topic.get("moderators")

        decision = check_moderator(moderators, requester)
        if decision is AuthDecision.UNVERIFIABLE:
            logger.warning(
                f"Moderator data unavailable for topic {entity_id}; "
                f"{'proceeding (fail-open)' if self.fail_open else 'denying (fail-closed)'}",
                extra={"entity_id": entity_id, "auth_decision": decision.value},
            )
        if not permits(decision, self.fail_open):
            raise UnauthorizedError(entity_id)

    async def _deactivate(self, entity_id: EntityId, slot: AssetSlot) -> bool:
        try:
            await self.store.update(
                Table.ASSET_VERSIONS,
                {"is_active": False},
                {"entity_id": entity_id, "slot": slot.value, "is_active": True},
            )
        except StoreError as e:
            logger.warning(
                f"Could not deactivate previous {slot.value} for topic {entity_id}: "
                f"{e.message}",
                extra={
                    "entity_id": entity_id, "slot": slot.value,
                    "degraded_step": DEACTIVATE_PREVIOUS,
                },
            )
            return False
        return True

    async def _update_pointer(self, entity_id: EntityId, patch: dict[str, str]) -> bool:
        try:
            await self.store.update(Table.TOPICS, patch, {"id": entity_id})
        except StoreError as e:
            logger.warning(
                f"Could not update image pointer on topic {entity_id}: {e.message}",
                extra={"entity_id": entity_id, "degraded_step": UPDATE_POINTER},
            )
            return False
        return True
