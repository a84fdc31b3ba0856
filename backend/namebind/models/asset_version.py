"""AssetVersion ORM — one stored version of a topic icon or banner.

Invariants:
    - slot is "icon" or "banner"
    - At most one is_active row per (entity_id, slot) under normal operation;
      deactivate and insert are separate commits, so zero or two may be
      observed transiently

Design Decisions:
    - No partial unique index on (entity_id, slot) WHERE is_active: the replace
      flow must still insert when deactivation failed
    - Composite index on (entity_id, slot): the deactivate update and the
      active listing both filter on it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, CheckConstraint, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from namebind.db.base import Base


class AssetVersion(Base):
    """Asset version entity — image path history per topic slot."""
    __tablename__ = "asset_versions"
    __table_args__ = (
        Index("ix_asset_versions_entity_slot", "entity_id", "slot"),
        CheckConstraint("slot IN ('icon', 'banner')", name="ck_asset_versions_slot"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    entity_id: Mapped[str] = mapped_column(Text, nullable=False)
    slot: Mapped[str] = mapped_column(String(10), nullable=False)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
