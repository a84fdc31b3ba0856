"""Owner ORM — an identity known to the registry by its public key.

Invariants:
    - pubkey is unique and opaque (never parsed or re-encoded)
    - Rows are created implicitly on first claim and never deleted by the registry

Design Decisions:
    - Unique index on pubkey: a concurrent duplicate create surfaces as a unique
      violation that the claim engine treats as "already exists"
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from namebind.db.base import Base


class Owner(Base):
    """Owner entity — the target of username bindings."""
    __tablename__ = "owners"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    pubkey: Mapped[str] = mapped_column(
        String(128), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
