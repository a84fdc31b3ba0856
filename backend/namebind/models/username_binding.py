"""UsernameBinding ORM — NIP-05 username → owner public key.

Invariants:
    - username is unique; the constraint is the only arbiter of "taken"
    - owner_key replaced only through the existing-username path (update_owner)
    - verification_type is one of VerificationType (standard by default)

Design Decisions:
    - owner_key stored as the raw pubkey, not an FK to owners.id: the NIP-05
      document serves pubkeys directly without a join
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from namebind.db.base import Base


class UsernameBinding(Base):
    """Username binding — one row per claimed username."""
    __tablename__ = "username_bindings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True,
    )
    owner_key: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True,
    )
    verification_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="standard",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
