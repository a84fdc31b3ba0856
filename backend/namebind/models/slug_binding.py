"""SlugBinding ORM — lowercase URL slug → topic id.

Invariants:
    - slug is stored already normalized (lowercase) and is unique
    - Rows are immutable once created

Design Decisions:
    - entity_id is free text without FK: slugs may be registered before the
      topic row lands in the store
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from namebind.db.base import Base


class SlugBinding(Base):
    """Slug binding — one row per registered slug."""
    __tablename__ = "slug_bindings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    slug: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True,
    )
    entity_id: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
