"""Topic ORM — the entity that owns slugs and image assets.

Invariants:
    - id is the externally assigned topic identifier (text primary key)
    - moderators is raw JSON; the registry tolerates null or non-list values
    - image/banner mirror the active asset path best-effort (may lag asset_versions)

Design Decisions:
    - Topics are created by the surrounding application; the registry only reads
      moderators and writes the denormalized image pointers
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from namebind.db.base import Base


class Topic(Base):
    """Topic entity — community whose icon/banner the registry versions."""
    __tablename__ = "topics"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    pubkey: Mapped[str] = mapped_column(String(128), nullable=False)
    moderators: Mapped[list | None] = mapped_column(JSON, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    banner: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
