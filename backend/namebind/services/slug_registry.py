"""Slug Registry — case-insensitive URL slug → topic id mapping.

Invariants:
    - normalize_slug applied on every read and write path
    - register: advisory pre-check, then insert; the unique violation on insert
      is the authoritative conflict signal
    - Existing mappings are never modified (no update path)
    - resolve() returns None on absence — a normal outcome, not an error

Design Decisions:
    - Keep the pre-check even though the constraint decides: it avoids a failed
      insert (and its log noise) in the common conflict case
    - generate_unique probes at most MAX_SLUG_SUFFIX numbered candidates, then
      falls back to a random suffix; the result is a hint, register() still decides
"""

import logging
import random
import string

from namebind.core.domain_types import (
    DEFAULT_SLUG, MAX_SLUG_SUFFIX, RANDOM_SLUG_SUFFIX_LENGTH, EntityId, Table,
)
from namebind.core.errors import SlugExistsError, UniqueViolationError
from namebind.core.store_protocols import Row, RowStore
from namebind.core.validate_identifiers import generate_slug, normalize_slug

logger = logging.getLogger(__name__)


class SlugRegistry:
    """Slug resolution, registration, and suggestion."""

    def __init__(self, store: RowStore):
        self.store = store

    async def resolve(self, slug: str) -> EntityId | None:
        row = await self.store.select_one(
            Table.SLUG_BINDINGS, {"slug": normalize_slug(slug)},
        )
        return EntityId(row["entity_id"]) if row else None

    async def is_available(self, slug: str) -> bool:
        return await self.resolve(slug) is None

    async def register(
        self, slug: str, entity_id: EntityId, name: str | None = None,
    ) -> Row:
        """Create the slug mapping or raise SlugExistsError."""
        slug = normalize_slug(slug)
        if not await self.is_available(slug):
            raise SlugExistsError(slug)

        try:
            rows = await self.store.insert(
                Table.SLUG_BINDINGS,
                {"slug": slug, "entity_id": entity_id, "name": name},
            )
        except UniqueViolationError:
            logger.info(
                f"Slug registered concurrently: {slug}",
                extra={"slug": slug, "error_code": "SLUG_EXISTS"},
            )
            raise SlugExistsError(slug)

        logger.info(
            f"Slug registered: {slug}",
            extra={"slug": slug, "entity_id": entity_id},
        )
        return rows[0]

    async def generate_unique(self, name: str) -> str:
        base = generate_slug(name) or DEFAULT_SLUG
        if await self.is_available(base):
            return base

        for counter in range(1, MAX_SLUG_SUFFIX + 1):
            candidate = f"{base}-{counter}"
            if await self.is_available(candidate):
                return candidate

        suffix = "".join(random.choices(
            string.ascii_lowercase + string.digits, k=RANDOM_SLUG_SUFFIX_LENGTH,
        ))
        return f"{base}-{suffix}"
