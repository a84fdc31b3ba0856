"""Claim Engine — binds NIP-05 usernames to owner public keys.

Invariants:
    - The username_bindings unique constraint is the only arbiter of "taken";
      claim never pre-checks before inserting
    - Owner creation tolerates a concurrent duplicate create (treated as exists)
    - remove() matching zero rows is success: the binding already does not exist
    - update_owner() does not check who owned the binding before — callers authorize
    - No retries: each call is one pass through the store

Design Decisions:
    - check_availability is advisory only: availability can change between the
      probe and the claim, and claim still maps the conflict to 409
    - Owner create + binding insert are two commits, not one transaction: a
      crash between them leaves an owner with no username, which is harmless
      and reused by the next claim
    - assign() skips the reserved list: it is the staff path for handing out
      names such as "support" with a verification badge
"""

import logging
from dataclasses import dataclass

from namebind.core.domain_types import OwnerKey, Table, VerificationType
from namebind.core.errors import IdentifierTakenError, UniqueViolationError
from namebind.core.store_protocols import Row, RowStore
from namebind.core.validate_identifiers import (
    check_username_format, validate_username,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingConfirmation:
    """Successful claim — carries the fully-qualified NIP-05 identifier."""
    username: str
    owner_key: OwnerKey
    nip05: str


class ClaimEngine:
    """Username claim, availability, removal, and owner repointing."""

    def __init__(self, store: RowStore, domain: str, reserved: frozenset[str]):
        self.store = store
        self.domain = domain
        self.reserved = reserved

    def qualify(self, username: str) -> str:
        return f"{username}@{self.domain}"

    async def claim(self, username: str, owner_key: OwnerKey) -> BindingConfirmation:
        """Bind username to owner_key, creating the owner on first use."""
        username = validate_username(username, self.reserved)
        await self._ensure_owner(owner_key)

        try:
            await self.store.insert(
                Table.USERNAME_BINDINGS,
                {"username": username, "owner_key": owner_key},
            )
        except UniqueViolationError:
            logger.info(
                f"Claim rejected, username taken: {username}",
                extra={"username": username, "error_code": "USERNAME_TAKEN"},
            )
            raise IdentifierTakenError(username)

        logger.info(f"Username claimed: {username}", extra={"username": username})
        return BindingConfirmation(username, owner_key, self.qualify(username))

    async def check_availability(self, username: str) -> bool:
        row = await self.store.select_one(
            Table.USERNAME_BINDINGS, {"username": username},
        )
        return row is None

    async def remove(self, username: str, owner_key: OwnerKey) -> int:
        """Delete the (username, owner) binding. Returns rows removed (0 is fine)."""
        removed = await self.store.delete(
            Table.USERNAME_BINDINGS,
            {"username": username, "owner_key": owner_key},
        )
        if not removed:
            logger.info(
                f"Remove matched no binding for {username}",
                extra={"username": username},
            )
        return removed

    async def update_owner(self, username: str, new_owner_key: OwnerKey, **fields) -> int:
        """Repoint an existing binding. Caller is responsible for authorization."""
        patch = {"owner_key": new_owner_key, **fields}
        return await self.store.update(
            Table.USERNAME_BINDINGS, patch, {"username": username},
        )

    async def assign(
        self,
        username: str,
        owner_key: OwnerKey,
        verification_type: VerificationType = VerificationType.STANDARD,
    ) -> tuple[Row, bool]:
        """Administrative upsert. Returns (binding, created)."""
        username = check_username_format(username)
        existing = await self.store.select_one(
            Table.USERNAME_BINDINGS, {"username": username},
        )
        if existing:
            await self.update_owner(
                username, owner_key, verification_type=verification_type.value,
            )
            logger.info(f"Username reassigned: {username}", extra={"username": username})
            existing.update(
                owner_key=owner_key, verification_type=verification_type.value,
            )
            return existing, False

        try:
            rows = await self.store.insert(
                Table.USERNAME_BINDINGS,
                {
                    "username": username,
                    "owner_key": owner_key,
                    "verification_type": verification_type.value,
                },
            )
        except UniqueViolationError:
            raise IdentifierTakenError(username)
        logger.info(f"Username assigned: {username}", extra={"username": username})
        return rows[0], True

    async def lookup(self, username: str) -> Row | None:
        return await self.store.select_one(
            Table.USERNAME_BINDINGS, {"username": username},
        )

    async def names_document(self, name: str | None = None) -> dict:
        """NIP-05 /.well-known/nostr.json body, optionally for a single name."""
        filters = {"username": name} if name else {}
        rows = await self.store.select(Table.USERNAME_BINDINGS, filters)
        return {"names": {r["username"]: r["owner_key"] for r in rows}}

    async def _ensure_owner(self, owner_key: OwnerKey) -> None:
        owner = await self.store.select_one(Table.OWNERS, {"pubkey": owner_key})
        if owner:
            return
        try:
            await self.store.insert(Table.OWNERS, {"pubkey": owner_key})
        except UniqueViolationError:
            # concurrent first claim by the same owner created it
            logger.info("Owner already created by a concurrent claim")
