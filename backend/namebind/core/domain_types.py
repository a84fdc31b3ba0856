"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OwnerKey and EntityId wrap opaque strings — never reinterpreted by the registry
    - All valid states encoded as Enums — no raw string matching
    - Table names are plain str constants: they key Base.metadata.tables
    - AssetSlot.pointer_field is the only mapping from slot to the topic column it mirrors

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OwnerKey = NewType("OwnerKey", str)
EntityId = NewType("EntityId", str)


# ─── Limits ──────────────────────────────────────────────────────

USERNAME_PATTERN = r"^[a-z0-9_]{3,30}$"
MAX_SLUG_SUFFIX = 100
RANDOM_SLUG_SUFFIX_LENGTH = 6
DEFAULT_SLUG = "topic"


# ─── Tables ──────────────────────────────────────────────────────

class Table:
    """Store table names used by the services (plain str, used as dict keys)."""
    OWNERS = "owners"
    USERNAME_BINDINGS = "username_bindings"
    SLUG_BINDINGS = "slug_bindings"
    TOPICS = "topics"
    ASSET_VERSIONS = "asset_versions"


# ─── Enums ───────────────────────────────────────────────────────

class AssetSlot(str, Enum):
    """Named image slot on a topic."""
    ICON = "icon"
    BANNER = "banner"

    @property
    def pointer_field(self) -> str:
        """Topic column that mirrors the active asset path for this slot."""
        return "image" if self is AssetSlot.ICON else "banner"


class VerificationType(str, Enum):
    """Badge shown next to a verified username."""
    STANDARD = "standard"
    STAFF = "staff"
    CONTRIBUTOR = "contributor"


class AuthDecision(str, Enum):
    """Outcome of checking a requester against a topic's moderator list."""
    ALLOWED = "allowed"
    DENIED = "denied"
    UNVERIFIABLE = "unverifiable"  # moderator data missing or malformed
