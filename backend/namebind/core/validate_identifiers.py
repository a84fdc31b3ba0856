"""Identifier Validation — syntactic and policy checks for usernames and slugs.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Usernames are never normalized: uppercase input fails the format check
    - Format checked with fullmatch: a trailing newline never passes as a valid name
    - Reserved lookup is case-insensitive
    - normalize_slug is the single normalization used on both read and write paths

Design Decisions:
    - Raise typed errors instead of returning error dicts: every caller is an HTTP
      route, and the global handler already renders RegistryError
    - Product name injected rather than hardcoded: the reserved set follows the
      deployment's branding
"""

import re

from namebind.core.domain_types import USERNAME_PATTERN
from namebind.core.errors import (
    ErrorContext, InvalidIdentifierError, ReservedIdentifierError,
)

_USERNAME_RE = re.compile(USERNAME_PATTERN)

BASE_RESERVED_USERNAMES = frozenset({
    "admin", "administrator", "support", "help",
    "mod", "moderator", "system", "official",
})


def build_reserved_set(product_name: str) -> frozenset[str]:
    """Reserved usernames for a deployment, product name included."""
    return BASE_RESERVED_USERNAMES | {product_name.lower()}


def check_username_format(candidate: str) -> str:
    """Format-only check. Used directly by the administrative assign path."""
    if not isinstance(candidate, str) or not _USERNAME_RE.fullmatch(candidate):
        raise InvalidIdentifierError(
            "Invalid username format", "username",
            ErrorContext(identifier=str(candidate)),
        )
    return candidate


def validate_username(candidate: str, reserved: frozenset[str]) -> str:
    """Full claim validation: format, then reserved list."""
    username = check_username_format(candidate)
    if username.lower() in reserved:
        raise ReservedIdentifierError(username)
    return username


def normalize_slug(slug: str) -> str:
    normalized = slug.lower()
    if not normalized:
        raise InvalidIdentifierError("Slug cannot be empty", "slug")
    return normalized


def generate_slug(name: str) -> str:
    """Derive a URL slug from a display name.

    Lowercases, drops punctuation, turns whitespace runs into single hyphens
    and trims hyphens from both ends. May return an empty string when the
    name holds nothing but punctuation.
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
