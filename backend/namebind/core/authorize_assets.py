"""Asset Authorization — decides whether a requester may replace a topic image.

Invariants:
    - Pure: the caller fetches the moderator list, this module only judges it
    - A list is well-formed regardless of its length; an empty list denies everyone
    - Anything that is not a list (None, dict, string) is UNVERIFIABLE, never DENIED

Design Decisions:
    - UNVERIFIABLE is a distinct outcome so the fail-open/fail-closed policy is
      applied by the service from configuration, not buried in this check
"""

from typing import Any

from namebind.core.domain_types import AuthDecision


def check_moderator(moderators: Any, requester: str) -> AuthDecision:
    """Judge requester against a topic's raw moderators value."""
    if not isinstance(moderators, list):
        return AuthDecision.UNVERIFIABLE
    if requester in moderators:
        return AuthDecision.ALLOWED
    return AuthDecision.DENIED


def permits(decision: AuthDecision, fail_open: bool) -> bool:
    """Apply the fail-open policy to a decision."""
    if decision is AuthDecision.UNVERIFIABLE:
        return fail_open
    return decision is AuthDecision.ALLOWED
