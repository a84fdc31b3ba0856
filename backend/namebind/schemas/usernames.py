"""Username Schemas — claim/remove/assign requests and binding responses.

Invariants:
    - username and pubkey are required, non-empty; format checked in core/
    - verification_type restricted to VerificationType values
"""

from datetime import datetime

from pydantic import BaseModel, Field

from namebind.core.domain_types import VerificationType


class UsernameRequest(BaseModel):
    """Body for claim and remove."""
    username: str = Field(min_length=1, max_length=200)
    pubkey: str = Field(min_length=1, max_length=128)


class ClaimResponse(BaseModel):
    success: bool = True
    nip05: str


class AvailabilityResponse(BaseModel):
    available: bool


class RemoveResponse(BaseModel):
    success: bool = True
    message: str


class AssignRequest(BaseModel):
    """Administrative upsert body; username comes from the path."""
    pubkey: str = Field(min_length=1, max_length=128)
    verification_type: VerificationType = VerificationType.STANDARD


class BindingResponse(BaseModel):
    username: str
    pubkey: str
    verification_type: VerificationType
    nip05: str
    created_at: datetime | None = None
