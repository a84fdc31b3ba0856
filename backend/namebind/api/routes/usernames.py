"""Username Routes — claim, availability, removal, assignment, lookup.

Invariants:
    - claim: 201 on success, 400 invalid, 403 reserved, 409 taken
    - check: advisory only; a later claim can still return 409
    - remove: success even when nothing matched
    - assign (PUT): 200 when an existing binding was repointed, 201 when created

Design Decisions:
    - POST /claim and POST /remove keep the body-based shape existing clients send
    - /check/{username} is a separate path segment so it never collides with
      GET /{username}
"""

from fastapi import APIRouter, Depends, Response, status

from namebind.api.deps import get_claim_engine, require_admin_key
from namebind.core.domain_types import OwnerKey
from namebind.core.errors import ResourceNotFoundError
from namebind.schemas.usernames import (
    AssignRequest, AvailabilityResponse, BindingResponse, ClaimResponse,
    RemoveResponse, UsernameRequest,
)
from namebind.services.claim_engine import ClaimEngine

router = APIRouter(prefix="/api/v1/usernames", tags=["usernames"])


def _binding_response(engine: ClaimEngine, row: dict) -> BindingResponse:
    return BindingResponse(
        username=row["username"],
        pubkey=row["owner_key"],
        verification_type=row.get("verification_type") or "standard",
        nip05=engine.qualify(row["username"]),
        created_at=row.get("created_at"),
    )


@router.post(
    "/claim", response_model=ClaimResponse,
    status_code=status.HTTP_201_CREATED,
)
async def claim_username(
    body: UsernameRequest, engine: ClaimEngine = Depends(get_claim_engine),
):
    """Claim a username for a public key."""
    confirmation = await engine.claim(body.username, OwnerKey(body.pubkey))
    return ClaimResponse(nip05=confirmation.nip05)


@router.get("/check/{username}", response_model=AvailabilityResponse)
async def check_username(
    username: str, engine: ClaimEngine = Depends(get_claim_engine),
):
    """Advisory availability probe."""
    return AvailabilityResponse(available=await engine.check_availability(username))


@router.post("/remove", response_model=RemoveResponse)
async def remove_username(
    body: UsernameRequest, engine: ClaimEngine = Depends(get_claim_engine),
):
    """Release a username held by the given public key."""
    await engine.remove(body.username, OwnerKey(body.pubkey))
    return RemoveResponse(message=f"Username {body.username} removed successfully")


@router.put(
    "/{username}", response_model=BindingResponse,
    dependencies=[Depends(require_admin_key)],
)
async def assign_username(
    username: str,
    body: AssignRequest,
    response: Response,
    engine: ClaimEngine = Depends(get_claim_engine),
):
    """Administrative upsert: repoint an existing binding or create it."""
    row, created = await engine.assign(
        username, OwnerKey(body.pubkey), body.verification_type,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return _binding_response(engine, row)


@router.get("/{username}", response_model=BindingResponse)
async def get_username(
    username: str, engine: ClaimEngine = Depends(get_claim_engine),
):
    """Binding details with verification badge."""
    row = await engine.lookup(username)
    if row is None:
        raise ResourceNotFoundError("Username", username)
    return _binding_response(engine, row)
