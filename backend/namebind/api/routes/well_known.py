"""NIP-05 Document — GET /.well-known/nostr.json.

Invariants:
    - Response body is {"names": {username: pubkey}}, optionally filtered by ?name=
    - Never cached by clients or proxies (claims and removals must show at once)
"""

from fastapi import APIRouter, Depends, Query, Response

from namebind.api.deps import get_claim_engine
from namebind.services.claim_engine import ClaimEngine

router = APIRouter(tags=["nip05"])


@router.get("/.well-known/nostr.json")
async def nostr_json(
    response: Response,
    name: str | None = Query(None),
    engine: ClaimEngine = Depends(get_claim_engine),
):
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
    response.headers["Access-Control-Allow-Origin"] = "*"
    return await engine.names_document(name)
