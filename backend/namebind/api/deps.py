"""Dependency Wiring — builds request-scoped components around the injected store.

Invariants:
    - One SqlRowStore per request, bound to that request's AsyncSession
    - Components receive the store at construction; none reach for a global
    - Settings come through get_settings so tests can override them per app

Design Decisions:
    - Plain functions with Depends over a container library: the graph is three
      components deep and FastAPI already resolves it
"""

import hmac

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from namebind.config import Settings, get_settings
from namebind.core.errors import AdminKeyError
from namebind.core.validate_identifiers import build_reserved_set
from namebind.infrastructure.database import get_db
from namebind.infrastructure.row_store import SqlRowStore
from namebind.services.asset_versions import AssetVersionManager
from namebind.services.claim_engine import ClaimEngine
from namebind.services.slug_registry import SlugRegistry


def get_row_store(db: AsyncSession = Depends(get_db)) -> SqlRowStore:
    return SqlRowStore(db)


def get_claim_engine(
    store: SqlRowStore = Depends(get_row_store),
    settings: Settings = Depends(get_settings),
) -> ClaimEngine:
    return ClaimEngine(
        store,
        domain=settings.identifier_domain,
        reserved=build_reserved_set(settings.product_name),
    )


def get_slug_registry(store: SqlRowStore = Depends(get_row_store)) -> SlugRegistry:
    return SlugRegistry(store)


def get_asset_manager(
    store: SqlRowStore = Depends(get_row_store),
    settings: Settings = Depends(get_settings),
) -> AssetVersionManager:
    return AssetVersionManager(store, fail_open=settings.asset_auth_fail_open)


def require_admin_key(
    x_admin_key: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Gate administrative routes when ADMIN_API_KEY is configured."""
    if settings.admin_api_key is None:
        return
    if not x_admin_key or not hmac.compare_digest(x_admin_key, settings.admin_api_key):
        raise AdminKeyError()
