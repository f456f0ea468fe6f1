"""
FastAPI dependencies
Owner session, application API key, service singletons
"""

from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from backend.config import settings
from backend.database import get_db
from backend.models.owner import Owner
from backend.core.exceptions import AuthenticationError
from backend.services.cache_service import CacheService
from backend.services.key_cache import KeyValidationCache
from backend.services.summary_service import SummaryService

SESSION_OWNER_KEY = "owner_id"


# ==============================================================================
# Service Singletons
# ==============================================================================
# One instance per process, shared by every request. Tests replace them
# through app.dependency_overrides.


@lru_cache(maxsize=1)
def get_key_cache() -> KeyValidationCache:
    """
    Get singleton KeyValidationCache instance

    Returns:
        KeyValidationCache: Process-wide API key cache
    """
    return KeyValidationCache()


@lru_cache(maxsize=1)
def get_cache_service() -> CacheService:
    """
    Get singleton CacheService instance

    Prevents Redis reconnection on every request

    Returns:
        CacheService: Singleton cache service
    """
    return CacheService()


def get_summary_service(
    cache: CacheService = Depends(get_cache_service)
) -> SummaryService:
    """SummaryService bound to the shared summary cache"""
    return SummaryService(cache)


# ==============================================================================
# Authentication
# ==============================================================================


def get_current_owner(
    request: Request,
    db: Session = Depends(get_db)
) -> Owner:
    """
    Get the logged-in developer from the session cookie

    The external login flow stores the owner id in the session under
    "owner_id"; this dependency only reads it.

    Returns:
        Owner: Authenticated developer

    Raises:
        AuthenticationError: no session, or the owner no longer exists
    """
    raw_owner_id = request.session.get(SESSION_OWNER_KEY)
    if not raw_owner_id:
        raise AuthenticationError("User not authenticated")

    try:
        owner_id = UUID(str(raw_owner_id))
    except ValueError:
        raise AuthenticationError("User not authenticated")

    owner = db.get(Owner, owner_id)
    if owner is None:
        raise AuthenticationError("User not authenticated")

    return owner


def get_application_id(
    api_key: Optional[str] = Header(None, alias=settings.API_KEY_HEADER, description="Application API key"),
    db: Session = Depends(get_db),
    key_cache: KeyValidationCache = Depends(get_key_cache)
) -> UUID:
    """
    Resolve the calling application from its API key header

    Returns:
        UUID: Application id

    Raises:
        AuthenticationError: key missing, unknown or revoked (after cache expiry)
    """
    return key_cache.resolve(db, api_key)
