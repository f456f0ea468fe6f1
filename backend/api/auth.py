"""
Developer API endpoints
Application registration, API key management and reporting

All routes require a logged-in owner (session cookie).
Handlers are plain functions: they block on the database and Redis, so
FastAPI runs them in its threadpool.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.api.deps import get_current_owner, get_summary_service
from backend.models.owner import Owner
from backend.schemas.application import (
    RegisterRequest,
    RegisterResponse,
    ApiKeyInfo,
    RevokeRequest,
    MessageResponse,
    OwnerInfo,
    ProfileResponse,
)
from backend.schemas.analytics import EventSummaryResponse, UserStatsResponse
from backend.services.key_service import KeyService
from backend.services.event_service import EventService
from backend.services.filter_builder import SummaryFilter
from backend.services.summary_service import SummaryService
from backend.middleware.rate_limiter import auth_rate_limit

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/profile", response_model=ProfileResponse)
@auth_rate_limit()
def profile(
    request: Request,
    current_owner: Owner = Depends(get_current_owner)
):
    """Confirm the session and return the logged-in developer"""
    return ProfileResponse(
        user=OwnerInfo(id=current_owner.id, name=current_owner.name, email=current_owner.email)
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
def register(
    request: Request,
    body: RegisterRequest,
    db: Session = Depends(get_db),
    current_owner: Owner = Depends(get_current_owner)
):
    """
    Register a new application and generate its API key

    **Important**: The API key is only returned once. Save it securely!

    Args:
        body: Application name and optional domain
        db: Database session
        current_owner: Authenticated developer

    Returns:
        RegisterResponse: Application ID and API key

    Raises:
        400 if name is missing, 401 without a session
    """
    issued = KeyService(db).issue(current_owner.id, body.name, body.domain)

    return RegisterResponse(
        application_id=issued.application_id,
        api_key=issued.api_key  # Only returned once!
    )


@router.get("/api-key", response_model=List[ApiKeyInfo])
@auth_rate_limit()
def list_api_keys(
    request: Request,
    db: Session = Depends(get_db),
    current_owner: Owner = Depends(get_current_owner)
):
    """
    List the developer's applications with their key status

    Key values are never returned, only key IDs usable for revocation.
    """
    return KeyService(db).list_for_owner(current_owner.id)


@router.post("/revoke", response_model=MessageResponse)
@auth_rate_limit()
def revoke_api_key(
    request: Request,
    body: RevokeRequest,
    db: Session = Depends(get_db),
    current_owner: Owner = Depends(get_current_owner)
):
    """
    Revoke one of the developer's API keys

    Already-validated keys may keep working for up to the key cache TTL.

    Raises:
        404 if the key does not exist or belongs to someone else
    """
    KeyService(db).revoke(current_owner.id, body.api_key_id)
    return MessageResponse(message="API key successfully revoked.")


@router.get("/event-summary", response_model=EventSummaryResponse)
@auth_rate_limit()
def event_summary(
    request: Request,
    event: Optional[str] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    applicationId: Optional[str] = None,
    db: Session = Depends(get_db),
    current_owner: Owner = Depends(get_current_owner),
    summary_service: SummaryService = Depends(get_summary_service)
):
    """
    Event counts, unique users and device breakdown

    All filters are optional and combine with AND. Results are cached
    for a few minutes per filter combination.

    Args:
        event: Event name
        startDate: Inclusive lower bound (ISO-8601)
        endDate: Inclusive upper bound (ISO-8601)
        applicationId: Restrict to one of the developer's applications
    """
    summary_filter = SummaryFilter.from_query(
        owner_id=current_owner.id,
        event=event,
        start_date=startDate,
        end_date=endDate,
        application_id=applicationId,
    )
    return summary_service.summarize(db, summary_filter)


@router.get("/user-stats", response_model=UserStatsResponse)
@auth_rate_limit()
def user_stats(
    request: Request,
    userId: str,
    db: Session = Depends(get_db),
    current_owner: Owner = Depends(get_current_owner)
):
    """
    Activity for one end user across the developer's applications

    Args:
        userId: The end-user identifier sent with collected events

    Raises:
        404 if the user has no events in the developer's applications
    """
    return EventService(db).user_stats(current_owner.id, userId)
