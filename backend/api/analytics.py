"""
Event collection API endpoint
Authenticated by application API key, not by owner session
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.api.deps import get_application_id
from backend.schemas.analytics import CollectEventRequest, CollectEventResponse
from backend.services.event_service import EventService
from backend.middleware.rate_limiter import collect_rate_limit

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/collect", response_model=CollectEventResponse, status_code=status.HTTP_201_CREATED)
@collect_rate_limit()
def collect(
    request: Request,
    body: CollectEventRequest,
    db: Session = Depends(get_db),
    application_id: UUID = Depends(get_application_id)
):
    """
    Record one event for the calling application

    Raises:
        400 if event is missing, 401 if the API key is missing or invalid
    """
    EventService(db).record_event(
        application_id=application_id,
        event_name=body.event,
        user_id=body.user_id,
        url=body.url,
        referrer=body.referrer,
        device=body.device,
        ip_address=body.ip_address,
        metadata=body.metadata,
    )
    return CollectEventResponse()
