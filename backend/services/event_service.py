"""
Event Service

Records collected events and answers per end-user lookups.
User lookups are scoped through application ownership like every other
read over the event table.
"""

from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.database import transaction
from backend.models.application import Application
from backend.models.event import Event
from backend.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class EventService:
    """Append events and read per-user statistics"""

    def __init__(self, db: Session):
        """Initialize event service with database session"""
        self.db = db

    def record_event(
        self,
        application_id: UUID,
        event_name: str,
        user_id: Optional[str] = None,
        url: Optional[str] = None,
        referrer: Optional[str] = None,
        device: Optional[str] = None,
        ip_address: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Event:
        """
        Append one event for an authenticated application

        Empty optional values are stored as NULL.

        Args:
            application_id: Application resolved from the API key
            event_name: Event name (required)

        Returns:
            Persisted Event
        """
        event = Event(
            app_id=application_id,
            event_name=event_name,
            user_id=user_id or None,
            url=url or None,
            referrer=referrer or None,
            device=device or None,
            ip_address=ip_address or None,
            metadata_=metadata or None
        )

        with transaction(self.db) as tx:
            tx.add(event)

        logger.debug(f"Collected event '{event_name}' for application {application_id}")
        return event

    def user_stats(self, owner_id: UUID, user_id: str) -> Dict[str, Any]:
        """
        Activity summary for one end user across the owner's applications

        Args:
            owner_id: Developer making the request
            user_id: The applications' own identifier for the end user

        Returns:
            Dict with userId, totalEvents, deviceDetails, ipAddress, lastSeen

        Raises:
            NotFoundError: no events for this user in the owner's applications
        """
        scope = (
            Application.user_id == owner_id,
            Event.user_id == user_id,
        )

        latest = self.db.execute(
            select(Event.metadata_.label("event_metadata"), Event.ip_address, Event.timestamp)
            .join(Application, Event.app_id == Application.id)
            .where(*scope)
            .order_by(Event.timestamp.desc())
            .limit(1)
        ).first()

        if latest is None:
            raise NotFoundError("User not found for this developer.")

        total_events = self.db.execute(
            select(func.count())
            .select_from(Event)
            .join(Application, Event.app_id == Application.id)
            .where(*scope)
        ).scalar_one()

        metadata = latest.event_metadata or {}

        return {
            "userId": user_id,
            "totalEvents": int(total_events),
            "deviceDetails": {
                "browser": metadata.get("browser"),
                "os": metadata.get("os"),
            },
            "ipAddress": latest.ip_address,
            "lastSeen": latest.timestamp,
        }
