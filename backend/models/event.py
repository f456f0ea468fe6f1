"""
Event Model - Behavioral events collected from applications
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from backend.database import Base


class Event(Base):
    """
    Event model - append-only record of one collection call

    Attributes:
        id: Unique event identifier (UUID)
        app_id: Foreign key to the emitting application
        event_name: Event name (e.g., "page_view")
        user_id: The application's own end-user identifier (free-form, optional)
        url: Page URL
        referrer: Referrer URL
        device: Device label; NULL is reported as "unknown"
        ip_address: Client IP address as reported by the application
        metadata_: Arbitrary JSON (browser, os, ...)
        timestamp: Server-side collection time
    """

    __tablename__ = "events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    app_id = Column(UUID(as_uuid=True), ForeignKey("applications.id"), nullable=False, index=True)

    event_name = Column(String(255), nullable=False, index=True)
    user_id = Column(String(255), index=True)
    url = Column(Text)
    referrer = Column(Text)
    device = Column(String(100))
    ip_address = Column(String(64))
    metadata_ = Column("metadata", JSON)

    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Relationships
    application = relationship("Application", back_populates="events")

    def __repr__(self):
        return f"<Event(id={self.id}, name={self.event_name}, app_id={self.app_id})>"
