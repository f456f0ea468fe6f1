"""
Application Model - Registered clients that emit events
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from backend.database import Base


class Application(Base):
    """
    Application model - a client identified by API key

    Attributes:
        id: Unique application identifier (UUID)
        user_id: Foreign key to the owning developer (fixed at creation)
        name: Application name
        domain: Optional site domain
        created_at: Registration timestamp

    Relationships:
        owner: Developer who registered the application (many-to-one)
        api_keys: Keys issued for this application (one-to-many)
        events: Collected events (one-to-many)
    """

    __tablename__ = "applications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    domain = Column(String(255))

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    owner = relationship("Owner", back_populates="applications")
    api_keys = relationship("APIKey", back_populates="application")
    events = relationship("Event", back_populates="application")

    def __repr__(self):
        return f"<Application(id={self.id}, name={self.name}, user_id={self.user_id})>"
