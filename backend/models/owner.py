"""
Owner Model - Developer accounts that register applications
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from backend.database import Base


class Owner(Base):
    """
    Owner model for the developer who registers applications and reads reports

    Rows are created by the external OAuth login flow; this service only
    reads them to resolve the logged-in developer from the session.

    Attributes:
        id: Unique owner identifier (UUID)
        google_id: Identity provider subject (unique)
        email: Owner email
        name: Display name
        created_at: Account creation timestamp

    Relationships:
        applications: Applications registered by this owner (one-to-many)
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    google_id = Column(String(255), unique=True, index=True)
    email = Column(String(255), nullable=False)
    name = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    applications = relationship("Application", back_populates="owner")

    def __repr__(self):
        return f"<Owner(id={self.id}, email={self.email})>"
