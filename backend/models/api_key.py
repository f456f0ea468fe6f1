"""
API Key Model - Application authentication tokens
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from backend.database import Base


KEY_STATUS_ACTIVE = "active"
KEY_STATUS_REVOKED = "revoked"


class APIKey(Base):
    """
    API Key model for application authentication

    Attributes:
        id: Unique key identifier (UUID)
        app_id: Foreign key to applications table
        key_hash: SHA-256 hash of the API key (for lookup)
        key_prefix: Leading chars of key (for identification, e.g., "key_live_ab12")
        status: "active" or "revoked" (revocation is one-way)
        created_at: Key creation timestamp
        revoked_at: Set when the key is revoked

    Relationships:
        application: Application this key authenticates (many-to-one)

    Security:
        - API key is hashed with SHA-256 before storage
        - Original key is only shown once upon creation
        - Rows are never deleted, only revoked
    """

    __tablename__ = "api_keys"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    app_id = Column(UUID(as_uuid=True), ForeignKey("applications.id"), nullable=False, index=True)

    key_hash = Column(String(64), unique=True, nullable=False, index=True)
    key_prefix = Column(String(20), nullable=False)
    status = Column(String(16), nullable=False, default=KEY_STATUS_ACTIVE)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    revoked_at = Column(DateTime(timezone=True))

    # Relationships
    application = relationship("Application", back_populates="api_keys")

    def __repr__(self):
        return f"<APIKey(id={self.id}, prefix={self.key_prefix}, status={self.status})>"
