"""
Pydantic Schemas for application registration and API key management
Request/Response validation

Field names are camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from uuid import UUID


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase in JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    """Request schema for application registration"""
    name: str = Field(..., min_length=1, max_length=255, description="Application name")
    domain: Optional[str] = Field(None, max_length=255, description="Optional site domain")


class RegisterResponse(CamelModel):
    """Response schema for application registration"""
    message: str = "Application registered successfully."
    application_id: UUID
    api_key: str = Field(..., description="API key (save this - only shown once!)")


class ApiKeyInfo(CamelModel):
    """One application and the status of its key"""
    application_id: UUID
    name: str
    domain: Optional[str] = None
    key_id: UUID
    status: str


class RevokeRequest(CamelModel):
    """Request schema for key revocation"""
    api_key_id: UUID = Field(..., description="ID of the key to revoke (keyId from GET /api-key)")


class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    message: str


class OwnerInfo(BaseModel):
    """Logged-in developer"""
    id: UUID
    name: Optional[str] = None
    email: str


class ProfileResponse(BaseModel):
    """Response schema for the profile check"""
    message: str = "You are logged in!"
    user: OwnerInfo
