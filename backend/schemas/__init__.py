"""
Pydantic Schemas for Request/Response Validation

Application Schemas:
    - RegisterRequest / RegisterResponse: POST /auth/register
    - ApiKeyInfo: GET /auth/api-key
    - RevokeRequest: POST /auth/revoke
    - ProfileResponse: GET /auth/profile

Analytics Schemas:
    - CollectEventRequest / CollectEventResponse: POST /analytics/collect
    - EventSummaryResponse: GET /auth/event-summary
    - UserStatsResponse: GET /auth/user-stats
"""

from backend.schemas.application import (
    CamelModel,
    RegisterRequest,
    RegisterResponse,
    ApiKeyInfo,
    RevokeRequest,
    MessageResponse,
    OwnerInfo,
    ProfileResponse,
)

from backend.schemas.analytics import (
    CollectEventRequest,
    CollectEventResponse,
    EventSummaryResponse,
    DeviceDetails,
    UserStatsResponse,
)

__all__ = [
    "CamelModel",
    "RegisterRequest",
    "RegisterResponse",
    "ApiKeyInfo",
    "RevokeRequest",
    "MessageResponse",
    "OwnerInfo",
    "ProfileResponse",
    "CollectEventRequest",
    "CollectEventResponse",
    "EventSummaryResponse",
    "DeviceDetails",
    "UserStatsResponse",
]
