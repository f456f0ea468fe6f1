"""
Pydantic Schemas for event collection and reporting
Request/Response validation
"""

from pydantic import Field
from typing import Any, Dict, Optional
from datetime import datetime

from backend.schemas.application import CamelModel


class CollectEventRequest(CamelModel):
    """Request schema for event collection"""
    event: str = Field(..., min_length=1, max_length=255, description="Event name, e.g. page_view")
    user_id: Optional[str] = Field(None, max_length=255, description="Your own identifier for the end user")
    url: Optional[str] = None
    referrer: Optional[str] = None
    device: Optional[str] = Field(None, max_length=100)
    ip_address: Optional[str] = Field(None, max_length=64)
    metadata: Optional[Dict[str, Any]] = Field(None, description="Free-form JSON (browser, os, ...)")


class CollectEventResponse(CamelModel):
    """Response schema for event collection"""
    status: str = "success"
    message: str = "Event collected."


class EventSummaryResponse(CamelModel):
    """Aggregated counts for the requested filters"""
    event: str = Field(..., description="Filtered event name or 'all_events'")
    count: int
    unique_users: int
    device_data: Dict[str, int] = Field(default_factory=dict, description="Event count per device")


class DeviceDetails(CamelModel):
    """Browser and OS reported in the latest event's metadata"""
    browser: Optional[str] = None
    os: Optional[str] = None


class UserStatsResponse(CamelModel):
    """Activity summary for one end user"""
    user_id: str
    total_events: int
    device_details: DeviceDetails
    ip_address: Optional[str] = None
    last_seen: datetime
