"""
SQLAlchemy Database Models

All models use UUID as primary key for better distribution and security.
All timestamps use server_default=func.now() for consistent timezone handling.

Models:
    - Owner: Developer accounts (populated by the external login flow)
    - Application: Registered clients that emit events
    - APIKey: Hashed application keys with active/revoked status
    - Event: Append-only behavioral events

Relationships:
    Owner 1:N Application
    Application 1:N APIKey
    Application 1:N Event

Nothing in this schema is deleted by the service: keys are revoked,
events are only ever appended.
"""

from backend.models.owner import Owner
from backend.models.application import Application
from backend.models.api_key import APIKey
from backend.models.event import Event

__all__ = ["Owner", "Application", "APIKey", "Event"]
