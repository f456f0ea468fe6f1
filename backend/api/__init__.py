"""
API Routes and Endpoints

Routers:
    - auth: Application registration, API keys and reports (owner session)
    - analytics: Event collection (application API key)
"""

from backend.api import auth, analytics

__all__ = ["auth", "analytics"]
