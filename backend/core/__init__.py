"""
Core Utilities

Modules:
    - security: API key generation and hashing
    - exceptions: Exception taxonomy mapped to HTTP status codes
"""

from backend.core import security, exceptions

__all__ = ["security", "exceptions"]
