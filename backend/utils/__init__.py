"""
Utility Functions and Classes

Provides error handling and log sanitization helpers.
"""

from backend.utils.error_handlers import (
    ErrorHandler,
    setup_error_handlers
)
from backend.utils.sanitize import get_safe_api_key_display

__all__ = [
    "ErrorHandler",
    "setup_error_handlers",
    "get_safe_api_key_display"
]
