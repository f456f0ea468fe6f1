"""
Rate Limiting Middleware

Protects API endpoints from abuse using SlowAPI.
Limits are per client IP: a looser window for developer (auth) endpoints and
a tighter one for the high-volume event collection endpoint.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, status
from fastapi.responses import JSONResponse
from backend.config import settings
import logging

logger = logging.getLogger(__name__)


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED
)


def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors

    Returns:
        429 JSON response with a Retry-After header
    """
    retry_after = "60"
    if exc.headers:
        retry_after = exc.headers.get("Retry-After", retry_after)

    logger.warning(
        f"Rate limit exceeded for {get_remote_address(request)} "
        f"on {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests from this IP, please try again later.",
            "limit": str(exc.detail),
            "endpoint": request.url.path
        },
        headers={"Retry-After": retry_after}
    )


# Rate limit decorators for different endpoints

def auth_rate_limit():
    """
    Rate limit for developer endpoints (register, keys, reports)

    One bucket per client IP shared by every auth route.
    Default: 100 requests per 15 minutes
    """
    return limiter.shared_limit(settings.RATE_LIMIT_AUTH, scope="auth")


def collect_rate_limit():
    """
    Rate limit for event collection

    Default: 60 requests per minute
    """
    return limiter.limit(settings.RATE_LIMIT_COLLECT)


# Middleware setup function
def setup_rate_limiting(app):
    """
    Setup rate limiting middleware

    Args:
        app: FastAPI application instance
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_exceeded_handler)

    if settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting enabled")
    else:
        logger.warning("Rate limiting disabled")
