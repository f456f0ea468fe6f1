"""
EventLens API - FastAPI application entry point
Event collection under application API keys, cached reports for developers
"""

import logging

# Configure logging to show INFO level
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s"
)

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from backend.config import settings
from backend.database import create_tables
from backend.api.deps import get_cache_service
from backend.services.cache_service import CacheService
from backend.middleware.rate_limiter import setup_rate_limiting
from backend.utils.error_handlers import setup_error_handlers

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Analytics ingestion and reporting API",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "authentication", "description": "Application registration, API keys and reports"},
        {"name": "analytics", "description": "Event collection"},
    ]
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed session cookie carrying the logged-in owner id
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY or "dev-insecure-session-secret",
    https_only=settings.ENVIRONMENT == "production",
)

setup_rate_limiting(app)
setup_error_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Initialize database tables on startup"""
    if not settings.SECRET_KEY:
        logger.warning("SECRET_KEY is not set; session cookies use an insecure development secret")
    create_tables()
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started")
    logger.info(f"API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")


@app.get("/api/health")
def health_check(cache: CacheService = Depends(get_cache_service)):
    """Health check"""
    return {
        "status": "ok",
        "message": "API is running",
        "version": settings.APP_VERSION,
        "cache": "connected" if cache.ping() else "unavailable"
    }


# Import and register routers
from backend.api import auth, analytics

app.include_router(auth.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
