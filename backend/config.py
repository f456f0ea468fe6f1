"""
Configuration management for the EventLens analytics API
Uses pydantic-settings for environment variable validation
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database (from environment - no defaults for credentials)
    DATABASE_URL: str = "postgresql://localhost:5432/eventlens"
    DEBUG: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    API_RELOAD: bool = False

    # Security
    SECRET_KEY: str = ""  # Required in production: signs the session cookie
    API_KEY_PREFIX: str = "key_live_"
    API_KEY_HEADER: str = "x-api-key"
    API_KEY_CACHE_TTL: int = 300  # 5 minutes, process-local validation cache

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Application
    APP_NAME: str = "EventLens"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Redis (summary cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_SUMMARY_TTL: int = 300  # 5 minutes
    CACHE_SOCKET_TIMEOUT: int = 5

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_AUTH: str = "100/15minutes"
    RATE_LIMIT_COLLECT: str = "60/minute"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
