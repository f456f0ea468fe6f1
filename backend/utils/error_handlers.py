"""
Centralized Error Handling

Maps domain exceptions, request validation failures and database errors
to consistent JSON responses, and logs them without leaking credentials.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError, OperationalError
from typing import Dict, Any
import logging

from backend.core.exceptions import AnalyticsException
from backend.utils.sanitize import sanitize_headers, sanitize_string

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def handle_analytics_error(error: AnalyticsException) -> Dict[str, Any]:
        """
        Handle domain errors raised by services and dependencies

        Args:
            error: AnalyticsException subclass

        Returns:
            Error dictionary with message
        """
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        else:
            logger.info(f"{type(error).__name__}: {error.message}")
        return {
            "error": error.error,
            "message": error.message
        }

    @staticmethod
    def handle_validation_error(error: RequestValidationError) -> Dict[str, Any]:
        """
        Handle request validation errors (missing field, wrong type)

        Args:
            error: Validation exception

        Returns:
            Error dictionary with validation details
        """
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "")
            }
            for err in error.errors()
        ]
        logger.info(f"Validation error: {details}")
        return {
            "error": "validation_error",
            "message": "Request validation failed.",
            "details": details
        }

    @staticmethod
    def handle_database_error(error: SQLAlchemyError) -> Dict[str, Any]:
        """
        Handle database errors

        Args:
            error: Database exception

        Returns:
            Error dictionary (driver details are logged, not returned)
        """
        if isinstance(error, IntegrityError):
            logger.warning(f"Database integrity error: {error}")
        elif isinstance(error, OperationalError):
            logger.error(f"Database operational error: {error}")
        else:
            logger.error(f"Database error: {error}")
        return {
            "error": "database_error",
            "message": "Database error occurred."
        }

    @staticmethod
    def handle_generic_error(request: Request, error: Exception) -> Dict[str, Any]:
        """
        Handle generic/unknown errors

        Args:
            request: Request that failed (headers are logged sanitized)
            error: Exception

        Returns:
            Error dictionary
        """
        logger.exception(
            f"Unexpected error on {request.method} {request.url.path}: "
            f"{sanitize_string(str(error))} headers={sanitize_headers(dict(request.headers))}"
        )
        return {
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again.",
            "type": type(error).__name__
        }


# Global exception handlers for FastAPI

async def analytics_error_handler(request: Request, exc: AnalyticsException):
    """FastAPI exception handler for domain errors"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorHandler.handle_analytics_error(exc)
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """FastAPI exception handler for request validation errors"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorHandler.handle_validation_error(exc)
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """FastAPI exception handler for database errors"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorHandler.handle_database_error(exc)
    )


async def generic_error_handler(request: Request, exc: Exception):
    """FastAPI exception handler for generic errors"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorHandler.handle_generic_error(request, exc)
    )


# Setup function for FastAPI app
def setup_error_handlers(app):
    """
    Setup global error handlers for FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AnalyticsException, analytics_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    logger.info("Error handlers registered")
