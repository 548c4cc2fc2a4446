"""
Centralized Error Handling

Maps domain, provider and database exceptions to consistent JSON error
responses and logs them once.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError
from typing import Dict, Any
import logging
import traceback

from synapse_reader.core.exceptions import (
    KeyStoreError,
    NotFoundError,
    ProviderError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def handle_provider_error(error: ProviderError) -> Dict[str, Any]:
        """
        Handle LLM provider errors

        Args:
            error: Provider exception

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, ProviderRateLimitError):
            logger.warning(f"Provider rate limit exceeded: {error}")
            return {
                "error": "rate_limit",
                "message": "Provider rate limit exceeded. Please try again in a moment.",
                "retry_after": 60,
                "provider": error.provider_id
            }

        elif isinstance(error, ProviderNotFoundError):
            logger.warning(f"Unknown provider: {error}")
            return {
                "error": "provider_not_found",
                "message": str(error),
                "provider": error.provider_id
            }

        logger.error(f"Provider error: {error}")
        return {
            "error": "provider_error",
            "message": str(error),
            "status_code": error.status_code,
            "provider": error.provider_id
        }

    @staticmethod
    def handle_database_error(error: Exception) -> Dict[str, Any]:
        """
        Handle database errors

        Args:
            error: Database exception

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, IntegrityError):
            logger.warning(f"Database integrity error: {error}")
            return {
                "error": "integrity_error",
                "message": "Data integrity violation. Duplicate entry or constraint failed.",
                "details": str(error.orig) if hasattr(error, 'orig') else str(error)
            }

        elif isinstance(error, OperationalError):
            logger.error(f"Database operational error: {error}")
            return {
                "error": "database_error",
                "message": "Database connection or operational error.",
                "details": str(error.orig) if hasattr(error, 'orig') else str(error)
            }

        logger.error(f"Database API error: {error}")
        return {
            "error": "database_error",
            "message": "Database error occurred.",
            "details": str(error.orig) if hasattr(error, 'orig') else str(error)
        }

    @staticmethod
    def handle_validation_error(error: Exception) -> Dict[str, Any]:
        logger.warning(f"Validation error: {error}")
        return {
            "error": "validation_error",
            "message": str(error)
        }

    @staticmethod
    def handle_not_found_error(error: Exception) -> Dict[str, Any]:
        logger.warning(f"Not found: {error}")
        return {
            "error": "not_found",
            "message": str(error)
        }

    @staticmethod
    def handle_generic_error(error: Exception) -> Dict[str, Any]:
        """
        Handle generic/unknown errors

        Args:
            error: Exception

        Returns:
            Error dictionary
        """
        logger.error(f"Unexpected error: {error}\n{traceback.format_exc()}")
        return {
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again.",
            "type": type(error).__name__
        }


# Global exception handlers for FastAPI

async def provider_error_handler(request: Request, exc: ProviderError):
    """FastAPI exception handler for provider errors"""
    error_data = ErrorHandler.handle_provider_error(exc)
    if isinstance(exc, ProviderRateLimitError):
        status_code = status.HTTP_429_TOO_MANY_REQUESTS
    elif isinstance(exc, ProviderNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=error_data)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """FastAPI exception handler for constraint violations"""
    error_data = ErrorHandler.handle_database_error(exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_data
    )


async def database_error_handler(request: Request, exc: DBAPIError):
    """FastAPI exception handler for other database errors"""
    error_data = ErrorHandler.handle_database_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorHandler.handle_not_found_error(exc)
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorHandler.handle_validation_error(exc)
    )


async def key_store_error_handler(request: Request, exc: KeyStoreError):
    logger.error(f"Key store error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "key_store_error", "message": str(exc)}
    )


async def generic_error_handler(request: Request, exc: Exception):
    """FastAPI exception handler for generic errors"""
    error_data = ErrorHandler.handle_generic_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


# Setup function for FastAPI app
def setup_error_handlers(app):
    """
    Setup global error handlers for FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ProviderError, provider_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(KeyStoreError, key_store_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(DBAPIError, database_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    logger.info("Error handlers registered")
