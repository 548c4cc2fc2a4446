"""
Custom exceptions for Synapse Reader
"""

from typing import Optional

from fastapi import HTTPException, status


class SynapseException(Exception):
    """Base exception for Synapse Reader"""
    pass


class NotFoundError(SynapseException):
    """Resource not found"""
    pass


class ValidationError(SynapseException):
    """Invalid input that the request schema cannot catch"""
    pass


class KeyStoreError(SynapseException):
    """API key could not be stored or read"""
    pass


class ProviderError(SynapseException):
    """LLM provider call failed"""

    def __init__(self, message: str, provider_id: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.provider_id = provider_id
        self.status_code = status_code


class ProviderNotFoundError(ProviderError):
    """Unknown provider id"""
    pass


class ProviderUnavailableError(ProviderError):
    """Provider is registered but cannot serve requests (no key, server down)"""
    pass


class ProviderRateLimitError(ProviderError):
    """Provider answered 429"""
    pass


# HTTP exception helpers
def http_404_not_found(detail: str = "Resource not found"):
    """Raise 404 Not Found"""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )

