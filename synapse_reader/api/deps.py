"""
FastAPI dependencies
Database session, provider registry, key store and stream registry
"""

from functools import lru_cache
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from synapse_reader.core.security import KeyStore
from synapse_reader.database import SessionLocal, get_db
from synapse_reader.providers.manager import ProviderManager
from synapse_reader.services.ai_service import AIService, StreamRegistry

__all__ = [
    "get_db",
    "get_key_store",
    "get_provider_manager",
    "get_stream_registry",
    "get_session_factory",
    "get_ai_service",
]


# Using lru_cache to create singleton instances


@lru_cache(maxsize=1)
def get_key_store() -> KeyStore:
    """
    Get singleton KeyStore instance

    Keeps decrypted keys cached in memory between requests
    """
    return KeyStore()


@lru_cache(maxsize=1)
def get_provider_manager() -> ProviderManager:
    """
    Get singleton ProviderManager instance

    The current provider and the availability cache live for the whole process
    """
    return ProviderManager(key_store=get_key_store())


@lru_cache(maxsize=1)
def get_stream_registry() -> StreamRegistry:
    """
    Get singleton StreamRegistry instance

    Cancel requests must reach streams started by other requests
    """
    return StreamRegistry()


def get_session_factory() -> Callable[[], Session]:
    """Session factory for work that outlives the request session"""
    return SessionLocal


def get_ai_service(
    manager: ProviderManager = Depends(get_provider_manager),
    registry: StreamRegistry = Depends(get_stream_registry),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> AIService:
    return AIService(manager, registry, session_factory=session_factory)
