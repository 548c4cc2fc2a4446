"""
Provider API endpoints
Provider status, current provider selection and API key management
"""

import logging

from fastapi import APIRouter, Depends, status
from typing import List

from synapse_reader.api.deps import get_key_store, get_provider_manager
from synapse_reader.config import PROVIDER_IDS
from synapse_reader.core.exceptions import http_404_not_found
from synapse_reader.core.security import KeyStore
from synapse_reader.providers.manager import ProviderManager
from synapse_reader.schemas.ai import (
    ProviderStatus,
    ProviderInfo,
    ProviderSelect,
    ProviderSelectResponse,
    ApiKeySet,
    KeyStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/providers", tags=["providers"])


def _check_provider_id(provider_id: str) -> None:
    if provider_id not in PROVIDER_IDS:
        raise http_404_not_found(f"Provider {provider_id} not found")


@router.get("", response_model=List[ProviderStatus])
async def list_providers(manager: ProviderManager = Depends(get_provider_manager)):
    """
    All providers with availability

    Availability is cached per provider (PROVIDER_AVAILABILITY_TTL seconds)
    """
    return await manager.list_statuses()


@router.get("/current", response_model=ProviderInfo)
async def current_provider(manager: ProviderManager = Depends(get_provider_manager)):
    return manager.get_current().info()


@router.put("/current", response_model=ProviderSelectResponse)
async def set_current_provider(
    payload: ProviderSelect,
    manager: ProviderManager = Depends(get_provider_manager)
):
    """Select the current provider; success=False for unknown ids"""
    return {"success": manager.set_current(payload.provider_id)}


@router.get("/{provider_id}/key", response_model=KeyStatus)
async def has_key(
    provider_id: str,
    key_store: KeyStore = Depends(get_key_store)
):
    """Whether an API key is stored (the key itself is never returned)"""
    _check_provider_id(provider_id)
    return {"provider_id": provider_id, "has_key": key_store.has_key(provider_id)}


@router.put("/{provider_id}/key", response_model=KeyStatus)
async def set_key(
    provider_id: str,
    payload: ApiKeySet,
    key_store: KeyStore = Depends(get_key_store),
    manager: ProviderManager = Depends(get_provider_manager)
):
    """
    Store an API key encrypted and rebuild providers so it takes effect

    Raises:
        KeyStoreError: Keys file not writable (500)
    """
    _check_provider_id(provider_id)
    key_store.set_key(provider_id, payload.api_key)
    manager.refresh()
    manager.invalidate(provider_id)
    logger.info(f"API key stored for {provider_id}")
    return {"provider_id": provider_id, "has_key": True}


@router.delete("/{provider_id}/key", status_code=status.HTTP_204_NO_CONTENT)
async def delete_key(
    provider_id: str,
    key_store: KeyStore = Depends(get_key_store),
    manager: ProviderManager = Depends(get_provider_manager)
):
    """
    Delete a stored API key

    Raises:
        HTTPException: 404 if no key was stored
    """
    _check_provider_id(provider_id)
    if not key_store.delete_key(provider_id):
        raise http_404_not_found(f"No API key stored for {provider_id}")
    manager.refresh()
    manager.invalidate(provider_id)
    return None
