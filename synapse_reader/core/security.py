"""
Encrypted API key storage for cloud providers

Keys are encrypted at rest with Fernet (AES-128-CBC + HMAC) and stored as a
JSON object {provider_id: token} inside DATA_DIR. The random master key lives
in a separate file created with 0600 permissions.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from cryptography.fernet import Fernet, InvalidToken

from synapse_reader.config import settings
from synapse_reader.core.exceptions import KeyStoreError

logger = logging.getLogger(__name__)


class KeyStore:
    """
    File-backed encrypted key store with an in-memory cache

    Args:
        data_dir: Directory holding the keys file and master key
            (default: settings.DATA_DIR)
    """

    def __init__(self, data_dir: Optional[str] = None):
        base = Path(data_dir or settings.DATA_DIR)
        self.keys_path = base / settings.KEYS_FILE
        self.master_key_path = base / settings.MASTER_KEY_FILE
        self._cache: Dict[str, str] = {}
        self._fernet: Optional[Fernet] = None

    # ------------------------------------------------------------------
    # Master key
    # ------------------------------------------------------------------

    def _get_fernet(self) -> Fernet:
        if self._fernet is None:
            self._fernet = Fernet(self._get_or_create_master_key())
        return self._fernet

    def _get_or_create_master_key(self) -> bytes:
        if self.master_key_path.exists():
            key = self.master_key_path.read_bytes().strip()
            if key:
                return key

        key = Fernet.generate_key()
        self.master_key_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(str(self.master_key_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, key + b"\n")
        finally:
            os.close(fd)
        logger.info(f"Created master key at {self.master_key_path}")
        return key

    # ------------------------------------------------------------------
    # Keys file
    # ------------------------------------------------------------------

    def _load(self) -> Dict[str, str]:
        if not self.keys_path.exists():
            return {}
        try:
            return json.loads(self.keys_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading keys from {self.keys_path}: {e}")
            return {}

    def _save(self, keys: Dict[str, str]) -> None:
        try:
            self.keys_path.parent.mkdir(parents=True, exist_ok=True)
            self.keys_path.write_text(json.dumps(keys, indent=2), encoding="utf-8")
        except OSError as e:
            raise KeyStoreError(f"Could not write keys file: {e}") from e

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_key(self, provider_id: str, api_key: str) -> None:
        """Encrypt and persist the key for a provider"""
        token = self._get_fernet().encrypt(api_key.encode("utf-8")).decode("ascii")

        keys = self._load()
        keys[provider_id] = token
        self._save(keys)

        self._cache[provider_id] = api_key

    def get_key(self, provider_id: str) -> Optional[str]:
        """Decrypted key for a provider, or None when absent or unreadable"""
        if provider_id in self._cache:
            return self._cache[provider_id]

        token = self._load().get(provider_id)
        if not token:
            return None

        try:
            decrypted = self._get_fernet().decrypt(token.encode("ascii")).decode("utf-8")
        except InvalidToken:
            logger.error(f"Error decrypting key for provider {provider_id}")
            return None

        self._cache[provider_id] = decrypted
        return decrypted

    def has_key(self, provider_id: str) -> bool:
        if provider_id in self._cache:
            return True
        return bool(self._load().get(provider_id))

    def delete_key(self, provider_id: str) -> bool:
        """Remove a provider's key; False when there was none on disk"""
        self._cache.pop(provider_id, None)

        keys = self._load()
        if provider_id in keys:
            del keys[provider_id]
            self._save(keys)
            return True
        return False

    def provider_ids(self) -> List[str]:
        return list(self._load().keys())
