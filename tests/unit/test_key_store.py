"""
Unit tests for the encrypted API key store
"""

import json
import os
import stat

import pytest

from synapse_reader.core.security import KeyStore


@pytest.mark.unit
class TestKeyStore:
    """Test KeyStore"""

    def test_set_and_get(self, key_store):
        key_store.set_key("openai", "sk-test-123")

        assert key_store.get_key("openai") == "sk-test-123"
        assert key_store.has_key("openai") is True
        assert key_store.has_key("gemini") is False
        assert key_store.get_key("gemini") is None

    def test_keys_encrypted_on_disk(self, key_store):
        key_store.set_key("anthropic", "sk-ant-secret")

        raw = key_store.keys_path.read_text(encoding="utf-8")

        assert "sk-ant-secret" not in raw
        assert set(json.loads(raw)) == {"anthropic"}

    def test_persists_across_instances(self, key_store, tmp_path):
        key_store.set_key("gemini", "AIza-key")

        reopened = KeyStore(data_dir=str(tmp_path))

        assert reopened.get_key("gemini") == "AIza-key"
        assert reopened.provider_ids() == ["gemini"]

    def test_master_key_permissions(self, key_store):
        key_store.set_key("openai", "sk-test")

        mode = stat.S_IMODE(os.stat(key_store.master_key_path).st_mode)

        assert mode == 0o600

    def test_delete(self, key_store, tmp_path):
        key_store.set_key("openai", "sk-test")

        assert key_store.delete_key("openai") is True
        assert key_store.get_key("openai") is None
        assert KeyStore(data_dir=str(tmp_path)).has_key("openai") is False
        assert key_store.delete_key("openai") is False

    def test_unreadable_token(self, key_store, tmp_path):
        key_store.set_key("openai", "sk-test")
        key_store.keys_path.write_text(json.dumps({"openai": "not-a-fernet-token"}), encoding="utf-8")

        assert KeyStore(data_dir=str(tmp_path)).get_key("openai") is None

    def test_corrupt_keys_file(self, key_store):
        key_store.keys_path.write_text("{broken", encoding="utf-8")

        assert key_store.get_key("openai") is None
        assert key_store.provider_ids() == []
