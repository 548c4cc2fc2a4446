"""
Fixtures for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from synapse_reader.api.deps import (
    get_db,
    get_key_store,
    get_provider_manager,
    get_session_factory,
)
from synapse_reader.main import app


@pytest.fixture
def client(db_session, session_factory, key_store, provider_manager):
    """Test client bound to the in-memory database and the fake provider"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_key_store] = lambda: key_store
    app.dependency_overrides[get_provider_manager] = lambda: provider_manager

    # Not used as a context manager: startup would migrate the on-disk database
    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
