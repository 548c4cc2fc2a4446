"""
Pytest configuration and shared fixtures for Synapse Reader tests

Provides:
- In-memory SQLite database with the full migrated schema (FTS5 included)
- Session factory and per-test session
- Sample documents and interactions
- A scriptable fake AI provider and a provider manager around it
"""

import os
import tempfile

# Settings are read at import time: keep data files out of the working tree
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="synapse-test-"))

import pytest
from typing import Generator, List, Optional
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from synapse_reader.database import make_engine, create_tables
from synapse_reader.core.security import KeyStore
from synapse_reader.models.document import Document
from synapse_reader.models.interaction import Interaction
from synapse_reader.providers.base import AIProvider, CompletionRequest
from synapse_reader.providers.manager import ProviderManager


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for API endpoints")


@pytest.fixture
def db_engine():
    """In-memory SQLite database with the current schema, one per test"""
    engine = make_engine("sqlite:///:memory:", poolclass=StaticPool)
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_document(db_session) -> Document:
    """Create a test document"""
    document = Document(
        filename="neural_networks.pdf",
        filepath="/papers/neural_networks.pdf",
        total_pages=12,
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document


@pytest.fixture
def second_document(db_session) -> Document:
    document = Document(
        filename="thermodynamics.pdf",
        filepath="/papers/thermodynamics.pdf",
        total_pages=30,
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document


@pytest.fixture
def test_interaction(db_session, test_document) -> Interaction:
    """Create a test interaction on test_document"""
    interaction = Interaction(
        document_id=test_document.id,
        action_type="explain",
        selected_text="backpropagation",
        page_context="Training uses backpropagation to compute gradients.",
        response="Backpropagation computes gradients layer by layer using the chain rule.",
        page_number=3,
    )
    db_session.add(interaction)
    db_session.commit()
    db_session.refresh(interaction)
    return interaction


class FakeProvider(AIProvider):
    """Provider that streams scripted chunks and records requests"""

    id = "fake"
    name = "Fake"
    type = "local"

    def __init__(
        self,
        chunks: Optional[List[str]] = None,
        available: bool = True,
        error: Optional[Exception] = None,
    ):
        super().__init__()
        self.chunks = chunks if chunks is not None else ["Hello", ", ", "world"]
        self.available = available
        self.error = error
        self.requests: List[CompletionRequest] = []

    async def is_available(self) -> bool:
        return self.available

    async def complete(self, request: CompletionRequest):
        self.requests.append(request)
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def key_store(tmp_path) -> KeyStore:
    return KeyStore(data_dir=str(tmp_path))


@pytest.fixture
def provider_manager(key_store, fake_provider) -> ProviderManager:
    """Provider manager with the fake provider registered and selected"""
    manager = ProviderManager(key_store=key_store)
    manager.providers[fake_provider.id] = fake_provider
    manager.current_provider_id = fake_provider.id
    return manager


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances with custom chunks/availability/error"""
    return FakeProvider
