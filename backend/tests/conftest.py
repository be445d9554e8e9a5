"""Test fixtures — in-memory object store, session gate and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pubhost.core.auth import AuthorizationGate
from pubhost.main import create_app
from pubhost.services import init_services, shutdown_services
from pubhost.services.documents import DocumentService
from pubhost.storage.memory import InMemoryObjectStore

TEST_SECRET = "test-secret-32-chars-long-enough!"


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def gate() -> AuthorizationGate:
    return AuthorizationGate(secret=TEST_SECRET, expire_minutes=5)


@pytest.fixture
def token(gate: AuthorizationGate) -> str:
    return gate.issue_token()


@pytest.fixture
def documents(store: InMemoryObjectStore, gate: AuthorizationGate) -> DocumentService:
    return DocumentService(store, gate)


@pytest_asyncio.fixture
async def client(store: InMemoryObjectStore, gate: AuthorizationGate):
    """Async test client wired to the in-memory store and test gate."""
    await init_services(store=store, gate=gate)
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    await shutdown_services()
