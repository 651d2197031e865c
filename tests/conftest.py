"""Test configuration and fixtures for the RAG support chat project."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# mypy: disable-error-code="import-untyped"
from testcontainers.core.docker_client import DockerClient
from testcontainers.postgres import PostgresContainer

# Set test environment variables before any settings are read
os.environ["ENVIRONMENT"] = "local"
os.environ["OPENAI_API_KEY"] = ""
os.environ["EMBEDDING_PROVIDER"] = "openai"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from ragchat.infrastructure.config.settings import get_settings  # noqa: E402
from ragchat.infrastructure.container import ServiceContainer  # noqa: E402
from ragchat.infrastructure.database.session import Base, create_tables  # noqa: E402
from ragchat.infrastructure.logging import configure_testing_logging  # noqa: E402
from ragchat.infrastructure.storage import InMemoryChunkStore, PgVectorChunkStore  # noqa: E402
from ragchat.interfaces.api.dependencies import get_container  # noqa: E402
from ragchat.interfaces.main import app  # noqa: E402
from tests.fakes import TEST_DIMENSION, FakeEmbeddingProvider  # noqa: E402

configure_testing_logging()

PGVECTOR_IMAGE = "pgvector/pgvector:pg16"


def is_docker_running() -> bool:
    """Check if Docker daemon is running."""
    try:
        DockerClient()
        return True
    except Exception:
        return False


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def memory_store() -> InMemoryChunkStore:
    return InMemoryChunkStore(dimension=TEST_DIMENSION)


@pytest.fixture
def fake_openai_client() -> MagicMock:
    """Stand-in for ``AsyncOpenAI``; tests set ``chat.completions.create`` as needed."""
    client = MagicMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def container(memory_store, fake_provider, fake_openai_client) -> ServiceContainer:
    return ServiceContainer(
        get_settings(),
        chunk_store=memory_store,
        embedding_provider=fake_provider,
        openai_client=fake_openai_client,
    )


@pytest_asyncio.fixture(scope="function")
async def client(container):
    """Create a test client whose services use the in-memory store and fake provider.

    Unhandled exceptions come back as responses, the way a server would send them.
    """
    app.dependency_overrides = {get_container: lambda: container}

    async with AsyncClient(transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture(scope="session")
def pg_container():
    """Create a PostgreSQL container with the pgvector extension available."""
    if not is_docker_running():
        pytest.skip("Docker is required, but not running")

    with PostgresContainer(PGVECTOR_IMAGE, driver="asyncpg") as pg:
        yield pg


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(pg_container):
    """Create a SQLAlchemy engine with a fresh schema for each test."""
    engine = create_async_engine(pg_container.get_connection_url(), echo=False)
    await create_tables(bind=engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def pg_store(test_db_engine):
    session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)
    store = PgVectorChunkStore(session_factory, dimension=TEST_DIMENSION)
    yield store
    await store.close()
