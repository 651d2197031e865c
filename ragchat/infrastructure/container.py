"""Process-wide handles built once and passed explicitly to services."""

from typing import Optional

from openai import AsyncOpenAI

from .config.settings import EmbeddingProviderOption, Settings
from .database.session import local_session
from .embedding.base import EmbeddingProvider
from .embedding.factory import create_embedding_provider
from .llm.client import create_openai_client
from .storage.base import ChunkStore
from .storage.pgvector_store import PgVectorChunkStore


class ServiceContainer:
    """Holds the chunk store, embedding provider and OpenAI client.

    Each handle is created on first access, so a missing API key surfaces as a
    ``ConfigurationError`` on the request that needs it instead of preventing
    startup. Tests construct a container with substitutes (an in-memory store, a
    fake provider) and hand it to the same services.
    """

    def __init__(
        self,
        settings: Settings,
        chunk_store: Optional[ChunkStore] = None,
        embedding_provider: Optional[EmbeddingProvider] = None,
        openai_client: Optional[AsyncOpenAI] = None,
    ):
        self.settings = settings
        self._chunk_store = chunk_store
        self._embedding_provider = embedding_provider
        self._openai_client = openai_client

    @property
    def openai_client(self) -> AsyncOpenAI:
        if self._openai_client is None:
            self._openai_client = create_openai_client(self.settings)
        return self._openai_client

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        if self._embedding_provider is None:
            client = self.openai_client if self.settings.EMBEDDING_PROVIDER == EmbeddingProviderOption.OPENAI else None
            self._embedding_provider = create_embedding_provider(self.settings, client=client)
        return self._embedding_provider

    @property
    def chunk_store(self) -> ChunkStore:
        if self._chunk_store is None:
            self._chunk_store = PgVectorChunkStore(local_session, dimension=self.settings.EMBEDDING_DIMENSION)
        return self._chunk_store

    async def aclose(self) -> None:
        """Close whatever was created; the pooled engine is disposed separately."""
        if self._chunk_store is not None:
            await self._chunk_store.close()
        if self._openai_client is not None:
            await self._openai_client.close()
