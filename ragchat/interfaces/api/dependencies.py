"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from ...infrastructure.container import ServiceContainer
from ...infrastructure.embedding.base import EmbeddingProvider
from ...infrastructure.storage.base import ChunkStore
from ...modules.chat.services import ChatService
from ...modules.common.exceptions import ConfigurationError
from ...modules.embedding.services import ContentEmbeddingService
from ...modules.retrieval.services import RetrievalService
from ...modules.retrieval.tool import build_vector_search_tool


def get_container(request: Request) -> ServiceContainer:
    """Dependency for the process-wide ``ServiceContainer`` set up by the lifespan."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ConfigurationError("Application services are not initialized")
    return container


Container = Annotated[ServiceContainer, Depends(get_container)]


def get_chunk_store(container: Container) -> ChunkStore:
    """Dependency for providing the configured ChunkStore."""
    return container.chunk_store


def get_embedding_provider(container: Container) -> EmbeddingProvider:
    """Dependency for providing the configured EmbeddingProvider."""
    return container.embedding_provider


def get_retrieval_service(
    container: Container,
    store: ChunkStore = Depends(get_chunk_store),
    embedding_provider: EmbeddingProvider = Depends(get_embedding_provider),
) -> RetrievalService:
    """Dependency for providing a RetrievalService instance."""
    return RetrievalService(store, embedding_provider, top_k=container.settings.RETRIEVAL_TOP_K)


def get_content_embedding_service(
    store: ChunkStore = Depends(get_chunk_store),
    embedding_provider: EmbeddingProvider = Depends(get_embedding_provider),
) -> ContentEmbeddingService:
    """Dependency for providing a ContentEmbeddingService instance."""
    return ContentEmbeddingService(store, embedding_provider)


def get_chat_service(
    container: Container,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> ChatService:
    """Dependency for providing a ChatService wired with the vector search tool."""
    return ChatService(
        client=container.openai_client,
        tools=[build_vector_search_tool(retrieval_service)],
        model=container.settings.CHAT_MODEL,
        max_steps=container.settings.CHAT_MAX_STEPS,
    )
