"""Builds the embedding provider selected in settings."""

from typing import Optional

from openai import AsyncOpenAI

from ..config.settings import EmbeddingProviderOption, Settings
from ..llm.client import create_openai_client
from .base import EmbeddingProvider
from .local_provider import LocalEmbeddingProvider
from .openai_provider import OpenAIEmbeddingProvider


def create_embedding_provider(settings: Settings, client: Optional[AsyncOpenAI] = None) -> EmbeddingProvider:
    """Create the configured provider.

    Raises:
        ConfigurationError: If the OpenAI provider is selected without an API key.
    """
    if settings.EMBEDDING_PROVIDER == EmbeddingProviderOption.LOCAL:
        return LocalEmbeddingProvider(model_name=settings.LOCAL_EMBEDDING_MODEL, dimension=settings.EMBEDDING_DIMENSION)

    return OpenAIEmbeddingProvider(
        client=client or create_openai_client(settings),
        model_name=settings.EMBEDDING_MODEL,
        dimension=settings.EMBEDDING_DIMENSION,
    )
