"""Embedding infrastructure for text-to-vector conversion."""

from .base import EmbeddingProvider
from .factory import create_embedding_provider
from .local_provider import LocalEmbeddingProvider
from .openai_provider import OpenAIEmbeddingProvider

__all__ = ["EmbeddingProvider", "LocalEmbeddingProvider", "OpenAIEmbeddingProvider", "create_embedding_provider"]
