"""Embedding provider backed by the OpenAI embeddings endpoint."""

from typing import Any, Dict, List, Sequence

from openai import AsyncOpenAI

from ...modules.common.exceptions import EmbeddingProviderError
from ..llm.client import translate_provider_errors
from ..logging import get_logger
from .base import EmbeddingProvider

logger = get_logger(__name__)

# Older models (text-embedding-ada-002) reject the dimensions parameter.
DIMENSIONS_MODEL_PREFIX = "text-embedding-3-"


def supports_dimensions(model_name: str) -> bool:
    return model_name.startswith(DIMENSIONS_MODEL_PREFIX)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embeds text with an OpenAI embedding model (``text-embedding-3-small`` by default).

    A batch of inputs costs one HTTP round trip. The response items carry their
    input index, and are re-sorted on it before being returned.
    """

    def __init__(self, client: AsyncOpenAI, model_name: str = "text-embedding-3-small", dimension: int = 1536):
        super().__init__(dimension)
        self.client = client
        self.model_name = model_name

    async def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        request: Dict[str, Any] = {"model": self.model_name, "input": list(texts)}
        if supports_dimensions(self.model_name):
            request["dimensions"] = self.dimension

        async with translate_provider_errors():
            response = await self.client.embeddings.create(**request)

        items = sorted(response.data, key=lambda item: item.index)
        if len(items) != len(texts):
            raise EmbeddingProviderError(f"Expected {len(texts)} embeddings from {self.model_name}, got {len(items)}")

        embeddings = [list(item.embedding) for item in items]
        self._check_dimensions(embeddings)

        usage = getattr(response, "usage", None)
        logger.debug(
            f"Generated {len(embeddings)} embeddings ({self.model_name}, {self.dimension}d)",
            extra={"total_tokens": getattr(usage, "total_tokens", None)},
        )
        return embeddings

    async def close(self) -> None:
        await self.client.close()
