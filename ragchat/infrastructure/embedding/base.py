"""Interface shared by all embedding providers."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ...modules.common.exceptions import DimensionMismatchError


class EmbeddingProvider(ABC):
    """Turns text into fixed-length vectors.

    ``embed_texts`` must return one vector per input in input order; callers zip
    the result back to their inputs by position. Queries and stored chunks must be
    embedded by the same provider and model, since vectors from different models
    are not comparable.
    """

    model_name: str

    def __init__(self, dimension: int):
        self.dimension = dimension

    @property
    def embedding_dimension(self) -> int:
        return self.dimension

    async def embed_text(self, text: str) -> List[float]:
        """Embed a single string."""
        embeddings = await self.embed_texts([text])
        return embeddings[0]

    @abstractmethod
    async def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed many strings in one call, preserving order."""

    async def close(self) -> None:
        """Release resources held by the provider."""

    def _check_dimensions(self, embeddings: Sequence[Sequence[float]]) -> None:
        for embedding in embeddings:
            if len(embedding) != self.dimension:
                raise DimensionMismatchError(expected=self.dimension, actual=len(embedding))
