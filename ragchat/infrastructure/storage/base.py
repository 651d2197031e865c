"""Abstract base class for chunk stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from ...modules.common.exceptions import DimensionMismatchError


@dataclass(frozen=True)
class NewChunk:
    """A chunk ready to be persisted: text, its vector and a provenance label."""

    content: str
    embedding: List[float]
    source: str


@dataclass(frozen=True)
class ScoredChunk:
    """A stored chunk returned by a similarity search.

    ``distance`` is the cosine distance to the query (0 for identical direction),
    ``score`` is ``1 - distance``.
    """

    id: int
    content: str
    source: str
    distance: float

    @property
    def score(self) -> float:
        return 1.0 - self.distance


class ChunkStore(ABC):
    """Append-only store of embedded chunks with nearest-neighbor search.

    Implementations differ in how the search is executed (exact brute force,
    approximate HNSW) but share the same contract: inserts are immediately
    searchable, ids are returned in input order, and an empty store returns no
    results instead of failing.
    """

    def __init__(self, dimension: int):
        self.dimension = dimension

    def validate_embedding(self, embedding: Sequence[float]) -> None:
        """Reject vectors whose length differs from the configured dimension."""
        if len(embedding) != self.dimension:
            raise DimensionMismatchError(expected=self.dimension, actual=len(embedding))

    async def add(self, chunk: NewChunk) -> int:
        """Persist one chunk and return its id."""
        ids = await self.add_many([chunk])
        return ids[0]

    @abstractmethod
    async def add_many(self, chunks: Sequence[NewChunk]) -> List[int]:
        """Persist chunks atomically as one batch.

        Returns:
            The new ids, position-aligned with ``chunks``.
        """

    @abstractmethod
    async def search(self, query_embedding: Sequence[float], k: int) -> List[ScoredChunk]:
        """Return up to ``k`` chunks in ascending cosine distance to the query."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored chunks."""

    async def close(self) -> None:
        """Release resources held by the store."""
