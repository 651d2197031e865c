"""In-process chunk store using brute-force cosine distance."""

import asyncio
import math
from datetime import UTC, datetime
from typing import List, Sequence

from .base import ChunkStore, NewChunk, ScoredChunk


class InMemoryChunkStore(ChunkStore):
    """Exact nearest-neighbor store kept in a Python list.

    Compares the query against every stored vector, so results are exact and the
    cost is O(n * d) per query. Suitable for tests and small local experiments;
    nothing survives the process.

    ``content_for`` and ``embedding_for`` read a stored row back by id. They are
    not part of the ``ChunkStore`` contract; callers use them to inspect what a
    write actually stored.
    """

    def __init__(self, dimension: int):
        super().__init__(dimension)
        self._rows: List[dict] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def add_many(self, chunks: Sequence[NewChunk]) -> List[int]:
        for chunk in chunks:
            self.validate_embedding(chunk.embedding)

        async with self._lock:
            ids = []
            now = datetime.now(UTC)
            for chunk in chunks:
                row_id = self._next_id
                self._next_id += 1
                self._rows.append(
                    {
                        "id": row_id,
                        "content": chunk.content,
                        "embedding": list(chunk.embedding),
                        "source": chunk.source,
                        "added_at": now,
                    }
                )
                ids.append(row_id)
            return ids

    async def search(self, query_embedding: Sequence[float], k: int) -> List[ScoredChunk]:
        self.validate_embedding(query_embedding)
        if not self._rows or k <= 0:
            return []

        scored = [
            ScoredChunk(
                id=row["id"],
                content=row["content"],
                source=row["source"],
                distance=cosine_distance(query_embedding, row["embedding"]),
            )
            for row in self._rows
        ]
        # Ties resolve to the earlier insert, matching a stable sort on id.
        scored.sort(key=lambda hit: (hit.distance, hit.id))
        return scored[:k]

    async def count(self) -> int:
        return len(self._rows)

    def embedding_for(self, chunk_id: int) -> List[float]:
        return self._row(chunk_id)["embedding"]

    def content_for(self, chunk_id: int) -> str:
        return self._row(chunk_id)["content"]

    def _row(self, chunk_id: int) -> dict:
        for row in self._rows:
            if row["id"] == chunk_id:
                return row
        raise KeyError(chunk_id)


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine distance in [0, 2]; a zero vector is treated as maximally distant."""
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 1.0
    return 1.0 - dot / (norm_a * norm_b)
