"""Retrieval service: embed a query and return the nearest stored chunks."""

from typing import List

from ...infrastructure.embedding.base import EmbeddingProvider
from ...infrastructure.logging import get_logger
from ...infrastructure.storage.base import ChunkStore
from ..common.exceptions import InputValidationError
from ..common.result import FieldError
from .schemas import ScoredSearchResultItem, SearchResponse, SearchResultItem

logger = get_logger(__name__)

DEFAULT_TOP_K = 5


class RetrievalService:
    """Top-K semantic search over the chunk store.

    The query is embedded with the same provider used at ingestion time, and the
    store returns the nearest chunks by cosine distance, closest first. An empty
    store yields an empty result, not an error.
    """

    def __init__(self, store: ChunkStore, embedding_provider: EmbeddingProvider, top_k: int = DEFAULT_TOP_K):
        self.store = store
        self.embedding_provider = embedding_provider
        self.top_k = top_k

    async def search_scored(self, query: str) -> List[ScoredSearchResultItem]:
        """Return the top-K matches with similarity scores."""
        if not query or not query.strip():
            raise InputValidationError([FieldError(field="query", message="Query cannot be empty")])

        query_embedding = await self.embedding_provider.embed_text(query)
        hits = await self.store.search(query_embedding, self.top_k)

        logger.info(f"Search for {query[:80]!r} returned {len(hits)} chunks")

        return [
            ScoredSearchResultItem(content=hit.content, source=hit.source, rank=rank, score=hit.score)
            for rank, hit in enumerate(hits, start=1)
        ]

    async def search(self, query: str) -> SearchResponse:
        """Return the top-K matches as ``{results: [{content, source, rank}]}``."""
        scored = await self.search_scored(query)
        return SearchResponse(
            results=[SearchResultItem(content=item.content, source=item.source, rank=item.rank) for item in scored]
        )
