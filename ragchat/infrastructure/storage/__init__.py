"""Vector stores for embedded chunks."""

from .base import ChunkStore, NewChunk, ScoredChunk
from .memory import InMemoryChunkStore
from .pgvector_store import PgVectorChunkStore

__all__ = ["ChunkStore", "InMemoryChunkStore", "NewChunk", "PgVectorChunkStore", "ScoredChunk"]
