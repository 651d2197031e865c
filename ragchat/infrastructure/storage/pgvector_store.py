"""PostgreSQL chunk store backed by the pgvector extension."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Sequence

from sqlalchemy import insert, select
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...modules.chunk.crud import chunk_crud
from ...modules.chunk.models import Chunk
from ...modules.common.exceptions import SchemaMissingError, StorageError, StorageUnavailableError
from ..logging import get_logger
from .base import ChunkStore, NewChunk, ScoredChunk

logger = get_logger(__name__)

UNDEFINED_TABLE = "42P01"


def _sqlstate(error: DBAPIError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


@asynccontextmanager
async def translate_storage_errors() -> AsyncIterator[None]:
    """Convert driver and SQLAlchemy failures into storage domain errors."""
    try:
        yield
    except ProgrammingError as e:
        if _sqlstate(e) == UNDEFINED_TABLE:
            raise SchemaMissingError(
                "Database table not found. Please run the database schema setup (ragchat-setup-db)."
            ) from e
        raise StorageError(f"Database query failed: {e.orig}") from e
    except (OperationalError, InterfaceError) as e:
        raise StorageUnavailableError("Database connection failed. Please ensure the database is running.") from e
    except (OSError, asyncio.TimeoutError) as e:
        raise StorageUnavailableError("Database connection failed. Please ensure the database is running.") from e
    except DBAPIError as e:
        raise StorageError(f"Database rejected the statement: {e.orig}") from e


class PgVectorChunkStore(ChunkStore):
    """Chunk store on a ``content_chunks`` table with an HNSW cosine index.

    Each ``add_many`` call runs in its own transaction, so a failure in one batch
    leaves previously committed batches in place. Search ordering uses the
    ``<=>`` cosine distance operator, which the HNSW index serves approximately.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], dimension: int):
        super().__init__(dimension)
        self.session_factory = session_factory

    async def add_many(self, chunks: Sequence[NewChunk]) -> List[int]:
        if not chunks:
            return []

        for chunk in chunks:
            self.validate_embedding(chunk.embedding)

        rows = [{"content": chunk.content, "embedding": chunk.embedding, "source": chunk.source} for chunk in chunks]
        # sort_by_parameter_order keeps RETURNING rows aligned with the input list.
        stmt = insert(Chunk).returning(Chunk.id, sort_by_parameter_order=True)

        async with translate_storage_errors():
            async with self.session_factory() as db:
                result = await db.execute(stmt, rows)
                ids = list(result.scalars().all())
                await db.commit()

        logger.debug(f"Inserted {len(ids)} chunks", extra={"first_id": ids[0], "last_id": ids[-1]})
        return ids

    async def search(self, query_embedding: Sequence[float], k: int) -> List[ScoredChunk]:
        self.validate_embedding(query_embedding)
        if k <= 0:
            return []

        distance = Chunk.embedding.cosine_distance(list(query_embedding))
        stmt = select(Chunk.id, Chunk.content, Chunk.source, distance.label("distance")).order_by(distance).limit(k)

        async with translate_storage_errors():
            async with self.session_factory() as db:
                result = await db.execute(stmt)
                rows = result.all()

        return [
            ScoredChunk(id=row.id, content=row.content, source=row.source, distance=float(row.distance)) for row in rows
        ]

    async def count(self) -> int:
        async with translate_storage_errors():
            async with self.session_factory() as db:
                return await chunk_crud.count(db=db)
