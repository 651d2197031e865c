"""SQLAlchemy models for chunk entities."""

from typing import List

from pgvector.sqlalchemy import Vector
from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.config.settings import settings
from ...infrastructure.database.models import AddedAtMixin
from ...infrastructure.database.session import Base


class Chunk(Base, AddedAtMixin):
    """A stored unit of retrievable text with its embedding and provenance label.

    Rows are append-only: the embedding is computed once at creation and the row is
    never updated or deleted. The vector column dimension is fixed system-wide by
    ``EMBEDDING_DIMENSION`` and must match the embedding model used at query time.

    The HNSW index orders by cosine distance, so ``ORDER BY embedding <=> :query``
    is answered approximately in sublinear time and accepts incremental inserts
    without a rebuild.
    """

    __tablename__ = "content_chunks"
    __table_args__ = (
        Index(
            "ix_content_chunks_embedding_hnsw",
            "embedding",
            postgresql_using="hnsw",
            postgresql_with={"m": settings.HNSW_M, "ef_construction": settings.HNSW_EF_CONSTRUCTION},
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True, init=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[List[float]] = mapped_column(Vector(settings.EMBEDDING_DIMENSION), nullable=False)
    source: Mapped[str] = mapped_column(String(255), nullable=False)
