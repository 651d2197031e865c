"""Batch ingestion: document file to embedded chunks in the vector store."""

import asyncio
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ...infrastructure.embedding.base import EmbeddingProvider
from ...infrastructure.logging import get_logger
from ...infrastructure.storage.base import ChunkStore, NewChunk
from ..common.exceptions import DomainError, EmbeddingProviderError
from .chunker import DocumentChunker
from .schemas import IngestionReport

logger = get_logger(__name__)


class IngestionError(Exception):
    """Raised when an ingestion run aborts; carries the partial report."""

    def __init__(self, message: str, report: IngestionReport):
        super().__init__(message)
        self.report = report


def batched(items: Sequence[str], batch_size: int) -> List[Sequence[str]]:
    """Split ``items`` into consecutive slices of at most ``batch_size``."""
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    return [items[i : i + batch_size] for i in range(0, len(items), batch_size)]


class IngestionService:
    """Chunks a document, embeds it batch by batch and stores the results.

    Batches are processed strictly in document order. Within a batch, the
    provider's vectors are paired with chunk texts by position. Each batch is
    committed on its own, so when a later batch fails the earlier ones stay
    stored and the run is partial; nothing is rolled back or retried.
    """

    def __init__(
        self,
        store: ChunkStore,
        embedding_provider: EmbeddingProvider,
        chunker: Optional[DocumentChunker] = None,
        batch_size: int = 50,
        batch_pause_seconds: float = 0.0,
        on_progress: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.embedding_provider = embedding_provider
        self.chunker = chunker or DocumentChunker()
        self.batch_size = batch_size
        self.batch_pause_seconds = batch_pause_seconds
        self.on_progress = on_progress

    def _progress(self, message: str) -> None:
        logger.info(message)
        if self.on_progress is not None:
            self.on_progress(message)

    async def ingest(self, document_path: str | Path) -> IngestionReport:
        """Ingest one UTF-8 text file, labelling every chunk with its file name.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            IngestionError: If embedding or storing a batch fails.
        """
        path = Path(document_path)
        raw = path.read_text(encoding="utf-8")
        self._progress(f"Loaded {len(raw)} characters from {path}")

        return await self.ingest_text(raw, source=path.name)

    async def ingest_text(self, text: str, source: str) -> IngestionReport:
        """Chunk, embed and store ``text`` under the given source label."""
        chunks = self.chunker.split(text)
        batches = batched(chunks, self.batch_size)
        report = IngestionReport(source=source, total_chunks=len(chunks), total_batches=len(batches))

        self._progress(f"Created {len(chunks)} chunks in {len(batches)} batches of up to {self.batch_size}")

        for number, batch in enumerate(batches, start=1):
            self._progress(f"Processing batch {number}/{len(batches)} ({len(batch)} chunks)")
            try:
                ids = await self.ingest_batch(batch, source)
            except DomainError as e:
                logger.error(f"Batch {number}/{len(batches)} failed: [{e.code}] {e.message}")
                raise IngestionError(
                    f"Ingestion aborted at batch {number}/{len(batches)}: {e.message}", report
                ) from e

            report.stored_ids.extend(ids)
            report.completed_batches = number
            self._progress(f"Batch {number} stored ({report.stored_chunks}/{report.total_chunks} chunks)")

            if self.batch_pause_seconds and number < len(batches):
                await asyncio.sleep(self.batch_pause_seconds)

        self._progress(f"Ingestion complete: {report.stored_chunks} chunks stored from {source}")
        return report

    async def ingest_batch(self, batch: Sequence[str], source: str) -> List[int]:
        """Embed one batch in a single provider call and store it positionally."""
        embeddings = await self.embedding_provider.embed_texts(batch)
        if len(embeddings) != len(batch):
            raise EmbeddingProviderError(f"Provider returned {len(embeddings)} embeddings for {len(batch)} chunks")

        new_chunks = [
            NewChunk(content=content, embedding=embedding, source=source)
            for content, embedding in zip(batch, embeddings)
        ]
        return await self.store.add_many(new_chunks)
