"""Document ingestion: chunking, batch embedding and storage."""

from .chunker import DocumentChunker
from .schemas import IngestionReport
from .services import IngestionError, IngestionService

__all__ = ["DocumentChunker", "IngestionError", "IngestionReport", "IngestionService"]
