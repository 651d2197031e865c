"""Single-item embedding: validate, embed and store one piece of content."""

from typing import Any, Dict, List

from pydantic import ValidationError

from ...infrastructure.embedding.base import EmbeddingProvider
from ...infrastructure.logging import get_logger
from ...infrastructure.storage.base import ChunkStore, NewChunk
from ..common.constants import MAX_CONTENT_LENGTH, MAX_SOURCE_LENGTH
from ..common.exceptions import InputValidationError
from ..common.result import Err, FieldError, Ok, Result
from .schemas import EmbedContentRequest, EmbedContentResponse, EmbedStatusResponse

logger = get_logger(__name__)

FIELD_MESSAGES: Dict[tuple, str] = {
    ("content", "string_too_short"): "Content cannot be empty",
    ("content", "string_too_long"): f"Content too long (max {MAX_CONTENT_LENGTH:,} characters)",
    ("source", "string_too_short"): "Source cannot be empty",
    ("source", "string_too_long"): f"Source too long (max {MAX_SOURCE_LENGTH} characters)",
}


def _field_errors(error: ValidationError) -> List[FieldError]:
    errors = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        message = FIELD_MESSAGES.get((field, item["type"]), item["msg"])
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_embed_request(payload: Any) -> Result[EmbedContentRequest]:
    """Validate a raw request body, collecting every field problem at once."""
    if not isinstance(payload, dict):
        return Err([FieldError(field="body", message="Request body must be a JSON object")])
    try:
        return Ok(EmbedContentRequest.model_validate(payload))
    except ValidationError as e:
        return Err(_field_errors(e))


class ContentEmbeddingService:
    """Adds user-submitted content to the knowledge base one item at a time.

    The stored chunk is searchable as soon as the insert commits; no reindex or
    flush step is involved.
    """

    def __init__(self, store: ChunkStore, embedding_provider: EmbeddingProvider):
        self.store = store
        self.embedding_provider = embedding_provider

    async def add_content(self, payload: Any) -> EmbedContentResponse:
        """Validate and store one item.

        Raises:
            InputValidationError: With one ``FieldError`` per invalid field.
        """
        validation = validate_embed_request(payload)
        if isinstance(validation, Err):
            raise InputValidationError(validation.errors)

        request = validation.value
        logger.info(f"Embedding content: {request.content[:100]}...", extra={"source": request.source})

        embedding = await self.embedding_provider.embed_text(request.content)
        chunk_id = await self.store.add(NewChunk(content=request.content, embedding=embedding, source=request.source))

        logger.info(f"Successfully inserted with ID: {chunk_id}")
        return EmbedContentResponse(id=chunk_id)

    async def status(self) -> EmbedStatusResponse:
        return EmbedStatusResponse(totalEmbeddings=await self.store.count())
