"""Single-item embedding of user-submitted content."""

from .schemas import EmbedContentRequest, EmbedContentResponse, EmbedStatusResponse, ErrorResponse
from .services import ContentEmbeddingService, validate_embed_request

__all__ = [
    "ContentEmbeddingService",
    "EmbedContentRequest",
    "EmbedContentResponse",
    "EmbedStatusResponse",
    "ErrorResponse",
    "validate_embed_request",
]
