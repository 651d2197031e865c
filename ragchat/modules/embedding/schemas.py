"""Schemas for the single-item embed endpoint."""

from typing import List

from pydantic import BaseModel, Field

from ..common.constants import MAX_CONTENT_LENGTH, MAX_SOURCE_LENGTH


class EmbedContentRequest(BaseModel):
    """Content submitted for immediate embedding and storage."""

    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH, description="Text content to embed")
    source: str = Field(min_length=1, max_length=MAX_SOURCE_LENGTH, description="Provenance label for the content")


class EmbedContentResponse(BaseModel):
    success: bool = True
    id: int
    message: str = "Content embedded successfully"


class EmbedStatusResponse(BaseModel):
    """Readiness probe with the number of stored chunks."""

    message: str = "Embed API is ready"
    totalEmbeddings: int = Field(ge=0)


class FieldErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Structured error body returned by every failing request."""

    error: str
    code: str
    details: List[FieldErrorDetail] = Field(default_factory=list)
