"""Single-item embedding endpoint."""

import json

from fastapi import APIRouter, Depends, Request

from ....modules.common.exceptions import InputValidationError
from ....modules.common.result import FieldError
from ....modules.embedding import ContentEmbeddingService
from ....modules.embedding.schemas import EmbedContentRequest, EmbedContentResponse, EmbedStatusResponse, ErrorResponse
from ..dependencies import get_content_embedding_service

router = APIRouter(prefix="/embed", tags=["Embed"])


@router.post(
    "",
    summary="Embed and Store Content",
    description="""Embed one piece of content and add it to the knowledge base.

    Both fields are validated together and every problem is reported:

    - `content`: 1 to 10,000 characters
    - `source`: 1 to 255 characters

    The stored chunk is searchable as soon as this call returns.
    """,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": EmbedContentRequest.model_json_schema()}},
            "required": True,
        }
    },
    responses={
        200: {"description": "Content embedded and stored"},
        400: {"model": ErrorResponse, "description": "Invalid input, with field-level details"},
        401: {"model": ErrorResponse, "description": "Invalid provider credentials"},
        429: {"model": ErrorResponse, "description": "Provider quota exceeded"},
        500: {"model": ErrorResponse, "description": "Database or configuration error"},
    },
)
async def embed_content(
    request: Request, service: ContentEmbeddingService = Depends(get_content_embedding_service)
) -> EmbedContentResponse:
    """Validate, embed and store one item."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InputValidationError([FieldError(field="body", message="Request body must be valid JSON")])
    return await service.add_content(payload)


@router.get(
    "",
    summary="Embed API Status",
    description="Readiness probe that also reports how many chunks are stored.",
    responses={
        200: {"description": "Service is ready"},
        500: {"model": ErrorResponse, "description": "Database error"},
    },
)
async def embed_status(
    service: ContentEmbeddingService = Depends(get_content_embedding_service),
) -> EmbedStatusResponse:
    return await service.status()
