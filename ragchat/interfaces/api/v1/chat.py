"""Streaming chat endpoint."""

import json
from typing import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ....modules.chat import ChatService
from ....modules.chat.schemas import ChatRequest
from ....modules.embedding.schemas import ErrorResponse
from ..dependencies import get_chat_service

router = APIRouter(prefix="/chat", tags=["Chat"])

NDJSON_MEDIA_TYPE = "application/x-ndjson"


async def _encode_events(events: AsyncIterator[dict]) -> AsyncIterator[str]:
    async for event in events:
        yield json.dumps(event, ensure_ascii=False) + "\n"


@router.post(
    "",
    summary="Chat with the Support Assistant",
    description="""Answer the latest user message, consulting the knowledge base as needed.

    The response is newline-delimited JSON, one event per line:

    - `tool_call` / `tool_result`: knowledge-base lookups made by the assistant
    - `token`: a piece of the answer text
    - `error`: the turn failed; the stream ends after it
    - `done`: the turn finished
    """,
    response_class=StreamingResponse,
    responses={
        200: {"content": {NDJSON_MEDIA_TYPE: {}}, "description": "Stream of chat events"},
        400: {"model": ErrorResponse, "description": "Malformed conversation"},
    },
)
async def chat(chat_request: ChatRequest, service: ChatService = Depends(get_chat_service)) -> StreamingResponse:
    return StreamingResponse(_encode_events(service.stream(chat_request.messages)), media_type=NDJSON_MEDIA_TYPE)
