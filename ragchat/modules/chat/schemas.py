"""Schemas for the chat endpoint."""

from typing import List, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Prior conversation, oldest message first; the last one is usually the user's question."""

    messages: List[ChatMessage] = Field(min_length=1)
