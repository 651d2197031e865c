"""Retrieval-augmented conversation over the knowledge base."""

from .prompts import SYSTEM_PROMPT
from .schemas import ChatMessage, ChatRequest
from .services import ChatService

__all__ = ["ChatMessage", "ChatRequest", "ChatService", "SYSTEM_PROMPT"]
