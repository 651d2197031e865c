"""Semantic search over stored chunks and its tool descriptor."""

from .schemas import ScoredSearchResultItem, SearchRequest, SearchResponse, SearchResultItem
from .services import RetrievalService
from .tool import VECTOR_SEARCH_TOOL_NAME, ToolDescriptor, build_vector_search_tool

__all__ = [
    "RetrievalService",
    "ScoredSearchResultItem",
    "SearchRequest",
    "SearchResponse",
    "SearchResultItem",
    "ToolDescriptor",
    "VECTOR_SEARCH_TOOL_NAME",
    "build_vector_search_tool",
]
