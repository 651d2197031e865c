"""Schemas for similarity search results."""

from typing import List

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Free-text query against the knowledge base."""

    query: str = Field(min_length=1, description="The search query to find relevant information")


class SearchResultItem(BaseModel):
    """One retrieved chunk as handed to the conversation model."""

    content: str
    source: str
    rank: int = Field(ge=1, description="1-based position, 1 is the closest match")


class ScoredSearchResultItem(SearchResultItem):
    """A retrieved chunk with its cosine similarity, for tuning and debugging."""

    score: float = Field(description="Cosine similarity, 1 - cosine distance")


class SearchResponse(BaseModel):
    """Result payload of the vector search tool."""

    results: List[SearchResultItem]
