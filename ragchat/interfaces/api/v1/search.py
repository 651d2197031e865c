"""Direct access to the knowledge-base search the chat model uses."""

from fastapi import APIRouter, Depends

from ....modules.embedding.schemas import ErrorResponse
from ....modules.retrieval import RetrievalService
from ....modules.retrieval.schemas import SearchRequest, SearchResponse
from ..dependencies import get_retrieval_service

router = APIRouter(prefix="/search", tags=["Search"])


@router.post(
    "",
    summary="Search the Knowledge Base",
    description="Embed the query and return the closest stored chunks, ranked from 1.",
    responses={
        200: {"description": "Ranked results; empty when nothing is stored"},
        400: {"model": ErrorResponse, "description": "Empty query"},
    },
)
async def search(
    search_request: SearchRequest, service: RetrievalService = Depends(get_retrieval_service)
) -> SearchResponse:
    return await service.search(search_request.query)
