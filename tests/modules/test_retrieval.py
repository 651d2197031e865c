"""Tests for RetrievalService and the vector search tool."""

import pytest

from ragchat.infrastructure.storage import NewChunk
from ragchat.modules.common.exceptions import InputValidationError
from ragchat.modules.retrieval import RetrievalService, build_vector_search_tool
from tests.fakes import deterministic_embedding

KNOWLEDGE_BASE = [
    ("To change your billing information, go to Settings > Billing.", "billing.txt"),
    ("Reset your password from the login page.", "account.txt"),
    ("Orders ship within two business days.", "shipping.txt"),
    ("Refunds are processed in five business days.", "billing.txt"),
    ("Support is available Monday through Friday.", "support.txt"),
    ("You can export invoices as PDF.", "billing.txt"),
    ("Two-factor authentication is optional.", "account.txt"),
]


@pytest.fixture
async def seeded_store(memory_store):
    await memory_store.add_many(
        [NewChunk(content=c, embedding=deterministic_embedding(c), source=s) for c, s in KNOWLEDGE_BASE]
    )
    return memory_store


class TestRetrievalService:
    @pytest.mark.asyncio
    async def test_stored_content_is_the_top_result_for_itself(self, seeded_store, fake_provider):
        service = RetrievalService(seeded_store, fake_provider, top_k=5)

        for content, source in KNOWLEDGE_BASE:
            response = await service.search(content)
            assert response.results[0].content == content
            assert response.results[0].source == source
            assert response.results[0].rank == 1

    @pytest.mark.asyncio
    async def test_returns_at_most_top_k_with_sequential_ranks(self, seeded_store, fake_provider):
        service = RetrievalService(seeded_store, fake_provider, top_k=5)

        response = await service.search("How can I change my billing information?")

        assert len(response.results) == 5
        assert [item.rank for item in response.results] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_scores_do_not_increase_with_rank(self, seeded_store, fake_provider):
        service = RetrievalService(seeded_store, fake_provider, top_k=7)

        scored = await service.search_scored("shipping times")

        scores = [item.score for item in scored]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_results(self, memory_store, fake_provider):
        service = RetrievalService(memory_store, fake_provider)

        response = await service.search("anything")

        assert response.results == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    async def test_blank_query_is_rejected_without_embedding(self, memory_store, fake_provider, query):
        service = RetrievalService(memory_store, fake_provider)

        with pytest.raises(InputValidationError) as exc_info:
            await service.search(query)

        assert exc_info.value.details[0].field == "query"
        assert fake_provider.calls == []


class TestVectorSearchTool:
    def test_descriptor_in_openai_format(self, memory_store, fake_provider):
        tool = build_vector_search_tool(RetrievalService(memory_store, fake_provider))

        rendered = tool.to_openai_tool()

        assert rendered["type"] == "function"
        assert rendered["function"]["name"] == "vectorSearch"
        assert rendered["function"]["description"] == "Search for relevant information in the knowledge base"
        assert rendered["function"]["parameters"]["required"] == ["query"]
        assert rendered["function"]["parameters"]["properties"]["query"]["type"] == "string"

    @pytest.mark.asyncio
    async def test_invoke_returns_ranked_results(self, seeded_store, fake_provider):
        tool = build_vector_search_tool(RetrievalService(seeded_store, fake_provider))

        result = await tool.invoke({"query": KNOWLEDGE_BASE[2][0]})

        assert result["results"][0] == {"content": KNOWLEDGE_BASE[2][0], "source": "shipping.txt", "rank": 1}
        assert len(result["results"]) == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, {"query": 42}, {"query": " "}])
    async def test_invalid_arguments_raise_validation_error(self, memory_store, fake_provider, arguments):
        tool = build_vector_search_tool(RetrievalService(memory_store, fake_provider))

        with pytest.raises(InputValidationError):
            await tool.invoke(arguments)
