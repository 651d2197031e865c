"""API tests for search, chat and health endpoints."""

import json
from unittest.mock import AsyncMock

import pytest

from ragchat.infrastructure.storage import NewChunk
from tests.fakes import deterministic_embedding, stream_of, text_chunk, tool_call_chunk

FAQ = "To change your billing information, go to Settings > Billing."


@pytest.fixture
async def seeded(memory_store):
    await memory_store.add(NewChunk(FAQ, deterministic_embedding(FAQ), "faq.txt"))
    await memory_store.add(NewChunk("Orders ship in two days.", deterministic_embedding("Orders ship in two days."), "faq.txt"))
    return memory_store


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_search_returns_ranked_results(client, seeded):
    response = await client.post("/api/v1/search", json={"query": FAQ})

    assert response.status_code == 200
    results = response.json()["results"]
    assert results[0] == {"content": FAQ, "source": "faq.txt", "rank": 1}
    assert [item["rank"] for item in results] == [1, 2]


@pytest.mark.asyncio
async def test_search_on_empty_store(client):
    response = await client.post("/api/v1/search", json={"query": "anything"})

    assert response.status_code == 200
    assert response.json() == {"results": []}


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"query": ""}, {"query": "   "}, {}])
async def test_search_rejects_blank_query(client, payload):
    response = await client.post("/api/v1/search", json=payload)

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"
    assert response.json()["details"][0]["field"] == "query"


@pytest.mark.asyncio
async def test_chat_streams_ndjson_events(client, seeded, fake_openai_client):
    fake_openai_client.chat.completions.create = AsyncMock(
        side_effect=[
            stream_of([tool_call_chunk(0, call_id="call_1", name="vectorSearch", arguments='{"query": "billing"}')]),
            stream_of([text_chunk("Open Settings"), text_chunk(" > Billing.")]),
        ]
    )

    response = await client.post(
        "/api/v1/chat",
        json={"messages": [{"role": "user", "content": "How can I change my billing information?"}]},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/x-ndjson")
    events = [json.loads(line) for line in response.text.splitlines() if line]
    assert [event["type"] for event in events] == ["tool_call", "tool_result", "token", "token", "done"]
    assert "".join(event["text"] for event in events if event["type"] == "token") == "Open Settings > Billing."


@pytest.mark.asyncio
async def test_chat_requires_messages(client):
    response = await client.post("/api/v1/chat", json={"messages": []})

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_chat_rejects_unknown_role(client):
    response = await client.post("/api/v1/chat", json={"messages": [{"role": "system", "content": "x"}]})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"].startswith("messages")


@pytest.mark.asyncio
async def test_embedded_content_is_searchable_immediately(client):
    await client.post("/api/v1/embed", json={"content": "Older answer.", "source": "a"})
    await client.post("/api/v1/embed", json={"content": "Gift cards never expire.", "source": "admin"})

    response = await client.post("/api/v1/search", json={"query": "Gift cards never expire."})

    assert response.json()["results"][0] == {"content": "Gift cards never expire.", "source": "admin", "rank": 1}
    assert (await client.get("/api/v1/embed")).json()["totalEmbeddings"] == 2
