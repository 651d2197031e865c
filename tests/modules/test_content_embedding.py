"""Tests for single-item validation and ContentEmbeddingService."""

import pytest

from ragchat.modules.common.exceptions import InputValidationError, ProviderQuotaError
from ragchat.modules.common.result import Err, Ok
from ragchat.modules.embedding import ContentEmbeddingService, validate_embed_request
from tests.fakes import FakeEmbeddingProvider, deterministic_embedding


def messages(result: Err) -> dict:
    return {error.field: error.message for error in result.errors}


class TestValidateEmbedRequest:
    def test_valid_payload(self):
        result = validate_embed_request({"content": "Hello", "source": "manual"})

        assert isinstance(result, Ok)
        assert result.value.content == "Hello"
        assert result.value.source == "manual"

    def test_content_length_boundary(self):
        assert isinstance(validate_embed_request({"content": "x" * 10_000, "source": "s"}), Ok)

        result = validate_embed_request({"content": "x" * 10_001, "source": "s"})
        assert isinstance(result, Err)
        assert messages(result) == {"content": "Content too long (max 10,000 characters)"}

    def test_source_length_boundary(self):
        assert isinstance(validate_embed_request({"content": "c", "source": "s" * 255}), Ok)

        result = validate_embed_request({"content": "c", "source": "s" * 256})
        assert messages(result) == {"source": "Source too long (max 255 characters)"}

    def test_empty_fields(self):
        result = validate_embed_request({"content": "", "source": ""})

        assert messages(result) == {"content": "Content cannot be empty", "source": "Source cannot be empty"}

    def test_all_problems_are_reported_together(self):
        result = validate_embed_request({"content": "x" * 10_001, "source": ""})

        assert isinstance(result, Err)
        assert len(result.errors) == 2

    def test_missing_and_mistyped_fields(self):
        result = validate_embed_request({"content": 5})

        assert set(messages(result)) == {"content", "source"}

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_non_object_body(self, payload):
        result = validate_embed_request(payload)

        assert isinstance(result, Err)
        assert result.errors[0].field == "body"


class TestContentEmbeddingService:
    @pytest.mark.asyncio
    async def test_add_content_stores_and_increments_count(self, memory_store, fake_provider):
        service = ContentEmbeddingService(memory_store, fake_provider)
        before = (await service.status()).totalEmbeddings

        response = await service.add_content({"content": "New FAQ entry", "source": "admin"})

        assert response.success is True
        assert response.message == "Content embedded successfully"
        assert (await service.status()).totalEmbeddings == before + 1
        assert memory_store.content_for(response.id) == "New FAQ entry"

    @pytest.mark.asyncio
    async def test_added_content_is_immediately_the_top_match(self, memory_store, fake_provider):
        service = ContentEmbeddingService(memory_store, fake_provider)
        await service.add_content({"content": "Older entry", "source": "a"})

        response = await service.add_content({"content": "Newest entry", "source": "b"})

        hits = await memory_store.search(deterministic_embedding("Newest entry"), k=1)
        assert hits[0].id == response.id

    @pytest.mark.asyncio
    async def test_invalid_input_raises_without_side_effects(self, memory_store, fake_provider):
        service = ContentEmbeddingService(memory_store, fake_provider)

        with pytest.raises(InputValidationError) as exc_info:
            await service.add_content({"content": "", "source": "s" * 256})

        assert len(exc_info.value.details) == 2
        assert fake_provider.calls == []
        assert await memory_store.count() == 0

    @pytest.mark.asyncio
    async def test_provider_failure_stores_nothing(self, memory_store):
        service = ContentEmbeddingService(memory_store, FakeEmbeddingProvider(error=ProviderQuotaError("quota")))

        with pytest.raises(ProviderQuotaError):
            await service.add_content({"content": "Hello", "source": "manual"})

        assert await memory_store.count() == 0

    @pytest.mark.asyncio
    async def test_status_on_empty_store(self, memory_store, fake_provider):
        status = await ContentEmbeddingService(memory_store, fake_provider).status()

        assert status.message == "Embed API is ready"
        assert status.totalEmbeddings == 0
