"""Integration tests for PgVectorChunkStore against a real pgvector database."""

import pytest
from sqlalchemy import text

from ragchat.infrastructure.storage import NewChunk
from ragchat.modules.common.exceptions import DimensionMismatchError, SchemaMissingError

from tests.fakes import TEST_DIMENSION, deterministic_embedding


def new_chunk(content: str, source: str = "data.txt") -> NewChunk:
    return NewChunk(content=content, embedding=deterministic_embedding(content), source=source)


class TestPgVectorChunkStore:
    @pytest.mark.asyncio
    async def test_empty_table(self, pg_store):
        assert await pg_store.count() == 0
        assert await pg_store.search(deterministic_embedding("anything"), k=5) == []

    @pytest.mark.asyncio
    async def test_add_many_returns_ids_aligned_with_input(self, pg_store, test_db_engine):
        contents = [f"Support answer number {i}" for i in range(10)]

        ids = await pg_store.add_many([new_chunk(c) for c in contents])

        assert len(ids) == len(contents)
        assert ids == sorted(ids)
        async with test_db_engine.connect() as conn:
            rows = (await conn.execute(text("SELECT id, content, added_at FROM content_chunks"))).all()
        stored = {row.id: row.content for row in rows}
        assert [stored[i] for i in ids] == contents
        assert all(row.added_at is not None for row in rows)

    @pytest.mark.asyncio
    async def test_round_trip_ranks_identical_content_first(self, pg_store):
        contents = [
            "To update your billing information, open Settings and choose Billing.",
            "Passwords can be reset from the login page.",
            "Our support team is available on weekdays.",
        ]
        await pg_store.add_many([new_chunk(c, source="faq.txt") for c in contents])

        hits = await pg_store.search(deterministic_embedding(contents[1]), k=5)

        assert hits[0].content == contents[1]
        assert hits[0].source == "faq.txt"
        assert hits[0].score == pytest.approx(1.0, abs=1e-5)
        assert [hit.distance for hit in hits] == sorted(hit.distance for hit in hits)

    @pytest.mark.asyncio
    async def test_single_add_is_immediately_searchable_and_counted(self, pg_store):
        before = await pg_store.count()

        chunk_id = await pg_store.add(new_chunk("Refunds take five business days."))

        assert await pg_store.count() == before + 1
        hits = await pg_store.search(deterministic_embedding("Refunds take five business days."), k=1)
        assert hits[0].id == chunk_id

    @pytest.mark.asyncio
    async def test_wrong_dimension_is_rejected_before_insert(self, pg_store):
        bad = NewChunk(content="bad", embedding=[0.1] * (TEST_DIMENSION - 1), source="x")

        with pytest.raises(DimensionMismatchError):
            await pg_store.add(bad)

        assert await pg_store.count() == 0

    @pytest.mark.asyncio
    async def test_missing_table_is_reported_as_schema_error(self, pg_store, test_db_engine):
        async with test_db_engine.begin() as conn:
            await conn.execute(text("DROP TABLE content_chunks"))

        with pytest.raises(SchemaMissingError) as exc_info:
            await pg_store.count()

        assert "schema setup" in exc_info.value.message
