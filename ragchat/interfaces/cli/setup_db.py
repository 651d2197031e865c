"""Create the pgvector extension, the chunk table and its HNSW index."""

import asyncio
import sys
from typing import Optional, Sequence

from ...infrastructure.database.session import create_tables, engine
from ...infrastructure.logging import get_logger
from ...infrastructure.storage.pgvector_store import translate_storage_errors
from ...modules.chunk.models import Chunk
from ...modules.common.exceptions import DomainError

logger = get_logger(__name__)


async def setup_database() -> None:
    try:
        async with translate_storage_errors():
            await create_tables()
    finally:
        await engine.dispose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Create database tables."""
    logger.info("Creating database tables...")

    try:
        asyncio.run(setup_database())
    except DomainError as e:
        logger.error(f"Error creating database tables: [{e.code}] {e.message}")
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    print(f"✅ Table {Chunk.__tablename__} and its vector index are ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
