from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_size=settings.POSTGRES_POOL_SIZE,
    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
    pool_pre_ping=True,
    connect_args={"command_timeout": settings.POSTGRES_COMMAND_TIMEOUT},
)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Base class for all database models.

    Combines SQLAlchemy's DeclarativeBase with MappedAsDataclass, so models get a
    generated ``__init__`` that only accepts the columns not marked ``init=False``.

    Example:
        ```python
        chunk = Chunk(content="Refunds take 5 days.", embedding=vector, source="faq.txt")
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a pooled session and close it when the caller is done.

    Usable as a FastAPI dependency via ``Depends(async_session)``.
    """
    async with local_session() as db:
        yield db


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Enable pgvector and create every table and index that does not exist yet.

    Idempotent: existing tables and indexes are left unchanged. The extension must
    exist before ``metadata.create_all`` because the chunk table declares a
    ``vector`` column.
    """
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
