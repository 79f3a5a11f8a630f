"""
Async engine, session factory and schema bootstrap.

The schema is created on first use with metadata.create_all; there is no
migration history. Calling ensure_schema() repeatedly is safe.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from eventdesk.core.config import get_settings
from eventdesk.core.logging import get_logger
from eventdesk.db.base import Base

logger = get_logger(__name__)
settings = get_settings()


def build_engine(url: str | None = None, **kwargs) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    url = url or settings.DATABASE_URL
    options = {"echo": settings.DB_ECHO}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
    options.update(kwargs)
    return create_async_engine(url, **options)


engine = build_engine()
SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def ensure_schema(bind: AsyncEngine | None = None) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    # Register models on Base.metadata before create_all
    import eventdesk.models  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("schema_ready", tables=sorted(Base.metadata.tables))


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    Services commit their own writes; anything left open is rolled back.
    """
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    await engine.dispose()
