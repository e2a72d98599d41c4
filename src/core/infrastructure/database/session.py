"""Database session management."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from src.core.config import settings
from src.core.domain.events import EventBus
from src.core.infrastructure.database.event_aware_repository import (
    publish_committed_events,
)
from src.core.infrastructure.health import DatabaseHealthResult, HealthStatus


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the process-wide async engine (connection pool)."""
    return create_async_engine(
        url or settings.SQLALCHEMY_DATABASE_URI,
        echo=settings.ENVIRONMENT == "local",
        pool_pre_ping=True,
        pool_size=settings.POSTGRES_POOL_SIZE,
        max_overflow=settings.POSTGRES_MAX_OVERFLOW,
    )


@asynccontextmanager
async def transaction(
    engine: AsyncEngine, event_bus: EventBus
) -> AsyncIterator[AsyncSession]:
    """Open a session in one transaction; domain events go out after commit.

    事务回滚时丢弃已收集的事件，保证下游不会看到未落库的变更。
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        async with session.begin():
            yield session
        await publish_committed_events(session, event_bus)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session with automatic transaction management."""
    context = request.app.state.context
    async with transaction(context.engine, context.event_bus) as session:
        yield session


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database connection."""
    try:
        async with engine.begin() as conn:
            # 测试连接
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection established successfully")
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


async def check_db_health(engine: AsyncEngine) -> DatabaseHealthResult:
    """检查数据库健康状态（连接状态与版本信息）。"""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT version()"))
            version = result.scalar()
            return DatabaseHealthResult(
                status=HealthStatus.OK,
                connected=True,
                version=version.split(",")[0] if version else "unknown",
            )
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return DatabaseHealthResult(
            status=HealthStatus.ERROR,
            connected=False,
            error=str(e),
        )
