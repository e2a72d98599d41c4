"""Application context: process-wide I/O handles.

在 main.py 中创建一次并挂到 ``app.state.context``，所有依赖通过 request 获取，
不使用模块级全局单例。
"""

from dataclasses import dataclass, field

from celery import Celery
from sqlalchemy.ext.asyncio import AsyncEngine

from src.core.domain.events import EventBus
from src.core.infrastructure.celery.app import celery_app
from src.core.infrastructure.database.session import create_engine
from src.core.infrastructure.redis.client import RedisClient


@dataclass
class AppContext:
    """Store pool, cache connection and task queue, created once per process."""

    engine: AsyncEngine
    redis: RedisClient
    celery: Celery
    event_bus: EventBus = field(default_factory=EventBus)

    async def close(self) -> None:
        await self.redis.close()
        await self.engine.dispose()


def create_app_context() -> AppContext:
    """Build the context; connections are opened lazily on first use."""
    return AppContext(
        engine=create_engine(),
        redis=RedisClient(),
        celery=celery_app,
    )
