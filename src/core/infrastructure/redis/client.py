"""Redis 客户端封装。

提供统一的 Redis 访问接口，支持：
- 连接池管理
- 健康检查
- token 注册表所需的常用操作
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import TYPE_CHECKING

import redis.asyncio as aioredis
from fastapi import Request
from loguru import logger

if TYPE_CHECKING:
    from redis.asyncio import Redis

from src.core.config import settings
from src.core.infrastructure.health import HealthStatus, RedisHealthResult


class RedisUnavailableError(RuntimeError):
    """Redis 不可用（连接失败/超时等）。"""


class RedisClient:
    """Redis 客户端封装类。"""

    def __init__(self, url: str | None = None):
        """初始化 Redis 客户端。

        Args:
            url: Redis 连接 URL，默认使用配置中的 REDIS_URL
        """
        self._url = url or settings.REDIS_URL
        self._client: Redis | None = None

    @property
    def client(self) -> Redis:
        """获取 Redis 客户端实例（延迟初始化）。"""
        if self._client is None:
            self._client = aioredis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=10.0,  # 读写超时 10 秒
                socket_connect_timeout=5.0,  # 连接超时 5 秒
                retry_on_timeout=True,  # 超时后重试
            )
        return self._client

    async def close(self) -> None:
        """关闭 Redis 连接。"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def ping(self) -> bool:
        """检查 Redis 连接是否正常。"""
        try:
            return await self.client.ping()
        except Exception as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def ensure_available(self, *, timeout: float = 5.0) -> None:
        """启动时确认 Redis 可连接。

        Raises:
            RedisUnavailableError: ping 超时或失败
        """
        try:
            ok = await asyncio.wait_for(self.client.ping(), timeout=timeout)
        except TimeoutError as e:
            raise RedisUnavailableError("Redis ping timeout") from e
        except Exception as e:
            raise RedisUnavailableError(f"Redis ping failed: {e}") from e
        if not ok:
            raise RedisUnavailableError("Redis ping returned falsy result")

    async def health_check(self) -> RedisHealthResult:
        """执行 Redis 健康检查。"""
        try:
            is_connected = await self.ping()
            info = await self.client.info("server") if is_connected else {}
            return RedisHealthResult(
                status=HealthStatus.OK if is_connected else HealthStatus.ERROR,
                connected=is_connected,
                version=info.get("redis_version", "unknown"),
            )
        except Exception as e:
            return RedisHealthResult(
                status=HealthStatus.ERROR,
                connected=False,
                error=str(e),
            )

    # ============ 缓存操作 ============

    async def get(self, key: str) -> str | None:
        """获取字符串值。"""
        return await self.client.get(key)

    async def set(
        self,
        key: str,
        value: str,
        ex: int | timedelta | None = None,
        nx: bool = False,
    ) -> bool:
        """设置字符串值。

        Args:
            key: 键名
            value: 值
            ex: 过期时间（秒或 timedelta）
            nx: 仅当键不存在时设置
        """
        return await self.client.set(key, value, ex=ex, nx=nx)

    async def delete(self, *keys: str) -> int:
        """删除一个或多个键。"""
        if not keys:
            return 0
        return await self.client.delete(*keys)

    async def exists(self, *keys: str) -> int:
        """检查键是否存在，返回存在的数量。"""
        return await self.client.exists(*keys)

    async def scan_keys(self, pattern: str, count: int = 500) -> list[str]:
        """按模式增量扫描键（SCAN，不阻塞服务端）。"""
        return [key async for key in self.client.scan_iter(match=pattern, count=count)]


def get_redis_client(request: Request) -> RedisClient:
    """获取 Redis 客户端依赖（来自应用上下文）。"""
    return request.app.state.context.redis
