"""Token cache port."""

from typing import Protocol


class TokenCache(Protocol):
    """TTL-aware key-value store used as the token registry."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ex: int | None = None) -> bool: ...

    async def exists(self, *keys: str) -> int: ...

    async def delete(self, *keys: str) -> int: ...

    async def scan_keys(self, pattern: str) -> list[str]: ...
