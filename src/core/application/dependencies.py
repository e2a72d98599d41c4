"""Core application dependencies.

These functions define application-level dependency boundaries and are overridden
by infrastructure in `main.py`.
"""

from __future__ import annotations

from typing import NoReturn

from fastapi import Depends

from src.core.application.tokens import TokenLifecycleManager
from src.core.domain.ports.cache import TokenCache
from src.core.domain.ports.password_hasher import PasswordHasher
from src.core.domain.ports.token import TokenCodec


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_token_codec() -> TokenCodec:
    _missing_dependency("TokenCodec")


async def get_token_cache() -> TokenCache:
    _missing_dependency("TokenCache")


async def get_password_hasher() -> PasswordHasher:
    _missing_dependency("PasswordHasher")


async def get_token_lifecycle(
    codec: TokenCodec = Depends(get_token_codec),
    cache: TokenCache = Depends(get_token_cache),
) -> TokenLifecycleManager:
    return TokenLifecycleManager(codec, cache)
