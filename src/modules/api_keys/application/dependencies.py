"""API Keys module application dependencies.

Provides service and repository without importing infrastructure.
"""

from typing import NoReturn

from fastapi import Depends

from src.modules.api_keys.application.service import ApiKeyService
from src.modules.api_keys.domain.repository import ApiKeyRepository
from src.modules.users.application.dependencies import get_user_repository
from src.modules.users.domain.repository import UserRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_api_key_repository() -> ApiKeyRepository:
    _missing_dependency("ApiKeyRepository")


async def get_api_key_service(
    repository: ApiKeyRepository = Depends(get_api_key_repository),
    user_repository: UserRepository = Depends(get_user_repository),
) -> ApiKeyService:
    return ApiKeyService(repository=repository, user_repository=user_repository)
