"""User module application dependencies.

Defines dependency providers for interfaces layer without importing infrastructure.
"""

from typing import NoReturn

from fastapi import Depends

from src.core.application.dependencies import get_password_hasher, get_token_lifecycle
from src.core.application.tokens import TokenLifecycleManager
from src.core.domain.ports.password_hasher import PasswordHasher
from src.modules.users.application.handlers import (
    ChangePasswordHandler,
    CreateStaffUserHandler,
    DeleteUserHandler,
    UpdateStaffUserHandler,
)
from src.modules.users.application.query_service import UserQueryService
from src.modules.users.domain.repository import UserRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_user_repository() -> UserRepository:
    _missing_dependency("UserRepository")


async def get_user_query_service(
    user_repository: UserRepository = Depends(get_user_repository),
) -> UserQueryService:
    return UserQueryService(user_repository)


async def get_create_staff_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CreateStaffUserHandler:
    return CreateStaffUserHandler(user_repository, hasher)


async def get_update_staff_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
) -> UpdateStaffUserHandler:
    return UpdateStaffUserHandler(user_repository)


async def get_delete_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    token_lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> DeleteUserHandler:
    return DeleteUserHandler(user_repository, token_lifecycle)


async def get_change_password_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> ChangePasswordHandler:
    return ChangePasswordHandler(user_repository, hasher, token_lifecycle)
