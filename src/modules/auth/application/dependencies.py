"""Auth module application dependencies."""

from fastapi import Depends

from src.core.application.dependencies import get_password_hasher, get_token_lifecycle
from src.core.application.tokens import TokenLifecycleManager
from src.core.domain.ports.password_hasher import PasswordHasher
from src.modules.auth.application.handlers import (
    IntrospectHandler,
    LoginHandler,
    LogoutAllHandler,
    LogoutHandler,
    RegisterHandler,
)
from src.modules.users.application.dependencies import get_user_repository
from src.modules.users.domain.repository import UserRepository


async def get_register_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> RegisterHandler:
    return RegisterHandler(user_repository, hasher)


async def get_login_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> LoginHandler:
    return LoginHandler(user_repository, hasher, token_lifecycle)


async def get_logout_handler(
    token_lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> LogoutHandler:
    return LogoutHandler(token_lifecycle)


async def get_logout_all_handler(
    token_lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> LogoutAllHandler:
    return LogoutAllHandler(token_lifecycle)


async def get_introspect_handler(
    token_lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> IntrospectHandler:
    return IntrospectHandler(token_lifecycle)
