"""Auth command handlers."""

from loguru import logger

from src.core.application.tokens import (
    IntrospectionResult,
    IssuedTokens,
    TokenLifecycleManager,
)
from src.core.domain.ports.password_hasher import PasswordHasher
from src.core.domain.tokens import TokenClaims
from src.core.infrastructure.logging import BusinessEvents
from src.modules.auth.application.commands import (
    IntrospectCommand,
    LoginCommand,
    RegisterCommand,
)
from src.modules.auth.domain.exceptions import EmailNotFoundError, IncorrectPasswordError
from src.modules.users.domain.entities import User
from src.modules.users.domain.exceptions import EmailAlreadyUsedError
from src.modules.users.domain.repository import UserRepository


class RegisterHandler:
    """Handle self-service registration."""

    def __init__(self, user_repository: UserRepository, hasher: PasswordHasher):
        self.user_repository = user_repository
        self.hasher = hasher
        self.logger = logger

    async def handle(self, command: RegisterCommand) -> User:
        if await self.user_repository.exists_by_email(command.email):
            raise EmailAlreadyUsedError(command.email)

        user = User(
            name=command.name,
            email=command.email,
            password_hash=self.hasher.hash(command.password),
            birthday=command.birthday,
        )
        created = await self.user_repository.create(user)
        BusinessEvents.user_registered(user_id=created.id, email=created.email)
        return created


class LoginHandler:
    """Handle password login and token issuance.

    不做失败次数限制。
    """

    def __init__(
        self,
        user_repository: UserRepository,
        hasher: PasswordHasher,
        token_lifecycle: TokenLifecycleManager,
    ):
        self.user_repository = user_repository
        self.hasher = hasher
        self.token_lifecycle = token_lifecycle
        self.logger = logger

    async def handle(self, command: LoginCommand) -> IssuedTokens:
        user = await self.user_repository.get_by_email(command.email)
        if not user:
            BusinessEvents.login_failed(email=command.email, reason="unknown_email")
            raise EmailNotFoundError()

        # HashFormatError 直接上抛（500），不能当作密码错误
        if not self.hasher.verify(command.password, user.password_hash):
            BusinessEvents.login_failed(email=command.email, reason="incorrect_password")
            raise IncorrectPasswordError()

        tokens = await self.token_lifecycle.issue(
            user.id,
            is_staff=user.is_staff,
            staff_permissions=user.staff_permissions,
        )
        BusinessEvents.user_logged_in(user_id=user.id)
        return tokens


class LogoutHandler:
    """Revoke the presented token together with its sibling."""

    def __init__(self, token_lifecycle: TokenLifecycleManager):
        self.token_lifecycle = token_lifecycle

    async def handle(self, claims: TokenClaims) -> None:
        await self.token_lifecycle.revoke(claims)


class LogoutAllHandler:
    """Revoke every live token of a user."""

    def __init__(self, token_lifecycle: TokenLifecycleManager):
        self.token_lifecycle = token_lifecycle

    async def handle(self, user_id: str) -> int:
        return await self.token_lifecycle.revoke_all(user_id)


class IntrospectHandler:
    """Report whether a token is active."""

    def __init__(self, token_lifecycle: TokenLifecycleManager):
        self.token_lifecycle = token_lifecycle

    async def handle(self, command: IntrospectCommand) -> IntrospectionResult:
        return await self.token_lifecycle.introspect(
            command.token, command.token_type_hint
        )
