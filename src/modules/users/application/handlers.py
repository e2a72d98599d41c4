"""User command handlers."""

from loguru import logger

from src.core.application.tokens import TokenLifecycleManager
from src.core.domain.events import DomainEventHandler
from src.core.domain.ports.password_hasher import PasswordHasher
from src.core.infrastructure.logging import BusinessEvents
from src.core.infrastructure.security.hasher import gen_password
from src.modules.users.application.commands import (
    ChangePasswordCommand,
    CreateStaffUserCommand,
    DeleteUserCommand,
    UpdateStaffUserCommand,
)
from src.modules.users.domain.entities import User
from src.modules.users.domain.events import UserMutatedEvent
from src.modules.users.domain.exceptions import (
    EmailAlreadyUsedError,
    IncorrectOldPasswordError,
    NotStaffUserError,
    PasswordOwnerNotFoundError,
    UserNotFoundError,
)
from src.modules.users.domain.ports import UserEventQueue
from src.modules.users.domain.repository import UserRepository


class CreateStaffUserHandler:
    """Create a staff user with a one-time generated password."""

    def __init__(self, user_repository: UserRepository, hasher: PasswordHasher):
        self.user_repository = user_repository
        self.hasher = hasher
        self.logger = logger

    async def handle(self, command: CreateStaffUserCommand) -> tuple[User, str]:
        """Returns the created user and the plaintext password (shown once)."""
        if await self.user_repository.exists_by_email(command.email):
            raise EmailAlreadyUsedError(command.email)

        password = gen_password()
        user = User(
            name=command.name,
            email=command.email,
            password_hash=self.hasher.hash(password),
            birthday=command.birthday,
            is_staff=True,
            staff_permissions=sorted(set(command.staff_permissions)),
        )
        created = await self.user_repository.create(user)
        BusinessEvents.user_registered(
            user_id=created.id, email=created.email, is_staff=True
        )
        return created, password


class UpdateStaffUserHandler:
    """Update a staff user's profile and staff permissions."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository
        self.logger = logger

    async def handle(self, command: UpdateStaffUserCommand) -> User:
        user = await self.user_repository.get_by_id(command.user_id)
        if not user:
            raise UserNotFoundError(command.user_id)
        if not user.is_staff:
            raise NotStaffUserError(user.id, expected_staff=True)

        updated_fields = user.update_profile(
            name=command.name, birthday=command.birthday
        )
        if command.staff_permissions is not None:
            user.set_staff_permissions(command.staff_permissions)
            updated_fields.append("staff_permissions")

        if not updated_fields:
            return user

        self.logger.info(f"Updated staff user {user.id}: {updated_fields}")
        return await self.user_repository.update(user)


class DeleteUserHandler:
    """Soft-delete a user and end all of their sessions."""

    def __init__(
        self,
        user_repository: UserRepository,
        token_lifecycle: TokenLifecycleManager,
    ):
        self.user_repository = user_repository
        self.token_lifecycle = token_lifecycle
        self.logger = logger

    async def handle(self, command: DeleteUserCommand) -> None:
        user = await self.user_repository.get_by_id(command.user_id)
        if not user:
            raise UserNotFoundError(command.user_id)
        if user.is_staff != command.is_staff:
            raise NotStaffUserError(user.id, expected_staff=command.is_staff)

        await self.user_repository.delete(user)
        await self.token_lifecycle.revoke_all(user.id)
        self.logger.info(f"Deleted user {user.id}")


class ChangePasswordHandler:
    """Change the caller's password and revoke every session."""

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

    async def handle(self, command: ChangePasswordCommand) -> None:
        user = await self.user_repository.get_by_id(command.user_id)
        if not user:
            raise PasswordOwnerNotFoundError()
        if not self.hasher.verify(command.old_password, user.password_hash):
            raise IncorrectOldPasswordError()

        user.change_password(self.hasher.hash(command.new_password))
        await self.user_repository.update(user)
        await self.token_lifecycle.revoke_all(user.id)


class PublishUserMutationHandler(DomainEventHandler):
    """Forward user mutation events to the message broker.

    入队失败只记录日志，不影响已经完成的持久化。
    """

    def __init__(self, event_queue: UserEventQueue):
        self.event_queue = event_queue
        self.logger = logger

    async def handle(self, event: UserMutatedEvent) -> None:
        try:
            await self.event_queue.enqueue(event)
        except Exception as e:
            BusinessEvents.user_event_publish_failed(
                user_id=event.user_id, event=event.mutation.value, error=str(e)
            )
            return
        BusinessEvents.user_event_enqueued(
            user_id=event.user_id, event=event.mutation.value
        )
