"""User repository implementations."""

from sqlmodel import col

from src.core.domain.exceptions import DomainException
from src.core.domain.filters import FilterQuery, Pagination
from src.core.infrastructure.database.filters import compile_filter
from src.core.infrastructure.database.repository import SQLModelRepository
from src.modules.users.domain.entities import User
from src.modules.users.domain.events import UserMutatedEvent, detect_user_mutation
from src.modules.users.domain.exceptions import EmailAlreadyUsedError
from src.modules.users.domain.repository import UserRepository
from src.modules.users.infrastructure.models import UserModel


class PostgreSQLUserRepository(SQLModelRepository[User, UserModel], UserRepository):
    """PostgreSQL user repository implementation.

    每次持久化前与持久化前的快照比较，必要时附加一个 UserMutatedEvent，
    事件随事务提交后由 EventBus 分发。
    """

    model = UserModel

    async def get_by_email(self, email: str) -> User | None:
        return await self.find_one(col(UserModel.email) == email)

    async def exists_by_email(self, email: str) -> bool:
        return await self.count(col(UserModel.email) == email) > 0

    async def find_many_by_kind(
        self, query: FilterQuery, pagination: Pagination, is_staff: bool
    ) -> tuple[list[User], int]:
        statement = self._select().where(
            col(UserModel.is_staff).is_(is_staff),
            *compile_filter(query, UserModel),
        )
        return await self._paginate(statement, pagination)

    async def create(self, user: User) -> User:
        self._record_mutation(None, user)
        return await super().create(user)

    async def update(self, user: User) -> User:
        before = await self.get_by_id(user.id)
        self._record_mutation(before, user)
        return await super().update(user)

    async def delete(self, user: User | str) -> bool:
        entity = await self.get_by_id(user) if isinstance(user, str) else user
        if entity is None:
            return False
        entity.mark_as_deleted()
        await self.update(entity)
        return True

    def _conflict_error(self, user: User) -> DomainException:
        return EmailAlreadyUsedError(user.email)

    def _record_mutation(self, before: User | None, after: User) -> None:
        mutation = detect_user_mutation(before, after)
        if mutation is not None:
            after.add_domain_event(UserMutatedEvent.of(after, mutation))
