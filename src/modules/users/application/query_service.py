"""User query service."""

from src.core.domain.filters import Pagination
from src.modules.users.application.queries import UserQuery
from src.modules.users.domain.entities import User
from src.modules.users.domain.exceptions import UserNotFoundError
from src.modules.users.domain.repository import UserRepository


class UserQueryService:
    """Read-side operations on users."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def get_user(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def list_users(
        self, query: UserQuery, is_staff: bool
    ) -> tuple[list[User], int, Pagination]:
        pagination = query.pagination()
        users, total = await self.user_repository.find_many_by_kind(
            query, pagination, is_staff
        )
        return users, total, pagination
