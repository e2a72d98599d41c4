"""User repository interface."""

from abc import abstractmethod

from src.core.domain.filters import FilterQuery, Pagination
from src.core.domain.repository import BaseRepository
from src.modules.users.domain.entities import User


class UserRepository(BaseRepository[User]):
    """User repository interface.

    create / update / delete 负责触发 UserMutatedEvent。
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if user with email exists."""
        pass

    @abstractmethod
    async def find_many_by_kind(
        self, query: FilterQuery, pagination: Pagination, is_staff: bool
    ) -> tuple[list[User], int]:
        """List staff or regular users matching ``query``."""
        pass
