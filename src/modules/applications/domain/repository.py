"""Application repository interfaces."""

from abc import abstractmethod

from src.core.domain.filters import FilterQuery, Pagination
from src.core.domain.permissions import AppStaffPermission
from src.core.domain.repository import BaseRepository
from src.modules.applications.domain.entities import Application, ApplicationStaff


class ApplicationRepository(BaseRepository[Application]):
    """Application repository interface."""

    @abstractmethod
    async def exists_by_name(self, name: str) -> bool:
        pass

    @abstractmethod
    async def find_many_for_user(
        self,
        query: FilterQuery,
        pagination: Pagination,
        user_id: str,
        permission: AppStaffPermission,
    ) -> tuple[list[Application], int]:
        """List applications on which ``user_id`` holds ``permission``."""
        pass


class ApplicationStaffRepository(BaseRepository[ApplicationStaff]):
    """Application staff grant repository interface."""

    @abstractmethod
    async def get_grant(
        self, application_id: str, user_id: str
    ) -> ApplicationStaff | None:
        pass

    @abstractmethod
    async def list_by_application(
        self, application_id: str, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[ApplicationStaff], int]:
        pass

    @abstractmethod
    async def remove_grant(self, application_id: str, user_id: str) -> bool:
        """Remove a grant row so the pair can be granted again later."""
        pass

    @abstractmethod
    async def delete_by_application(self, application_id: str) -> int:
        """Soft-delete every grant of an application."""
        pass
