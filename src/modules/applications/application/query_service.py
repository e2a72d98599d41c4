"""Application query service."""

from src.core.domain.filters import Pagination
from src.core.domain.permissions import AppStaffPermission
from src.modules.applications.application.queries import (
    ApplicationQuery,
    ApplicationStaffQuery,
)
from src.modules.applications.domain.entities import Application, ApplicationStaff
from src.modules.applications.domain.exceptions import ApplicationNotFoundError
from src.modules.applications.domain.repository import (
    ApplicationRepository,
    ApplicationStaffRepository,
)


class ApplicationQueryService:
    """Read-side operations on applications and their staff."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        staff_repository: ApplicationStaffRepository,
    ):
        self.application_repository = application_repository
        self.staff_repository = staff_repository

    async def get_application(self, application_id: str) -> Application:
        application = await self.application_repository.get_by_id(application_id)
        if not application:
            raise ApplicationNotFoundError(application_id)
        return application

    async def list_readable(
        self, user_id: str, query: ApplicationQuery
    ) -> tuple[list[Application], int, Pagination]:
        """Applications the user holds ReadApplication on."""
        pagination = query.pagination()
        items, total = await self.application_repository.find_many_for_user(
            query, pagination, user_id, AppStaffPermission.READ_APPLICATION
        )
        return items, total, pagination

    async def list_staff(
        self, application_id: str, query: ApplicationStaffQuery
    ) -> tuple[list[ApplicationStaff], int, Pagination]:
        pagination = query.pagination()
        items, total = await self.staff_repository.list_by_application(
            application_id, query, pagination
        )
        return items, total, pagination
