"""Application repository implementations."""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.sql import Select
from sqlmodel import col

from src.core.domain.exceptions import DomainException
from src.core.domain.filters import FilterQuery, Pagination
from src.core.domain.permissions import AppStaffPermission
from src.core.infrastructure.database.filters import compile_filter
from src.core.infrastructure.database.repository import SQLModelRepository
from src.modules.applications.domain.entities import Application, ApplicationStaff
from src.modules.applications.domain.exceptions import (
    ApplicationNameExistsError,
    StaffGrantExistsError,
)
from src.modules.applications.domain.repository import (
    ApplicationRepository,
    ApplicationStaffRepository,
)
from src.modules.applications.infrastructure.models import (
    ApplicationModel,
    ApplicationStaffModel,
)


class PostgreSQLApplicationRepository(
    SQLModelRepository[Application, ApplicationModel], ApplicationRepository
):
    """PostgreSQL application repository implementation."""

    model = ApplicationModel

    async def exists_by_name(self, name: str) -> bool:
        return await self.count(col(ApplicationModel.name) == name) > 0

    def _conflict_error(self, application: Application) -> DomainException:
        return ApplicationNameExistsError(application.name)

    async def find_many_for_user(
        self,
        query: FilterQuery,
        pagination: Pagination,
        user_id: str,
        permission: AppStaffPermission,
    ) -> tuple[list[Application], int]:
        statement = self._readable_statement(query, user_id, permission)
        return await self._paginate(statement, pagination)

    def _readable_statement(
        self, query: FilterQuery, user_id: str, permission: AppStaffPermission
    ) -> Select[Any]:
        """Live applications on which ``user_id`` holds a live grant with ``permission``."""
        return (
            self._select()
            .join(
                ApplicationStaffModel,
                col(ApplicationStaffModel.application_id) == col(ApplicationModel.id),
            )
            .where(
                col(ApplicationStaffModel.user_id) == user_id,
                col(ApplicationStaffModel.is_deleted).is_(False),
                col(ApplicationStaffModel.permissions).contains([permission.value]),
                *compile_filter(query, ApplicationModel),
            )
        )


class PostgreSQLApplicationStaffRepository(
    SQLModelRepository[ApplicationStaff, ApplicationStaffModel],
    ApplicationStaffRepository,
):
    """PostgreSQL application staff grant repository implementation."""

    model = ApplicationStaffModel

    def _conflict_error(self, grant: ApplicationStaff) -> DomainException:
        return StaffGrantExistsError(grant.application_id, grant.user_id)

    async def get_grant(
        self, application_id: str, user_id: str
    ) -> ApplicationStaff | None:
        return await self.find_one(
            col(ApplicationStaffModel.application_id) == application_id,
            col(ApplicationStaffModel.user_id) == user_id,
        )

    async def list_by_application(
        self, application_id: str, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[ApplicationStaff], int]:
        statement = self._select().where(
            col(ApplicationStaffModel.application_id) == application_id,
            *compile_filter(query, ApplicationStaffModel),
        )
        return await self._paginate(statement, pagination)

    async def remove_grant(self, application_id: str, user_id: str) -> bool:
        statement = delete(ApplicationStaffModel).where(
            col(ApplicationStaffModel.application_id) == application_id,
            col(ApplicationStaffModel.user_id) == user_id,
            col(ApplicationStaffModel.is_deleted).is_(False),
        )
        result = await self.session.execute(statement)
        return (result.rowcount or 0) > 0

    async def delete_by_application(self, application_id: str) -> int:
        return await self.soft_delete(
            col(ApplicationStaffModel.application_id) == application_id
        )
