"""Application module infrastructure dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.infrastructure.database.session import get_db_session
from src.modules.applications.infrastructure.access import GrantPermissionResolver
from src.modules.applications.infrastructure.mappers import (
    ApplicationMapper,
    ApplicationStaffMapper,
)
from src.modules.applications.infrastructure.repositories import (
    PostgreSQLApplicationRepository,
    PostgreSQLApplicationStaffRepository,
)


def get_application_mapper() -> ApplicationMapper:
    return ApplicationMapper()


def get_application_staff_mapper() -> ApplicationStaffMapper:
    return ApplicationStaffMapper()


async def get_application_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: ApplicationMapper = Depends(get_application_mapper),
) -> PostgreSQLApplicationRepository:
    return PostgreSQLApplicationRepository(session, mapper)


async def get_application_staff_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: ApplicationStaffMapper = Depends(get_application_staff_mapper),
) -> PostgreSQLApplicationStaffRepository:
    return PostgreSQLApplicationStaffRepository(session, mapper)


async def get_permission_resolver(
    application_repository: PostgreSQLApplicationRepository = Depends(
        get_application_repository
    ),
    staff_repository: PostgreSQLApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
) -> GrantPermissionResolver:
    return GrantPermissionResolver(application_repository, staff_repository)
