"""Application module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.modules.applications.application.handlers import (
    AddStaffHandler,
    CreateApplicationHandler,
    DeleteApplicationHandler,
    RemoveStaffHandler,
    UpdateApplicationHandler,
    UpdateStaffHandler,
)
from src.modules.applications.application.query_service import ApplicationQueryService
from src.modules.applications.domain.repository import (
    ApplicationRepository,
    ApplicationStaffRepository,
)
from src.modules.users.application.dependencies import get_user_repository
from src.modules.users.domain.repository import UserRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_application_repository() -> ApplicationRepository:
    _missing_dependency("ApplicationRepository")


async def get_application_staff_repository() -> ApplicationStaffRepository:
    _missing_dependency("ApplicationStaffRepository")


async def get_application_query_service(
    application_repository: ApplicationRepository = Depends(get_application_repository),
    staff_repository: ApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
) -> ApplicationQueryService:
    return ApplicationQueryService(application_repository, staff_repository)


async def get_create_application_handler(
    application_repository: ApplicationRepository = Depends(get_application_repository),
    staff_repository: ApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
) -> CreateApplicationHandler:
    return CreateApplicationHandler(application_repository, staff_repository)


async def get_update_application_handler(
    application_repository: ApplicationRepository = Depends(get_application_repository),
) -> UpdateApplicationHandler:
    return UpdateApplicationHandler(application_repository)


async def get_delete_application_handler(
    application_repository: ApplicationRepository = Depends(get_application_repository),
    staff_repository: ApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
) -> DeleteApplicationHandler:
    return DeleteApplicationHandler(application_repository, staff_repository)


async def get_add_staff_handler(
    staff_repository: ApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
    user_repository: UserRepository = Depends(get_user_repository),
) -> AddStaffHandler:
    return AddStaffHandler(staff_repository, user_repository)


async def get_update_staff_handler(
    staff_repository: ApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
) -> UpdateStaffHandler:
    return UpdateStaffHandler(staff_repository)


async def get_remove_staff_handler(
    staff_repository: ApplicationStaffRepository = Depends(
        get_application_staff_repository
    ),
) -> RemoveStaffHandler:
    return RemoveStaffHandler(staff_repository)
