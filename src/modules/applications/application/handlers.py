"""Application command handlers."""

from loguru import logger

from src.core.domain.permissions import AppStaffPermission
from src.core.infrastructure.logging import BusinessEvents
from src.modules.applications.application.commands import (
    AddStaffCommand,
    CreateApplicationCommand,
    UpdateApplicationCommand,
    UpdateStaffCommand,
)
from src.modules.applications.domain.entities import Application, ApplicationStaff
from src.modules.applications.domain.exceptions import (
    ApplicationNameExistsError,
    ApplicationNotFoundError,
    CreatorGrantError,
    StaffGrantExistsError,
    StaffGrantNotFoundError,
)
from src.modules.applications.domain.repository import (
    ApplicationRepository,
    ApplicationStaffRepository,
)
from src.modules.users.domain.exceptions import UserNotFoundError
from src.modules.users.domain.repository import UserRepository


class CreateApplicationHandler:
    """Create an application and grant its creator every application permission."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        staff_repository: ApplicationStaffRepository,
    ):
        self.application_repository = application_repository
        self.staff_repository = staff_repository
        self.logger = logger

    async def handle(self, command: CreateApplicationCommand) -> Application:
        if await self.application_repository.exists_by_name(command.name):
            raise ApplicationNameExistsError(command.name)

        application = await self.application_repository.create(
            Application(name=command.name, description=command.description)
        )

        grant = ApplicationStaff(
            application_id=application.id,
            user_id=command.creator_id,
            permissions=AppStaffPermission.get_all(),
        )
        # 授权失败时抛出异常，外层事务整体回滚，应用不会落库
        try:
            await self.staff_repository.create(grant)
        except Exception as e:
            self.logger.error(
                f"Failed to grant creator {command.creator_id} on {application.id}: {e}"
            )
            raise CreatorGrantError(str(e)) from e

        BusinessEvents.application_created(
            application_id=application.id,
            name=application.name,
            created_by=command.creator_id,
        )
        return application


class UpdateApplicationHandler:
    def __init__(self, application_repository: ApplicationRepository):
        self.application_repository = application_repository

    async def handle(self, command: UpdateApplicationCommand) -> Application:
        application = await self.application_repository.get_by_id(
            command.application_id
        )
        if not application:
            raise ApplicationNotFoundError(command.application_id)

        if (
            command.name is not None
            and command.name != application.name
            and await self.application_repository.exists_by_name(command.name)
        ):
            raise ApplicationNameExistsError(command.name)

        if not application.update_details(command.name, command.description):
            return application
        return await self.application_repository.update(application)


class DeleteApplicationHandler:
    """Soft-delete an application together with all of its grants."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        staff_repository: ApplicationStaffRepository,
    ):
        self.application_repository = application_repository
        self.staff_repository = staff_repository
        self.logger = logger

    async def handle(self, application_id: str) -> None:
        if not await self.application_repository.delete(application_id):
            raise ApplicationNotFoundError(application_id)
        removed = await self.staff_repository.delete_by_application(application_id)
        self.logger.info(f"Deleted application {application_id} and {removed} grants")


class AddStaffHandler:
    def __init__(
        self,
        staff_repository: ApplicationStaffRepository,
        user_repository: UserRepository,
    ):
        self.staff_repository = staff_repository
        self.user_repository = user_repository

    async def handle(self, command: AddStaffCommand) -> ApplicationStaff:
        if not await self.user_repository.get_by_id(command.user_id):
            raise UserNotFoundError(command.user_id)
        if await self.staff_repository.get_grant(
            command.application_id, command.user_id
        ):
            raise StaffGrantExistsError(command.application_id, command.user_id)

        grant = await self.staff_repository.create(
            ApplicationStaff(
                application_id=command.application_id,
                user_id=command.user_id,
                permissions=sorted(set(command.permissions)),
            )
        )
        BusinessEvents.staff_grant_changed(
            application_id=command.application_id,
            user_id=command.user_id,
            action="granted",
        )
        return grant


class UpdateStaffHandler:
    def __init__(self, staff_repository: ApplicationStaffRepository):
        self.staff_repository = staff_repository

    async def handle(self, command: UpdateStaffCommand) -> ApplicationStaff:
        grant = await self.staff_repository.get_grant(
            command.application_id, command.user_id
        )
        if not grant:
            raise StaffGrantNotFoundError(command.user_id)

        grant.replace_permissions(command.permissions)
        updated = await self.staff_repository.update(grant)
        BusinessEvents.staff_grant_changed(
            application_id=command.application_id,
            user_id=command.user_id,
            action="updated",
        )
        return updated


class RemoveStaffHandler:
    def __init__(self, staff_repository: ApplicationStaffRepository):
        self.staff_repository = staff_repository

    async def handle(self, application_id: str, user_id: str) -> None:
        if not await self.staff_repository.remove_grant(application_id, user_id):
            raise StaffGrantNotFoundError(user_id)
        BusinessEvents.staff_grant_changed(
            application_id=application_id, user_id=user_id, action="revoked"
        )
