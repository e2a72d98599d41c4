"""Grant-backed application permission resolver."""

from src.core.domain.permissions import AppStaffPermission
from src.modules.applications.domain.repository import (
    ApplicationRepository,
    ApplicationStaffRepository,
)


class GrantPermissionResolver:
    """Resolve a user's permissions on an application from its staff grant.

    应用不存在（或已删除）时与无授权同等处理。
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        staff_repository: ApplicationStaffRepository,
    ):
        self.application_repository = application_repository
        self.staff_repository = staff_repository

    async def get_permissions(
        self, application_id: str, user_id: str
    ) -> frozenset[AppStaffPermission] | None:
        if not await self.application_repository.get_by_id(application_id):
            return None
        grant = await self.staff_repository.get_grant(application_id, user_id)
        if grant is None:
            return None
        return frozenset(grant.permissions)
