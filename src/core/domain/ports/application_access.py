"""Application permission lookup port."""

from typing import Protocol

from src.core.domain.permissions import AppStaffPermission


class ApplicationPermissionResolver(Protocol):
    async def get_permissions(
        self, application_id: str, user_id: str
    ) -> frozenset[AppStaffPermission] | None:
        """Return the grant's permission set, or None when no grant exists."""
        ...
