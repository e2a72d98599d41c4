"""Application domain entities."""

from pydantic import Field

from src.core.domain.aggregate_root import AggregateRoot
from src.core.domain.base_entity import BaseEntity
from src.core.domain.permissions import AppStaffPermission


class Application(AggregateRoot):
    """Application aggregate root, owned collectively by its staff grants."""

    name: str = Field(..., min_length=1, max_length=255, description="应用名称")
    description: str | None = Field(default=None, max_length=1024, description="描述")

    def update_details(
        self, name: str | None = None, description: str | None = None
    ) -> list[str]:
        updated_fields: list[str] = []
        if name is not None and name != self.name:
            self.name = name
            updated_fields.append("name")
        if description is not None and description != self.description:
            self.description = description
            updated_fields.append("description")
        if updated_fields:
            self._update_timestamp()
        return updated_fields


class ApplicationStaff(BaseEntity):
    """Permission-bearing association between a user and an application.

    每个 (application_id, user_id) 只能有一条授权。
    """

    application_id: str = Field(..., description="应用ID")
    user_id: str = Field(..., description="用户ID")
    permissions: list[AppStaffPermission] = Field(
        default_factory=list, description="应用权限"
    )

    def replace_permissions(self, permissions: list[AppStaffPermission]) -> None:
        self.permissions = sorted(set(permissions))
        self._update_timestamp()
