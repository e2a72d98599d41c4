"""Application API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.domain.permissions import AppStaffPermission
from src.modules.applications.domain.entities import Application, ApplicationStaff


class ApplicationResponse(BaseModel):
    id: str = Field(..., description="应用ID")
    name: str = Field(..., description="应用名称")
    description: str | None = Field(None, description="描述")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="更新时间")

    @classmethod
    def from_entity(cls, application: Application) -> "ApplicationResponse":
        return cls(
            id=application.id,
            name=application.name,
            description=application.description,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


class CreateApplicationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="应用名称")
    description: str | None = Field(None, max_length=1024, description="描述")


class UpdateApplicationRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255, description="应用名称")
    description: str | None = Field(None, max_length=1024, description="描述")


class StaffResponse(BaseModel):
    """Application staff grant response."""

    id: str = Field(..., description="授权ID")
    application_id: str = Field(..., description="应用ID")
    user_id: str = Field(..., description="用户ID")
    permissions: list[AppStaffPermission] = Field(..., description="应用权限")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="更新时间")

    @classmethod
    def from_entity(cls, grant: ApplicationStaff) -> "StaffResponse":
        return cls(
            id=grant.id,
            application_id=grant.application_id,
            user_id=grant.user_id,
            permissions=grant.permissions,
            created_at=grant.created_at,
            updated_at=grant.updated_at,
        )


class AddStaffRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="用户ID")
    permissions: list[AppStaffPermission] = Field(
        default_factory=list, description="应用权限"
    )


class UpdateStaffRequest(BaseModel):
    permissions: list[AppStaffPermission] = Field(..., description="应用权限（整体替换）")
