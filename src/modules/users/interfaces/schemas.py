"""User API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

from src.core.domain.permissions import StaffPermission
from src.modules.users.domain.entities import User


class UserResponse(BaseModel):
    """User info response (never carries the password hash)."""

    id: str = Field(..., description="用户ID")
    name: str = Field(..., description="用户名")
    email: EmailStr = Field(..., description="邮箱")
    birthday: date | None = Field(None, description="生日")
    is_staff: bool = Field(..., description="是否为平台员工")
    staff_permissions: list[StaffPermission] = Field(
        default_factory=list, description="平台员工权限"
    )
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="更新时间")

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            birthday=user.birthday,
            is_staff=user.is_staff,
            staff_permissions=user.staff_permissions,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class CreateStaffUserRequest(BaseModel):
    """Create staff user request."""

    name: str = Field(..., min_length=1, max_length=255, description="用户名")
    email: EmailStr = Field(..., max_length=255, description="邮箱")
    birthday: date | None = Field(None, description="生日")
    staff_permissions: list[StaffPermission] = Field(
        default_factory=list, description="平台员工权限"
    )


class CreatedStaffUserResponse(BaseModel):
    """Created staff user together with its generated password."""

    user: UserResponse
    password: str = Field(..., description="初始密码（仅返回一次）")


class UpdateStaffUserRequest(BaseModel):
    """Update staff user request."""

    name: str | None = Field(None, min_length=1, max_length=255, description="用户名")
    birthday: date | None = Field(None, description="生日")
    staff_permissions: list[StaffPermission] | None = Field(
        None, description="平台员工权限（整体替换）"
    )


class ChangePasswordRequest(BaseModel):
    """Change own password request."""

    old_password: str = Field(..., min_length=1, max_length=255, description="旧密码")
    new_password: str = Field(..., min_length=1, max_length=255, description="新密码")
