"""User domain entities."""

from datetime import date

from pydantic import EmailStr, Field

from src.core.domain.aggregate_root import AggregateRoot
from src.core.domain.permissions import StaffPermission


class User(AggregateRoot):
    """User aggregate root.

    password_hash 只保存单向哈希，明文密码不会进入实体。
    """

    name: str = Field(..., min_length=1, max_length=255, description="用户名")
    email: EmailStr = Field(..., description="用户邮箱")
    password_hash: str = Field(..., description="密码哈希")
    birthday: date | None = Field(default=None, description="生日")
    is_staff: bool = Field(default=False, description="是否为平台员工")
    staff_permissions: list[StaffPermission] = Field(
        default_factory=list, description="平台员工权限"
    )

    def change_password(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self._update_timestamp()

    def update_profile(
        self,
        name: str | None = None,
        birthday: date | None = None,
    ) -> list[str]:
        """Update user profile, returning the names of changed fields."""
        updated_fields: list[str] = []

        if name is not None and name != self.name:
            self.name = name
            updated_fields.append("name")

        if birthday is not None and birthday != self.birthday:
            self.birthday = birthday
            updated_fields.append("birthday")

        if updated_fields:
            self._update_timestamp()

        return updated_fields

    def set_staff_permissions(self, permissions: list[StaffPermission]) -> None:
        self.staff_permissions = sorted(set(permissions))
        self._update_timestamp()
