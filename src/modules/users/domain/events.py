"""User domain events."""

from enum import StrEnum

from pydantic import Field

from src.core.domain.events import DomainEvent
from src.modules.users.domain.entities import User


class UserEventType(StrEnum):
    """Value of the ``x-event`` header on published user events."""

    CREATE = "user-create"
    UPDATE = "user-update"
    DELETE = "user-delete"


class UserMutatedEvent(DomainEvent):
    """Raised once per persisted user mutation that other services care about."""

    user_id: str = Field(..., description="用户ID")
    name: str = Field(..., description="用户名")
    is_deleted: bool = Field(..., description="是否已删除")
    mutation: UserEventType = Field(..., description="变更类型")

    @classmethod
    def of(cls, user: User, mutation: UserEventType) -> "UserMutatedEvent":
        return cls(
            user_id=user.id,
            name=user.name,
            is_deleted=user.is_deleted,
            mutation=mutation,
        )

    def payload(self) -> dict[str, str | bool]:
        """Message body: ``{"id", "name", "is_deleted"}``."""
        return {"id": self.user_id, "name": self.name, "is_deleted": self.is_deleted}


def detect_user_mutation(before: User | None, after: User) -> UserEventType | None:
    """Decide which event a persist of ``after`` raises.

    - 新建：CREATE
    - is_deleted 由 False 变为 True：DELETE
    - name 变化：UPDATE
    - 其它字段变化（密码、权限等）：不发事件
    """
    if before is None:
        return UserEventType.CREATE
    if after.is_deleted and not before.is_deleted:
        return UserEventType.DELETE
    if after.name != before.name:
        return UserEventType.UPDATE
    return None
