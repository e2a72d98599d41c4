"""User entity-model mappers."""

from src.core.domain.permissions import StaffPermission, parse_permissions
from src.core.infrastructure.database.mapper import BaseMapper
from src.modules.users.domain.entities import User
from src.modules.users.infrastructure.models import UserModel


class UserMapper(BaseMapper[User, UserModel]):
    """User entity-model mapper."""

    def to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            birthday=model.birthday,
            is_staff=model.is_staff,
            staff_permissions=sorted(
                parse_permissions(StaffPermission, model.staff_permissions)
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
            is_deleted=model.is_deleted,
        )

    def to_model(self, entity: User) -> UserModel:
        return UserModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            password_hash=entity.password_hash,
            birthday=entity.birthday,
            is_staff=entity.is_staff,
            staff_permissions=[p.value for p in entity.staff_permissions],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            is_deleted=entity.is_deleted,
        )
