"""Application entity-model mappers."""

from src.core.domain.permissions import AppStaffPermission, parse_permissions
from src.core.infrastructure.database.mapper import BaseMapper
from src.modules.applications.domain.entities import Application, ApplicationStaff
from src.modules.applications.infrastructure.models import (
    ApplicationModel,
    ApplicationStaffModel,
)


class ApplicationMapper(BaseMapper[Application, ApplicationModel]):
    """Application entity-model mapper."""

    def to_domain(self, model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at,
            is_deleted=model.is_deleted,
        )

    def to_model(self, entity: Application) -> ApplicationModel:
        return ApplicationModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            is_deleted=entity.is_deleted,
        )


class ApplicationStaffMapper(BaseMapper[ApplicationStaff, ApplicationStaffModel]):
    """Application staff grant entity-model mapper."""

    def to_domain(self, model: ApplicationStaffModel) -> ApplicationStaff:
        return ApplicationStaff(
            id=model.id,
            application_id=model.application_id,
            user_id=model.user_id,
            permissions=sorted(
                parse_permissions(AppStaffPermission, model.permissions)
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
            is_deleted=model.is_deleted,
        )

    def to_model(self, entity: ApplicationStaff) -> ApplicationStaffModel:
        return ApplicationStaffModel(
            id=entity.id,
            application_id=entity.application_id,
            user_id=entity.user_id,
            permissions=[p.value for p in entity.permissions],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            is_deleted=entity.is_deleted,
        )
