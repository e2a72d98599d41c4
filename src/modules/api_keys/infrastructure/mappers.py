"""API Key entity-model mappers."""

from src.core.infrastructure.database.mapper import BaseMapper
from src.modules.api_keys.domain.entities import ApiKey
from src.modules.api_keys.infrastructure.models import ApiKeyModel


class ApiKeyMapper(BaseMapper[ApiKey, ApiKeyModel]):
    """API Key entity-model mapper."""

    def to_domain(self, model: ApiKeyModel) -> ApiKey:
        return ApiKey(
            id=model.id,
            value=model.value,
            activated_at=model.activated_at,
            lifetime=model.lifetime,
            is_banned=model.is_banned,
            application_id=model.application_id,
            user_id=model.user_id,
            created_by_user_id=model.created_by_user_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            is_deleted=model.is_deleted,
        )

    def to_model(self, entity: ApiKey) -> ApiKeyModel:
        return ApiKeyModel(
            id=entity.id,
            value=entity.value,
            activated_at=entity.activated_at,
            lifetime=entity.lifetime,
            is_banned=entity.is_banned,
            application_id=entity.application_id,
            user_id=entity.user_id,
            created_by_user_id=entity.created_by_user_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            is_deleted=entity.is_deleted,
        )
