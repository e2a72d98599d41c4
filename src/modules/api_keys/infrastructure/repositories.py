"""API Key repository implementations."""

from sqlmodel import col

from src.core.domain.filters import FilterQuery, Pagination
from src.core.infrastructure.database.filters import compile_filter
from src.core.infrastructure.database.repository import SQLModelRepository
from src.modules.api_keys.domain.entities import ApiKey
from src.modules.api_keys.domain.repository import ApiKeyRepository
from src.modules.api_keys.infrastructure.models import ApiKeyModel


class PostgreSQLApiKeyRepository(SQLModelRepository[ApiKey, ApiKeyModel], ApiKeyRepository):
    """PostgreSQL API Key repository implementation."""

    model = ApiKeyModel

    async def get_in_application(
        self, application_id: str, key_id: str
    ) -> ApiKey | None:
        return await self.find_one(
            col(ApiKeyModel.id) == key_id,
            col(ApiKeyModel.application_id) == application_id,
        )

    async def list_by_application(
        self, application_id: str, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[ApiKey], int]:
        statement = self._select().where(
            col(ApiKeyModel.application_id) == application_id,
            *compile_filter(query, ApiKeyModel),
        )
        return await self._paginate(statement, pagination)
