"""API Key repository interfaces."""

from abc import abstractmethod

from src.core.domain.filters import FilterQuery, Pagination
from src.core.domain.repository import BaseRepository
from src.modules.api_keys.domain.entities import ApiKey


class ApiKeyRepository(BaseRepository[ApiKey]):
    """API Key repository interface."""

    @abstractmethod
    async def get_in_application(
        self, application_id: str, key_id: str
    ) -> ApiKey | None:
        """Get a live key only if it belongs to ``application_id``."""
        pass

    @abstractmethod
    async def list_by_application(
        self, application_id: str, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[ApiKey], int]:
        pass
