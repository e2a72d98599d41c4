"""API Key application service."""

from src.core.domain.filters import Pagination
from src.core.infrastructure.logging import BusinessEvents
from src.modules.api_keys.application.queries import KeyQuery
from src.modules.api_keys.domain.entities import ApiKey
from src.modules.api_keys.domain.exceptions import ApiKeyNotFoundError
from src.modules.api_keys.domain.repository import ApiKeyRepository
from src.modules.users.domain.exceptions import UserNotFoundError
from src.modules.users.domain.repository import UserRepository


class ApiKeyService:
    """Application service for API Key management.

    所有操作都限定在单个应用内；跨应用访问 key 一律视为不存在。
    """

    def __init__(
        self, repository: ApiKeyRepository, user_repository: UserRepository
    ) -> None:
        self._repo = repository
        self._users = user_repository

    async def create_key(
        self,
        application_id: str,
        created_by: str,
        lifetime: int,
        user_id: str | None = None,
        activate: bool = False,
    ) -> ApiKey:
        """Issue a new key. The subject defaults to the issuer."""
        subject_id = user_id or created_by
        if subject_id != created_by and not await self._users.get_by_id(subject_id):
            raise UserNotFoundError(subject_id)

        api_key = ApiKey(
            application_id=application_id,
            user_id=subject_id,
            created_by_user_id=created_by,
            lifetime=lifetime,
        )
        if activate:
            api_key.activate()

        created = await self._repo.create(api_key)
        BusinessEvents.api_key_created(
            key_id=created.id,
            application_id=application_id,
            user_id=subject_id,
            created_by=created_by,
        )
        return created

    async def list_keys(
        self, application_id: str, query: KeyQuery
    ) -> tuple[list[ApiKey], int, Pagination]:
        pagination = query.pagination()
        items, total = await self._repo.list_by_application(
            application_id, query, pagination
        )
        return items, total, pagination

    async def get_key(self, application_id: str, key_id: str) -> ApiKey:
        api_key = await self._repo.get_in_application(application_id, key_id)
        if api_key is None:
            raise ApiKeyNotFoundError(key_id)
        return api_key

    async def update_key(
        self,
        application_id: str,
        key_id: str,
        lifetime: int | None = None,
        is_banned: bool | None = None,
        activated: bool | None = None,
    ) -> ApiKey:
        """Change lifetime, ban flag or activation; omitted fields stay as they are."""
        api_key = await self.get_key(application_id, key_id)
        if lifetime is not None:
            api_key.change_lifetime(lifetime)
        if is_banned is not None:
            api_key.ban(is_banned)
        if activated is True:
            api_key.activate()
        elif activated is False:
            api_key.deactivate()

        updated = await self._repo.update(api_key)
        BusinessEvents.api_key_changed(
            key_id=key_id, application_id=application_id, action="updated"
        )
        return updated

    async def delete_key(self, application_id: str, key_id: str) -> None:
        api_key = await self.get_key(application_id, key_id)
        await self._repo.delete(api_key)
        BusinessEvents.api_key_changed(
            key_id=key_id, application_id=application_id, action="deleted"
        )
