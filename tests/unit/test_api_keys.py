"""Tests for the API Key module: domain entity, service and routes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

from src.core.domain.permissions import AppStaffPermission, StaffPermission
from src.modules.api_keys.application.queries import KeyQuery
from src.modules.api_keys.application.service import ApiKeyService
from src.modules.api_keys.domain.entities import ApiKey
from src.modules.api_keys.domain.exceptions import ApiKeyNotFoundError
from src.modules.applications.domain.entities import Application, ApplicationStaff
from src.modules.users.domain.exceptions import UserNotFoundError
from tests.conftest import API, bearer

# ============================================
# Domain Entity Tests
# ============================================


def _key(**overrides) -> ApiKey:
    fields = {
        "application_id": "app-1",
        "user_id": "user-1",
        "created_by_user_id": "user-1",
        "lifetime": 3600,
    }
    fields.update(overrides)
    return ApiKey(**fields)


class TestApiKeyEntity:
    def test_defaults(self) -> None:
        key = _key()
        assert key.activated_at is None
        assert key.is_banned is False
        assert len(key.value) >= 40
        assert key.value != _key().value

    def test_never_activated_key_never_expires(self) -> None:
        far_future = datetime.now(UTC) + timedelta(days=365 * 100)
        assert _key(lifetime=0).is_expired(far_future) is False

    def test_expiry_boundary(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=UTC)
        key = _key(lifetime=60)
        key.activate(now=start)
        assert key.is_expired(start + timedelta(seconds=59)) is False
        assert key.is_expired(start + timedelta(seconds=60)) is True

    def test_activate_keeps_first_activation(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=UTC)
        key = _key()
        key.activate(now=start)
        key.activate(now=start + timedelta(days=1))
        assert key.activated_at == start

    def test_deactivate(self) -> None:
        key = _key()
        key.activate()
        key.deactivate()
        assert key.activated_at is None

    def test_negative_lifetime_rejected(self) -> None:
        with pytest.raises(ValueError):
            _key(lifetime=-1)


# ============================================
# Service Tests
# ============================================


@pytest.fixture
def service(api_key_repo, user_repo) -> ApiKeyService:
    return ApiKeyService(api_key_repo, user_repo)


@pytest.mark.anyio
class TestApiKeyService:
    async def test_subject_defaults_to_issuer(self, service: ApiKeyService) -> None:
        key = await service.create_key("app-1", created_by="u1", lifetime=60)
        assert key.user_id == "u1"
        assert key.created_by_user_id == "u1"
        assert key.activated_at is None

    async def test_create_for_other_user(
        self, service: ApiKeyService, create_user
    ) -> None:
        bob = await create_user("bob@example.com")
        key = await service.create_key(
            "app-1", created_by="u1", lifetime=60, user_id=bob.id, activate=True
        )
        assert key.user_id == bob.id
        assert key.activated_at is not None

    async def test_create_for_missing_user(self, service: ApiKeyService) -> None:
        with pytest.raises(UserNotFoundError):
            await service.create_key(
                "app-1", created_by="u1", lifetime=60, user_id="ghost"
            )

    async def test_keys_are_scoped_to_application(
        self, service: ApiKeyService
    ) -> None:
        key = await service.create_key("app-1", created_by="u1", lifetime=60)
        with pytest.raises(ApiKeyNotFoundError):
            await service.get_key("app-2", key.id)
        with pytest.raises(ApiKeyNotFoundError):
            await service.delete_key("app-2", key.id)
        assert (await service.get_key("app-1", key.id)).id == key.id

    async def test_list_filters(self, service: ApiKeyService) -> None:
        await service.create_key("app-1", created_by="u1", lifetime=60)
        banned = await service.create_key("app-1", created_by="u1", lifetime=60)
        await service.update_key("app-1", banned.id, is_banned=True)
        await service.create_key("app-2", created_by="u1", lifetime=60)

        items, total, pagination = await service.list_keys(
            "app-1", KeyQuery(is_banned=True)
        )
        assert total == 1
        assert items[0].id == banned.id
        assert pagination.limit == 10

    async def test_update_leaves_omitted_fields(self, service: ApiKeyService) -> None:
        key = await service.create_key(
            "app-1", created_by="u1", lifetime=60, activate=True
        )
        updated = await service.update_key("app-1", key.id, lifetime=120)
        assert updated.lifetime == 120
        assert updated.activated_at == key.activated_at
        assert updated.is_banned is False

        deactivated = await service.update_key("app-1", key.id, activated=False)
        assert deactivated.activated_at is None

    async def test_delete(self, service: ApiKeyService) -> None:
        key = await service.create_key("app-1", created_by="u1", lifetime=60)
        await service.delete_key("app-1", key.id)
        with pytest.raises(ApiKeyNotFoundError):
            await service.get_key("app-1", key.id)


# ============================================
# Route Tests
# ============================================


@pytest.fixture
async def app_with_owner(create_user, login, application_repo, staff_repo):
    owner = await create_user(
        "owner@example.com",
        is_staff=True,
        staff_permissions=[StaffPermission.CREATE_APPLICATION],
    )
    application = await application_repo.create(Application(name="billing"))
    await staff_repo.create(
        ApplicationStaff(
            application_id=application.id,
            user_id=owner.id,
            permissions=AppStaffPermission.get_all(),
        )
    )
    tokens = await login("owner@example.com")
    return application, owner, bearer(tokens["access_token"])


@pytest.mark.anyio
class TestApiKeyRoutes:
    async def test_create_returns_value_but_list_hides_it(
        self, async_client: AsyncClient, app_with_owner
    ) -> None:
        application, owner, headers = app_with_owner
        keys_url = f"{API}/applications/{application.id}/keys"

        created = await async_client.post(
            keys_url, json={"lifetime": 3600, "activate": True}, headers=headers
        )
        assert created.status_code == 201
        key = created.json()["data"]
        assert key["value"]
        assert key["user_id"] == owner.id
        assert key["is_expired"] is False

        listed = await async_client.get(keys_url, headers=headers)
        [row] = listed.json()["data"]["items"]
        assert row["id"] == key["id"]
        assert "value" not in row

        detail = await async_client.get(f"{keys_url}/{key['id']}", headers=headers)
        assert detail.json()["data"]["value"] == key["value"]

    async def test_lifetime_bounds(
        self, async_client: AsyncClient, app_with_owner
    ) -> None:
        application, _, headers = app_with_owner
        keys_url = f"{API}/applications/{application.id}/keys"
        for lifetime in (-1, 10 * 365 * 24 * 3600 + 1):
            response = await async_client.post(
                keys_url, json={"lifetime": lifetime}, headers=headers
            )
            assert response.status_code == 400

    async def test_update_and_delete(
        self, async_client: AsyncClient, app_with_owner
    ) -> None:
        application, _, headers = app_with_owner
        keys_url = f"{API}/applications/{application.id}/keys"
        key = (
            await async_client.post(keys_url, json={"lifetime": 60}, headers=headers)
        ).json()["data"]

        updated = await async_client.put(
            f"{keys_url}/{key['id']}", json={"is_banned": True}, headers=headers
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["is_banned"] is True
        assert updated.json()["data"]["lifetime"] == 60

        deleted = await async_client.delete(f"{keys_url}/{key['id']}", headers=headers)
        assert deleted.status_code == 204
        missing = await async_client.get(f"{keys_url}/{key['id']}", headers=headers)
        assert missing.status_code == 404

    async def test_key_from_other_application_is_not_found(
        self, async_client: AsyncClient, app_with_owner, application_repo, staff_repo
    ) -> None:
        application, owner, headers = app_with_owner
        other = await application_repo.create(Application(name="payments"))
        await staff_repo.create(
            ApplicationStaff(
                application_id=other.id,
                user_id=owner.id,
                permissions=[
                    AppStaffPermission.CREATE_KEY,
                    AppStaffPermission.READ_KEY,
                    AppStaffPermission.READ_KEY_DETAIL,
                ],
            )
        )
        key = (
            await async_client.post(
                f"{API}/applications/{application.id}/keys",
                json={"lifetime": 60},
                headers=headers,
            )
        ).json()["data"]

        response = await async_client.get(
            f"{API}/applications/{other.id}/keys/{key['id']}", headers=headers
        )
        assert response.status_code == 404

    async def test_read_key_without_detail_permission(
        self, async_client: AsyncClient, app_with_owner, create_user, login, staff_repo
    ) -> None:
        application, _, headers = app_with_owner
        keys_url = f"{API}/applications/{application.id}/keys"
        key = (
            await async_client.post(keys_url, json={"lifetime": 60}, headers=headers)
        ).json()["data"]

        viewer = await create_user("viewer@example.com")
        await staff_repo.create(
            ApplicationStaff(
                application_id=application.id,
                user_id=viewer.id,
                permissions=[AppStaffPermission.READ_KEY],
            )
        )
        viewer_headers = bearer((await login("viewer@example.com"))["access_token"])

        listed = await async_client.get(keys_url, headers=viewer_headers)
        assert listed.status_code == 200
        detail = await async_client.get(
            f"{keys_url}/{key['id']}", headers=viewer_headers
        )
        assert detail.status_code == 403
