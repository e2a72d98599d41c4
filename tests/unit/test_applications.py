"""Tests for the applications API and staff grants."""

import pytest
from httpx import AsyncClient

from src.core.domain.permissions import AppStaffPermission, StaffPermission
from tests.conftest import API, bearer

pytestmark = pytest.mark.anyio


@pytest.fixture
async def creator(create_user, login):
    user = await create_user(
        "creator@example.com",
        is_staff=True,
        staff_permissions=[StaffPermission.CREATE_APPLICATION],
    )
    tokens = await login("creator@example.com")
    return user, bearer(tokens["access_token"])


async def _create_app(client: AsyncClient, headers, name="billing", **extra) -> dict:
    response = await client.post(
        f"{API}/applications", json={"name": name, **extra}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateApplication:
    async def test_creator_receives_every_permission(
        self, async_client: AsyncClient, creator, staff_repo
    ) -> None:
        user, headers = creator
        app = await _create_app(async_client, headers, description="invoices")
        assert app["description"] == "invoices"

        grant = await staff_repo.get_grant(app["id"], user.id)
        assert set(grant.permissions) == set(AppStaffPermission)

        staff = await async_client.get(
            f"{API}/applications/{app['id']}/staff", headers=headers
        )
        assert staff.status_code == 200
        [row] = staff.json()["data"]["items"]
        assert row["user_id"] == user.id

    async def test_duplicate_name(self, async_client: AsyncClient, creator) -> None:
        _, headers = creator
        await _create_app(async_client, headers)
        response = await async_client.post(
            f"{API}/applications", json={"name": "billing"}, headers=headers
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "APPLICATION_NAME_EXISTS"

    async def test_name_is_reusable_after_delete(
        self, async_client: AsyncClient, creator
    ) -> None:
        _, headers = creator
        app = await _create_app(async_client, headers)
        await async_client.delete(f"{API}/applications/{app['id']}", headers=headers)
        await _create_app(async_client, headers)

    async def test_failed_creator_grant_is_internal_error(
        self, async_client: AsyncClient, creator, staff_repo
    ) -> None:
        _, headers = creator
        staff_repo.fail_on_create = True

        response = await async_client.post(
            f"{API}/applications", json={"name": "billing"}, headers=headers
        )
        assert response.status_code == 500
        assert response.json()["error"]["message"] == "An internal error occurred"

    async def test_requires_staff_permission(
        self, async_client: AsyncClient, create_user, login
    ) -> None:
        await create_user("alice@example.com")
        headers = bearer((await login("alice@example.com"))["access_token"])
        response = await async_client.post(
            f"{API}/applications", json={"name": "billing"}, headers=headers
        )
        assert response.status_code == 403


class TestReadAndUpdate:
    async def test_list_only_readable_applications(
        self, async_client: AsyncClient, creator, create_user, login
    ) -> None:
        _, headers = creator
        await _create_app(async_client, headers, name="billing")
        await _create_app(async_client, headers, name="payments")

        listed = await async_client.get(
            f"{API}/applications", params={"name": "bill"}, headers=headers
        )
        assert [a["name"] for a in listed.json()["data"]["items"]] == ["billing"]

        await create_user("alice@example.com")
        other = bearer((await login("alice@example.com"))["access_token"])
        empty = await async_client.get(f"{API}/applications", headers=other)
        assert empty.json()["data"]["total"] == 0

    async def test_update(self, async_client: AsyncClient, creator) -> None:
        _, headers = creator
        app = await _create_app(async_client, headers)
        response = await async_client.put(
            f"{API}/applications/{app['id']}",
            json={"description": "new"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["description"] == "new"
        assert response.json()["data"]["name"] == "billing"

    async def test_rename_conflict(self, async_client: AsyncClient, creator) -> None:
        _, headers = creator
        await _create_app(async_client, headers, name="billing")
        app = await _create_app(async_client, headers, name="payments")
        response = await async_client.put(
            f"{API}/applications/{app['id']}",
            json={"name": "billing"},
            headers=headers,
        )
        assert response.status_code == 409

    async def test_delete_soft_deletes_grants(
        self, async_client: AsyncClient, creator, staff_repo
    ) -> None:
        user, headers = creator
        app = await _create_app(async_client, headers)

        response = await async_client.delete(
            f"{API}/applications/{app['id']}", headers=headers
        )
        assert response.status_code == 204
        assert await staff_repo.get_grant(app["id"], user.id) is None

        again = await async_client.get(
            f"{API}/applications/{app['id']}", headers=headers
        )
        assert again.status_code == 403


class TestStaffGrants:
    async def test_add_update_remove(
        self, async_client: AsyncClient, creator, create_user, login
    ) -> None:
        _, headers = creator
        app = await _create_app(async_client, headers)
        bob = await create_user("bob@example.com", is_staff=True)
        bob_headers = bearer((await login("bob@example.com"))["access_token"])
        staff_url = f"{API}/applications/{app['id']}/staff"

        added = await async_client.post(
            staff_url,
            json={"user_id": bob.id, "permissions": ["ReadApplication"]},
            headers=headers,
        )
        assert added.status_code == 201
        assert added.json()["data"]["permissions"] == ["ReadApplication"]

        read = await async_client.get(
            f"{API}/applications/{app['id']}", headers=bob_headers
        )
        assert read.status_code == 200

        updated = await async_client.put(
            f"{staff_url}/{bob.id}",
            json={"permissions": ["ReadApplication", "UpdateApplication"]},
            headers=headers,
        )
        assert updated.status_code == 200
        renamed = await async_client.put(
            f"{API}/applications/{app['id']}",
            json={"name": "ledger"},
            headers=bob_headers,
        )
        assert renamed.status_code == 200

        removed = await async_client.delete(f"{staff_url}/{bob.id}", headers=headers)
        assert removed.status_code == 204
        denied = await async_client.get(
            f"{API}/applications/{app['id']}", headers=bob_headers
        )
        assert denied.status_code == 403

        regranted = await async_client.post(
            staff_url, json={"user_id": bob.id, "permissions": []}, headers=headers
        )
        assert regranted.status_code == 201

    async def test_duplicate_grant(
        self, async_client: AsyncClient, creator
    ) -> None:
        user, headers = creator
        app = await _create_app(async_client, headers)
        response = await async_client.post(
            f"{API}/applications/{app['id']}/staff",
            json={"user_id": user.id, "permissions": []},
            headers=headers,
        )
        assert response.status_code == 409

    async def test_grant_to_missing_user(
        self, async_client: AsyncClient, creator
    ) -> None:
        _, headers = creator
        app = await _create_app(async_client, headers)
        response = await async_client.post(
            f"{API}/applications/{app['id']}/staff",
            json={"user_id": "nobody", "permissions": []},
            headers=headers,
        )
        assert response.status_code == 404

    async def test_remove_missing_grant(
        self, async_client: AsyncClient, creator
    ) -> None:
        _, headers = creator
        app = await _create_app(async_client, headers)
        response = await async_client.delete(
            f"{API}/applications/{app['id']}/staff/nobody", headers=headers
        )
        assert response.status_code == 404

    async def test_unknown_permission_is_rejected(
        self, async_client: AsyncClient, creator, create_user
    ) -> None:
        _, headers = creator
        app = await _create_app(async_client, headers)
        bob = await create_user("bob@example.com")
        response = await async_client.post(
            f"{API}/applications/{app['id']}/staff",
            json={"user_id": bob.id, "permissions": ["LaunchMissiles"]},
            headers=headers,
        )
        assert response.status_code == 400
