"""Tests for credential extraction and the authorization guard chain."""

import pytest
from httpx import AsyncClient

from src.core.domain.exceptions import (
    MalformedAuthHeaderError,
    MissingAuthTokenError,
)
from src.core.domain.permissions import AppStaffPermission, StaffPermission
from src.core.infrastructure.security.guard import extract_bearer_token
from src.modules.applications.domain.entities import Application, ApplicationStaff
from tests.conftest import API, bearer


class TestExtractBearerToken:
    def test_extracts_token(self) -> None:
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing(self, header) -> None:
        with pytest.raises(MissingAuthTokenError) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.reason == "missing_token"

    @pytest.mark.parametrize(
        "header", ["Basic abc", "bearer abc", "Bearerabc", "Bearer ", "Token abc"]
    )
    def test_malformed(self, header) -> None:
        with pytest.raises(MalformedAuthHeaderError) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.reason == "malformed_header"


@pytest.mark.anyio
class TestGuardChain:
    async def test_missing_header_is_401_with_challenge(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.get(f"{API}/users/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json() == {
            "error": {
                "code": "UNAUTHORIZED",
                "message": "Could not validate credentials",
            }
        }

    async def test_all_failure_kinds_look_identical(
        self, async_client: AsyncClient, create_user, login
    ) -> None:
        await create_user("alice@example.com")
        tokens = await login("alice@example.com")

        bodies = []
        for headers in (
            {"Authorization": "Token abc"},
            bearer("garbage"),
            bearer(tokens["refresh_token"]),
        ):
            response = await async_client.get(f"{API}/users/me", headers=headers)
            assert response.status_code == 401
            bodies.append(response.json())
        assert bodies[0] == bodies[1] == bodies[2]

    async def test_non_staff_rejected_from_staff_routes(
        self, async_client: AsyncClient, create_user, login
    ) -> None:
        await create_user("bob@example.com")
        tokens = await login("bob@example.com")
        response = await async_client.get(
            f"{API}/users", headers=bearer(tokens["access_token"])
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    async def test_staff_without_permission_rejected(
        self, async_client: AsyncClient, create_user, login
    ) -> None:
        await create_user(
            "staff@example.com",
            is_staff=True,
            staff_permissions=[StaffPermission.CREATE_STAFF_USER],
        )
        tokens = await login("staff@example.com")
        response = await async_client.post(
            f"{API}/applications",
            json={"name": "app"},
            headers=bearer(tokens["access_token"]),
        )
        assert response.status_code == 403

    async def test_read_only_grant_cannot_update(
        self,
        async_client: AsyncClient,
        create_user,
        login,
        application_repo,
        staff_repo,
    ) -> None:
        user = await create_user("reader@example.com", is_staff=True)
        application = await application_repo.create(Application(name="billing"))
        await staff_repo.create(
            ApplicationStaff(
                application_id=application.id,
                user_id=user.id,
                permissions=[AppStaffPermission.READ_APPLICATION],
            )
        )
        headers = bearer((await login("reader@example.com"))["access_token"])

        listed = await async_client.get(f"{API}/applications", headers=headers)
        assert listed.status_code == 200
        assert [a["id"] for a in listed.json()["data"]["items"]] == [application.id]

        updated = await async_client.put(
            f"{API}/applications/{application.id}",
            json={"name": "renamed"},
            headers=headers,
        )
        assert updated.status_code == 403
        assert (await application_repo.get_by_id(application.id)).name == "billing"

    async def test_platform_staff_does_not_bypass_application_grant(
        self,
        async_client: AsyncClient,
        create_user,
        login,
        application_repo,
    ) -> None:
        await create_user(
            "root@example.com",
            is_staff=True,
            staff_permissions=list(StaffPermission),
        )
        application = await application_repo.create(Application(name="payments"))
        headers = bearer((await login("root@example.com"))["access_token"])

        response = await async_client.get(
            f"{API}/applications/{application.id}", headers=headers
        )
        assert response.status_code == 403

    async def test_authentication_runs_before_authorization(
        self, async_client: AsyncClient, application_repo
    ) -> None:
        application = await application_repo.create(Application(name="ops"))
        response = await async_client.delete(f"{API}/applications/{application.id}")
        assert response.status_code == 401
