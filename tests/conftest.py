"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，仓储与缓存均为内存实现）

使用方法：
    # 运行所有测试
    pytest

    # 只运行单元测试
    pytest tests/unit/
"""

import fnmatch
import operator
from collections.abc import AsyncGenerator, Callable
from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.core.config import settings
from src.core.domain.events import EventBus
from src.core.domain.filters import FilterOperator, FilterQuery, Pagination
from src.core.domain.permissions import AppStaffPermission, StaffPermission
from src.core.infrastructure.security.hasher import BcryptPasswordHasher
from src.core.infrastructure.security.jwt import JWTTokenCodec
from src.modules.api_keys.domain.entities import ApiKey
from src.modules.api_keys.domain.repository import ApiKeyRepository
from src.modules.applications.domain.entities import Application, ApplicationStaff
from src.modules.applications.domain.exceptions import StaffGrantExistsError
from src.modules.applications.domain.repository import (
    ApplicationRepository,
    ApplicationStaffRepository,
)
from src.modules.applications.infrastructure.access import GrantPermissionResolver
from src.modules.users.domain.entities import User
from src.modules.users.domain.events import UserMutatedEvent, detect_user_mutation
from src.modules.users.domain.ports import UserEventQueue
from src.modules.users.domain.repository import UserRepository

API = settings.API_V1_STR


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 内存过滤（与 SQL 编译结果语义一致）
# ============================================


def _like(value: Any, pattern: str) -> bool:
    return fnmatch.fnmatchcase(str(value), pattern.replace("%", "*").replace("_", "?"))


_MATCHERS: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQ: operator.eq,
    FilterOperator.NE: operator.ne,
    FilterOperator.LIKE: _like,
    FilterOperator.NOT_LIKE: lambda v, p: not _like(v, p),
    FilterOperator.IN: lambda v, values: v in values,
    FilterOperator.NOT_IN: lambda v, values: v not in values,
    FilterOperator.GT: operator.gt,
    FilterOperator.LT: operator.lt,
    FilterOperator.GTE: operator.ge,
    FilterOperator.LTE: operator.le,
}


def matches(entity: Any, query: FilterQuery) -> bool:
    return all(
        _MATCHERS[rule.operator](getattr(entity, rule.target_column), value)
        for rule, value in query.active_filters()
    )


def paginate(items: list[Any], pagination: Pagination) -> tuple[list[Any], int]:
    ordered = sorted(items, key=lambda e: e.created_at, reverse=True)
    start = pagination.offset
    return ordered[start : start + pagination.limit], len(ordered)


class _InMemoryRepository:
    """Dict-backed base for the in-memory repositories below."""

    def __init__(self) -> None:
        self.items: dict[str, Any] = {}

    def _live(self) -> list[Any]:
        return [e for e in self.items.values() if not e.is_deleted]

    async def get_by_id(self, entity_id: str) -> Any | None:
        entity = self.items.get(entity_id)
        if entity and not entity.is_deleted:
            return entity.model_copy(deep=True)
        return None

    async def create(self, entity: Any) -> Any:
        self.items[entity.id] = entity.model_copy(deep=True)
        return entity

    async def update(self, entity: Any) -> Any:
        self.items[entity.id] = entity.model_copy(deep=True)
        return entity

    async def delete(self, entity: Any) -> bool:
        entity_id = entity if isinstance(entity, str) else entity.id
        stored = self.items.get(entity_id)
        if stored is None or stored.is_deleted:
            return False
        stored.mark_as_deleted()
        return True

    async def find_many(
        self, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[Any], int]:
        return paginate([e for e in self._live() if matches(e, query)], pagination)


# ============================================
# 内存仓储
# ============================================


class InMemoryUserRepository(_InMemoryRepository, UserRepository):
    """Publishes UserMutatedEvent on every write; there is no transaction to wait for."""

    def __init__(self, event_bus: EventBus) -> None:
        super().__init__()
        self.event_bus = event_bus

    async def get_by_email(self, email: str) -> User | None:
        for user in self._live():
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def find_many_by_kind(
        self, query: FilterQuery, pagination: Pagination, is_staff: bool
    ) -> tuple[list[User], int]:
        users = [u for u in self._live() if u.is_staff == is_staff and matches(u, query)]
        return paginate(users, pagination)

    async def create(self, user: User) -> User:
        await super().create(user)
        await self._publish(None, user)
        return user

    async def update(self, user: User) -> User:
        before = self.items.get(user.id)
        await super().update(user)
        await self._publish(before, user)
        return user

    async def delete(self, user: User | str) -> bool:
        entity = await self.get_by_id(user) if isinstance(user, str) else user
        if entity is None:
            return False
        entity.mark_as_deleted()
        await self.update(entity)
        return True

    async def _publish(self, before: User | None, after: User) -> None:
        mutation = detect_user_mutation(before, after)
        if mutation is not None:
            await self.event_bus.publish(UserMutatedEvent.of(after, mutation))


class InMemoryApplicationRepository(_InMemoryRepository, ApplicationRepository):
    def __init__(self, staff_repository: "InMemoryApplicationStaffRepository") -> None:
        super().__init__()
        self.staff_repository = staff_repository

    async def exists_by_name(self, name: str) -> bool:
        return any(a.name == name for a in self._live())

    async def find_many_for_user(
        self,
        query: FilterQuery,
        pagination: Pagination,
        user_id: str,
        permission: AppStaffPermission,
    ) -> tuple[list[Application], int]:
        readable = {
            g.application_id
            for g in self.staff_repository._live()
            if g.user_id == user_id and permission in g.permissions
        }
        apps = [a for a in self._live() if a.id in readable and matches(a, query)]
        return paginate(apps, pagination)


class InMemoryApplicationStaffRepository(
    _InMemoryRepository, ApplicationStaffRepository
):
    def __init__(self) -> None:
        super().__init__()
        self.fail_on_create = False

    async def create(self, grant: ApplicationStaff) -> ApplicationStaff:
        if self.fail_on_create:
            raise RuntimeError("grant store unavailable")
        if any(
            g.application_id == grant.application_id and g.user_id == grant.user_id
            for g in self.items.values()
        ):
            raise StaffGrantExistsError(grant.application_id, grant.user_id)
        return await super().create(grant)

    async def get_grant(
        self, application_id: str, user_id: str
    ) -> ApplicationStaff | None:
        for grant in self._live():
            if grant.application_id == application_id and grant.user_id == user_id:
                return grant.model_copy(deep=True)
        return None

    async def list_by_application(
        self, application_id: str, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[ApplicationStaff], int]:
        grants = [
            g
            for g in self._live()
            if g.application_id == application_id and matches(g, query)
        ]
        return paginate(grants, pagination)

    async def remove_grant(self, application_id: str, user_id: str) -> bool:
        grant = await self.get_grant(application_id, user_id)
        if grant is None:
            return False
        del self.items[grant.id]
        return True

    async def delete_by_application(self, application_id: str) -> int:
        grants = [g for g in self._live() if g.application_id == application_id]
        for grant in grants:
            grant.mark_as_deleted()
        return len(grants)


class InMemoryApiKeyRepository(_InMemoryRepository, ApiKeyRepository):
    async def get_in_application(
        self, application_id: str, key_id: str
    ) -> ApiKey | None:
        key = await self.get_by_id(key_id)
        if key and key.application_id == application_id:
            return key
        return None

    async def list_by_application(
        self, application_id: str, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[ApiKey], int]:
        keys = [
            k
            for k in self._live()
            if k.application_id == application_id and matches(k, query)
        ]
        return paginate(keys, pagination)


# ============================================
# 内存缓存 / 事件队列
# ============================================


class InMemoryTokenCache:
    """Token registry stand-in for Redis (TTL is recorded, not enforced)."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttl: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.data[key] = value
        self.ttl[key] = ex
        return True

    async def exists(self, *keys: str) -> int:
        return sum(1 for key in keys if key in self.data)

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                self.ttl.pop(key, None)
                removed += 1
        return removed

    async def scan_keys(self, pattern: str) -> list[str]:
        return [key for key in self.data if fnmatch.fnmatchcase(key, pattern)]


class RecordingUserEventQueue(UserEventQueue):
    def __init__(self) -> None:
        self.events: list[UserMutatedEvent] = []

    async def enqueue(self, event: UserMutatedEvent) -> None:
        self.events.append(event)


# ============================================
# Fixtures
# ============================================


@pytest.fixture(scope="session")
def hasher() -> BcryptPasswordHasher:
    """bcrypt 最低成本，加快测试。"""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(secret_key="test-secret-key-for-testing-only")


@pytest.fixture
def token_cache() -> InMemoryTokenCache:
    return InMemoryTokenCache()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def event_queue(event_bus: EventBus) -> RecordingUserEventQueue:
    from src.modules.users.application.handlers import PublishUserMutationHandler

    queue = RecordingUserEventQueue()
    event_bus.subscribe(UserMutatedEvent, PublishUserMutationHandler(queue))
    return queue


@pytest.fixture
def user_repo(event_bus: EventBus) -> InMemoryUserRepository:
    return InMemoryUserRepository(event_bus)


@pytest.fixture
def staff_repo() -> InMemoryApplicationStaffRepository:
    return InMemoryApplicationStaffRepository()


@pytest.fixture
def application_repo(
    staff_repo: InMemoryApplicationStaffRepository,
) -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository(staff_repo)


@pytest.fixture
def api_key_repo() -> InMemoryApiKeyRepository:
    return InMemoryApiKeyRepository()


@pytest.fixture
def create_user(
    user_repo: InMemoryUserRepository, hasher: BcryptPasswordHasher
) -> Callable[..., Any]:
    """Seed a user directly into the repository."""

    async def _create(
        email: str,
        password: str = "secret123",
        name: str = "Test User",
        is_staff: bool = False,
        staff_permissions: list[StaffPermission] | None = None,
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=hasher.hash(password),
            birthday=date(1990, 1, 1),
            is_staff=is_staff,
            staff_permissions=staff_permissions or [],
        )
        return await user_repo.create(user)

    return _create


@pytest.fixture
async def async_client(
    codec: JWTTokenCodec,
    token_cache: InMemoryTokenCache,
    hasher: BcryptPasswordHasher,
    user_repo: InMemoryUserRepository,
    application_repo: InMemoryApplicationRepository,
    staff_repo: InMemoryApplicationStaffRepository,
    api_key_repo: InMemoryApiKeyRepository,
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（所有存储依赖替换为内存实现）。"""
    from main import app
    from src.core.application import dependencies as core_app_deps
    from src.core.application import security as app_security
    from src.modules.api_keys.application import dependencies as api_keys_app_deps
    from src.modules.applications.application import dependencies as apps_app_deps
    from src.modules.users.application import dependencies as users_app_deps

    original = dict(app.dependency_overrides)
    overrides = {
        core_app_deps.get_token_codec: lambda: codec,
        core_app_deps.get_token_cache: lambda: token_cache,
        core_app_deps.get_password_hasher: lambda: hasher,
        users_app_deps.get_user_repository: lambda: user_repo,
        apps_app_deps.get_application_repository: lambda: application_repo,
        apps_app_deps.get_application_staff_repository: lambda: staff_repo,
        api_keys_app_deps.get_api_key_repository: lambda: api_key_repo,
        app_security.get_application_permission_resolver: lambda: (
            GrantPermissionResolver(application_repo, staff_repo)
        ),
    }
    app.dependency_overrides.update(overrides)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original)


@pytest.fixture
def login(async_client: AsyncClient) -> Callable[..., Any]:
    """Log in through the API and return the token response body."""

    async def _login(email: str, password: str = "secret123") -> dict[str, Any]:
        response = await async_client.post(
            f"{API}/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
