"""Application-level security dependencies.

Defines auth dependencies without importing infrastructure.
The actual implementations are injected via FastAPI dependency_overrides in main.py.

守卫链顺序：认证（401）→ staff 权限（403）→ 应用权限（403）。
任一环节失败即终止，后续环节不会执行。
"""

from collections.abc import Callable, Coroutine, Iterable
from dataclasses import dataclass
from typing import Any, NoReturn

from fastapi import Depends, Path

from src.core.domain.exceptions import AuthorizationError
from src.core.domain.permissions import (
    AppStaffPermission,
    StaffPermission,
    satisfies,
)
from src.core.domain.ports.application_access import ApplicationPermissionResolver
from src.core.domain.tokens import TokenClaims
from src.core.infrastructure.logging import BusinessEvents


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of the current request."""

    user_id: str
    is_staff: bool
    staff_permissions: frozenset[StaffPermission]
    token_id: str
    paired_token_id: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "Principal":
        return cls(
            user_id=claims.subject_id,
            is_staff=claims.is_staff,
            staff_permissions=frozenset(claims.staff_permissions),
            token_id=claims.token_id,
            paired_token_id=claims.paired_token_id,
        )


@dataclass(frozen=True)
class ApplicationAccess:
    """A principal together with its grant on one application."""

    principal: Principal
    application_id: str
    permissions: frozenset[AppStaffPermission]


async def get_current_claims() -> TokenClaims:
    """Get the validated access token claims of the current request."""
    _missing_dependency("get_current_claims")


async def get_current_session_claims() -> TokenClaims:
    """Get the validated claims of the presented access or refresh token."""
    _missing_dependency("get_current_session_claims")


async def get_current_principal(
    claims: TokenClaims = Depends(get_current_claims),
) -> Principal:
    """Get the authenticated principal."""
    return Principal.from_claims(claims)


async def get_application_permission_resolver() -> ApplicationPermissionResolver:
    _missing_dependency("ApplicationPermissionResolver")


def _names(permissions: Iterable[Any]) -> list[str]:
    return sorted(str(p) for p in permissions)


def require_staff_permissions(
    *,
    all_of: Iterable[StaffPermission] = (),
    any_of: Iterable[StaffPermission] = (),
) -> Callable[..., Coroutine[Any, Any, Principal]]:
    """FastAPI dependency factory requiring staff status and staff permissions.

    非 staff 用户一律拒绝，即使所需权限集合为空。
    """
    required_all = tuple(all_of)
    required_any = tuple(any_of)

    async def _check_staff(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        if not principal.is_staff or not satisfies(
            principal.staff_permissions, all_of=required_all, any_of=required_any
        ):
            BusinessEvents.permission_denied(
                user_id=principal.user_id,
                required=_names(required_all + required_any),
            )
            raise AuthorizationError()
        return principal

    return _check_staff


def require_app_permissions(
    *,
    all_of: Iterable[AppStaffPermission] = (),
    any_of: Iterable[AppStaffPermission] = (),
) -> Callable[..., Coroutine[Any, Any, ApplicationAccess]]:
    """FastAPI dependency factory requiring a grant on the ``application_id`` path parameter.

    权限只来自应用授权记录，平台 staff 身份不会绕过该检查。
    """
    required_all = tuple(all_of)
    required_any = tuple(any_of)

    async def _check_application(
        application_id: str = Path(..., description="应用 ID"),
        principal: Principal = Depends(get_current_principal),
        resolver: ApplicationPermissionResolver = Depends(
            get_application_permission_resolver
        ),
    ) -> ApplicationAccess:
        held = await resolver.get_permissions(application_id, principal.user_id)
        if held is None or not satisfies(
            held, all_of=required_all, any_of=required_any
        ):
            BusinessEvents.permission_denied(
                user_id=principal.user_id,
                required=_names(required_all + required_any),
                application_id=application_id,
            )
            raise AuthorizationError()
        return ApplicationAccess(
            principal=principal,
            application_id=application_id,
            permissions=held,
        )

    return _check_application
