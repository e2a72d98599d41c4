"""OAuth2-style token claims."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import settings
from src.core.domain.exceptions import TokenExpiredError, TokenNotYetActiveError
from src.core.domain.permissions import StaffPermission


class TokenKind(StrEnum):
    """Which half of a token pair a claims object belongs to."""

    ACCESS = "access_token"
    REFRESH = "refresh_token"


def _unix_now() -> int:
    return int(datetime.now(UTC).timestamp())


class TokenClaims(BaseModel):
    """Claims carried inside a signed bearer token.

    字段使用描述性名称，序列化时使用 JWT 惯用的短名（iat/nbf/exp/jti...）。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    subject_id: str = Field(..., alias="id", description="用户 ID")
    is_staff: bool = Field(default=False, alias="is_staff")
    staff_permissions: tuple[StaffPermission, ...] = Field(
        default=(), alias="staff_permissions"
    )
    issued_at: int = Field(..., alias="iat")
    not_before: int = Field(..., alias="nbf")
    expires_at: int = Field(..., alias="exp")
    token_id: str = Field(..., alias="jti")
    paired_token_id: str = Field(..., alias="sub_jti")
    token_kind: TokenKind = Field(..., alias="oauth_token_type")

    @property
    def life_sec(self) -> int:
        """Total lifetime in seconds, used as the cache TTL."""
        return self.expires_at - self.not_before

    @property
    def is_access(self) -> bool:
        return self.token_kind == TokenKind.ACCESS

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JWT payload shape."""
        return self.model_dump(mode="json", by_alias=True)

    def validate_date_range(self, now: int | None = None) -> None:
        """Check ``not_before <= now <= expires_at``.

        Raises:
            TokenNotYetActiveError: nbf 在未来
            TokenExpiredError: exp 已过
        """
        current = _unix_now() if now is None else now
        if self.not_before > current:
            raise TokenNotYetActiveError()
        if self.expires_at < current:
            raise TokenExpiredError()


def new_claims(
    subject_id: str,
    is_staff: bool = False,
    staff_permissions: tuple[StaffPermission, ...] | list[StaffPermission] = (),
    now: int | None = None,
) -> tuple[TokenClaims, TokenClaims]:
    """Create a linked (access, refresh) claims pair.

    Each token references its sibling through ``paired_token_id`` so that
    revoking either one can revoke both.
    """
    issued_at = _unix_now() if now is None else now
    access_id = str(uuid4())
    refresh_id = str(uuid4())
    permissions = tuple(staff_permissions)

    access = TokenClaims(
        subject_id=subject_id,
        is_staff=is_staff,
        staff_permissions=permissions,
        issued_at=issued_at,
        not_before=issued_at,
        expires_at=issued_at + settings.ACCESS_TOKEN_LIFETIME_SEC,
        token_id=access_id,
        paired_token_id=refresh_id,
        token_kind=TokenKind.ACCESS,
    )
    refresh = TokenClaims(
        subject_id=subject_id,
        is_staff=is_staff,
        staff_permissions=permissions,
        issued_at=issued_at,
        not_before=issued_at,
        expires_at=issued_at + settings.REFRESH_TOKEN_LIFETIME_SEC,
        token_id=refresh_id,
        paired_token_id=access_id,
        token_kind=TokenKind.REFRESH,
    )
    return access, refresh
