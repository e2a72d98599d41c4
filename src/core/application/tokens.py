"""Token lifecycle: issue, validate, revoke and introspect.

校验顺序固定：签名/结构（codec，无 I/O）→ 时间范围（无 I/O）→ 缓存存在性（I/O）。
缓存只记录 token 是否仍然有效（未被撤销），claims 内容以签名 token 为准。

validate / introspect 对缓存故障一律按“未认证 / inactive”处理，不向上抛出。
"""

import json
from dataclasses import dataclass

from loguru import logger
from pydantic import BaseModel, ConfigDict

from src.core.domain.exceptions import (
    AuthenticationError,
    TokenRevokedError,
    WrongTokenKindError,
)
from src.core.domain.permissions import StaffPermission
from src.core.domain.ports.cache import TokenCache
from src.core.domain.ports.token import TokenCodec
from src.core.domain.tokens import TokenClaims, TokenKind, new_claims
from src.core.infrastructure.logging import BusinessEvents
from src.core.infrastructure.redis.keys import RedisKeys


@dataclass(frozen=True)
class IssuedTokens:
    """Signed token pair returned to the client after login."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


class IntrospectionResult(BaseModel):
    """Token introspection result.

    仅在 active=True 时填充元数据。
    """

    model_config = ConfigDict(frozen=True)

    active: bool
    scope: str | None = None
    client_id: str | None = None
    username: str | None = None
    token_type: str | None = None
    exp: int | None = None
    iat: int | None = None
    nbf: int | None = None
    sub: str | None = None
    aud: str | None = None
    iss: str | None = None
    jti: str | None = None

    @classmethod
    def inactive(cls) -> "IntrospectionResult":
        return cls(active=False)

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "IntrospectionResult":
        return cls(
            active=True,
            token_type=claims.token_kind.value,
            exp=claims.expires_at,
            iat=claims.issued_at,
            nbf=claims.not_before,
            sub=claims.subject_id,
            jti=claims.token_id,
        )


class TokenLifecycleManager:
    """Coordinates the token codec with the cache-backed token registry."""

    def __init__(self, codec: TokenCodec, cache: TokenCache) -> None:
        self.codec = codec
        self.cache = cache
        self.logger = logger

    async def issue(
        self,
        subject_id: str,
        is_staff: bool = False,
        staff_permissions: list[StaffPermission] | tuple[StaffPermission, ...] = (),
    ) -> IssuedTokens:
        """Create, register and sign a fresh (access, refresh) pair.

        两个缓存写入相互独立：若 refresh 写入失败，access 仍然可用直到自然过期。
        """
        access, refresh = new_claims(subject_id, is_staff, staff_permissions)
        await self._register(access)
        await self._register(refresh)
        return IssuedTokens(
            access_token=self.codec.encode(access),
            refresh_token=self.codec.encode(refresh),
            expires_in=access.life_sec,
        )

    async def validate(
        self, token: str, kind: TokenKind | None = TokenKind.ACCESS
    ) -> TokenClaims:
        """Return the claims of a live token.

        Raises:
            AuthenticationError: 任一校验失败（具体子类区分原因）
        """
        claims = self.codec.decode(token)
        if kind is not None and claims.token_kind != kind:
            raise WrongTokenKindError()
        claims.validate_date_range()
        if not await self._is_registered(claims):
            raise TokenRevokedError()
        return claims

    async def revoke(self, claims: TokenClaims) -> int:
        """Revoke a token together with its sibling."""
        removed = await self.cache.delete(
            RedisKeys.user_token(claims.subject_id, claims.token_id),
            RedisKeys.user_token(claims.subject_id, claims.paired_token_id),
        )
        BusinessEvents.tokens_revoked(
            user_id=claims.subject_id, token_id=claims.token_id, count=removed
        )
        return removed

    async def revoke_all(self, user_id: str) -> int:
        """Revoke every registered token of a user (all sessions)."""
        keys = await self.cache.scan_keys(RedisKeys.user_token_pattern(user_id))
        if not keys:
            return 0
        removed = await self.cache.delete(*keys)
        BusinessEvents.tokens_revoked(user_id=user_id, token_id=None, count=removed)
        return removed

    async def introspect(
        self, token: str, token_type_hint: TokenKind | None = None
    ) -> IntrospectionResult:
        """Report whether a token is active; never raises for bad tokens."""
        try:
            claims = self.codec.decode(token)
            if token_type_hint is not None and claims.token_kind != token_type_hint:
                return IntrospectionResult.inactive()
            claims.validate_date_range()
            if not await self._is_registered(claims):
                return IntrospectionResult.inactive()
        except AuthenticationError as e:
            self.logger.debug(f"Introspection rejected token: {e.reason}")
            return IntrospectionResult.inactive()
        return IntrospectionResult.from_claims(claims)

    async def _register(self, claims: TokenClaims) -> None:
        await self.cache.set(
            RedisKeys.user_token(claims.subject_id, claims.token_id),
            json.dumps(claims.to_payload()),
            ex=claims.life_sec,
        )

    async def _is_registered(self, claims: TokenClaims) -> bool:
        key = RedisKeys.user_token(claims.subject_id, claims.token_id)
        try:
            return await self.cache.exists(key) > 0
        except Exception as e:
            # 缓存不可用时按已撤销处理
            self.logger.warning(f"Token registry lookup failed for {key}: {e}")
            return False
