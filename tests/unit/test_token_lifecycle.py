"""Tests for token issuance, validation, revocation and introspection."""

import json

import pytest

from src.core.application.tokens import TokenLifecycleManager
from src.core.domain.exceptions import (
    TokenExpiredError,
    TokenNotYetActiveError,
    TokenRevokedError,
    TokenSignatureError,
    WrongTokenKindError,
)
from src.core.domain.permissions import StaffPermission
from src.core.domain.tokens import TokenKind, new_claims
from src.core.infrastructure.redis.keys import RedisKeys
from src.core.infrastructure.security.jwt import JWTTokenCodec

pytestmark = pytest.mark.anyio


class BrokenCache:
    """Cache whose reads always fail."""

    async def exists(self, *keys: str) -> int:
        raise ConnectionError("cache down")


@pytest.fixture
def lifecycle(codec, token_cache) -> TokenLifecycleManager:
    return TokenLifecycleManager(codec, token_cache)


class TestIssue:
    async def test_registers_both_tokens(self, lifecycle, token_cache) -> None:
        tokens = await lifecycle.issue(
            "user-1", is_staff=True, staff_permissions=[StaffPermission.DELETE_USER]
        )
        access = lifecycle.codec.decode(tokens.access_token)
        refresh = lifecycle.codec.decode(tokens.refresh_token)

        access_key = RedisKeys.user_token("user-1", access.token_id)
        refresh_key = RedisKeys.user_token("user-1", refresh.token_id)
        assert set(token_cache.data) == {access_key, refresh_key}
        assert token_cache.ttl[access_key] == 900
        assert token_cache.ttl[refresh_key] == 1_296_000
        assert json.loads(token_cache.data[access_key])["jti"] == access.token_id

        assert tokens.token_type == "bearer"
        assert tokens.expires_in == 900
        assert access.staff_permissions == (StaffPermission.DELETE_USER,)

    async def test_cache_key_format(self) -> None:
        assert RedisKeys.user_token("u", "j") == "USER:u_JWT:j"
        assert RedisKeys.user_token_pattern("u") == "USER:u_JWT:*"


class TestValidate:
    async def test_fresh_access_token_is_valid(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        claims = await lifecycle.validate(tokens.access_token)
        assert claims.subject_id == "user-1"

    async def test_refresh_token_rejected_where_access_required(
        self, lifecycle
    ) -> None:
        tokens = await lifecycle.issue("user-1")
        with pytest.raises(WrongTokenKindError):
            await lifecycle.validate(tokens.refresh_token)

    async def test_any_kind_accepts_refresh(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        claims = await lifecycle.validate(tokens.refresh_token, kind=None)
        assert claims.token_kind is TokenKind.REFRESH

    async def test_expired(self, lifecycle, codec, token_cache) -> None:
        access, _ = new_claims("user-1", now=1_000)
        await lifecycle._register(access)
        with pytest.raises(TokenExpiredError):
            await lifecycle.validate(codec.encode(access))

    async def test_not_yet_active(self, lifecycle, codec) -> None:
        access, _ = new_claims("user-1", now=4_000_000_000)
        await lifecycle._register(access)
        with pytest.raises(TokenNotYetActiveError):
            await lifecycle.validate(codec.encode(access))

    async def test_unregistered_token_is_revoked(self, lifecycle, codec) -> None:
        access, _ = new_claims("user-1")
        with pytest.raises(TokenRevokedError):
            await lifecycle.validate(codec.encode(access))

    async def test_signature_checked_before_cache(self, token_cache) -> None:
        lifecycle = TokenLifecycleManager(JWTTokenCodec(secret_key="k1"), token_cache)
        other = TokenLifecycleManager(JWTTokenCodec(secret_key="k2"), token_cache)
        tokens = await other.issue("user-1")
        with pytest.raises(TokenSignatureError):
            await lifecycle.validate(tokens.access_token)

    async def test_cache_failure_fails_closed(self, codec) -> None:
        access, _ = new_claims("user-1")
        lifecycle = TokenLifecycleManager(codec, BrokenCache())
        with pytest.raises(TokenRevokedError):
            await lifecycle.validate(codec.encode(access))


class TestRevoke:
    async def test_revoking_access_revokes_refresh(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        claims = await lifecycle.validate(tokens.access_token)

        removed = await lifecycle.revoke(claims)

        assert removed == 2
        with pytest.raises(TokenRevokedError):
            await lifecycle.validate(tokens.access_token)
        with pytest.raises(TokenRevokedError):
            await lifecycle.validate(tokens.refresh_token, kind=None)

    async def test_revoking_refresh_revokes_access(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        claims = await lifecycle.validate(tokens.refresh_token, kind=None)

        await lifecycle.revoke(claims)

        with pytest.raises(TokenRevokedError):
            await lifecycle.validate(tokens.access_token)

    async def test_revoke_is_idempotent(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        claims = await lifecycle.validate(tokens.access_token)
        await lifecycle.revoke(claims)
        assert await lifecycle.revoke(claims) == 0

    async def test_other_sessions_survive(self, lifecycle) -> None:
        first = await lifecycle.issue("user-1")
        second = await lifecycle.issue("user-1")
        await lifecycle.revoke(await lifecycle.validate(first.access_token))
        assert (await lifecycle.validate(second.access_token)).subject_id == "user-1"

    async def test_revoke_all_only_touches_one_user(self, lifecycle) -> None:
        await lifecycle.issue("user-1")
        await lifecycle.issue("user-1")
        other = await lifecycle.issue("user-2")

        assert await lifecycle.revoke_all("user-1") == 4
        assert await lifecycle.revoke_all("user-1") == 0
        assert (await lifecycle.validate(other.access_token)).subject_id == "user-2"


class TestIntrospect:
    async def test_active_token(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        result = await lifecycle.introspect(tokens.access_token)
        assert result.active is True
        assert result.sub == "user-1"
        assert result.token_type == "access_token"
        assert result.exp - result.nbf == 900

    async def test_hint_mismatch_is_inactive(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        result = await lifecycle.introspect(tokens.access_token, TokenKind.REFRESH)
        assert result.active is False

    async def test_garbage_is_inactive_not_error(self, lifecycle) -> None:
        result = await lifecycle.introspect("garbage")
        assert result.model_dump(exclude_none=True) == {"active": False}

    async def test_revoked_is_inactive(self, lifecycle) -> None:
        tokens = await lifecycle.issue("user-1")
        await lifecycle.revoke(await lifecycle.validate(tokens.access_token))
        assert (await lifecycle.introspect(tokens.refresh_token)).active is False

    async def test_cache_failure_is_inactive(self, codec) -> None:
        access, _ = new_claims("user-1")
        lifecycle = TokenLifecycleManager(codec, BrokenCache())
        assert (await lifecycle.introspect(codec.encode(access))).active is False
