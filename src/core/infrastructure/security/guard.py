"""Request authentication: credential extraction and token validation.

实现 ``src.core.application.security.get_current_claims``，在 main.py 中通过
dependency_overrides 注入。
"""

from fastapi import Depends, Request

from src.core.application.dependencies import get_token_lifecycle
from src.core.application.tokens import TokenLifecycleManager
from src.core.domain.exceptions import (
    AuthenticationError,
    MalformedAuthHeaderError,
    MissingAuthTokenError,
)
from src.core.domain.tokens import TokenClaims, TokenKind
from src.core.infrastructure.logging import BusinessEvents

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        MissingAuthTokenError: header 为空
        MalformedAuthHeaderError: 缺少 "Bearer " 前缀或 token 为空
    """
    if not header:
        raise MissingAuthTokenError()
    if not header.startswith(BEARER_PREFIX):
        raise MalformedAuthHeaderError("Authorization header is not a bearer token")
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise MalformedAuthHeaderError("Bearer token is empty")
    return token


async def _authenticate(
    request: Request, lifecycle: TokenLifecycleManager, kind: TokenKind | None
) -> TokenClaims:
    try:
        token = extract_bearer_token(request.headers.get("Authorization"))
        return await lifecycle.validate(token, kind)
    except AuthenticationError as e:
        BusinessEvents.auth_rejected(reason=e.reason, path=request.url.path)
        raise


async def get_current_claims(
    request: Request,
    lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> TokenClaims:
    """Authenticate the request with its bearer access token."""
    return await _authenticate(request, lifecycle, TokenKind.ACCESS)


async def get_current_session_claims(
    request: Request,
    lifecycle: TokenLifecycleManager = Depends(get_token_lifecycle),
) -> TokenClaims:
    """Authenticate with either token of a pair (used to end that session)."""
    return await _authenticate(request, lifecycle, None)
