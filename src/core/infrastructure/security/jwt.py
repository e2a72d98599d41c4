"""JWT token codec."""

import jwt
from loguru import logger
from pydantic import ValidationError

from src.core.config import settings
from src.core.domain.exceptions import (
    TokenDecodeError,
    TokenSchemaError,
    TokenSignatureError,
)
from src.core.domain.tokens import TokenClaims

# 时间范围由 TokenLifecycleManager 校验，codec 只负责签名与结构
_DECODE_OPTIONS = {
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "require": ["iat", "nbf", "exp", "jti"],
}


class JWTTokenCodec:
    """HMAC-signed JWT implementation of the token codec."""

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None):
        self._secret_key = secret_key or settings.SECRET_KEY
        self._algorithm = algorithm or settings.JWT_ALGORITHM

    def encode(self, claims: TokenClaims) -> str:
        return jwt.encode(
            claims.to_payload(), self._secret_key, algorithm=self._algorithm
        )

    def decode(self, token: str) -> TokenClaims:
        """Decode and verify a token.

        Args:
            token: JWT token string

        Returns:
            TokenClaims: 解码后的 claims

        Raises:
            TokenSignatureError: 签名不匹配
            TokenDecodeError: token 结构无法解析
            TokenSchemaError: payload 不符合 claims 结构
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureError(str(e)) from e
        except jwt.InvalidTokenError as e:
            logger.debug(f"Malformed token: {e}")
            raise TokenDecodeError(str(e)) from e

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenSchemaError(str(e)) from e


def get_token_codec() -> JWTTokenCodec:
    """Get token codec instance."""
    return JWTTokenCodec()
