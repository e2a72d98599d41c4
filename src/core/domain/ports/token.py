"""Token codec port."""

from typing import Protocol

from src.core.domain.tokens import TokenClaims


class TokenCodec(Protocol):
    def encode(self, claims: TokenClaims) -> str: ...

    def decode(self, token: str) -> TokenClaims:
        """Verify the signature and shape of ``token``.

        Raises a ``TokenDecodeError`` subclass on failure. No temporal or
        revocation checks happen here.
        """
        ...
