"""Password hashing with bcrypt."""

import secrets
import string

import bcrypt

from src.core.config import settings
from src.core.domain.exceptions import HashFormatError

# bcrypt 只使用前 72 字节
_BCRYPT_MAX_BYTES = 72
_PASSWORD_ALPHABET = string.ascii_letters + string.digits


class BcryptPasswordHasher:
    """Salted, cost-tunable one-way password hasher."""

    def __init__(self, rounds: int | None = None) -> None:
        rounds = settings.BCRYPT_ROUNDS if rounds is None else rounds
        if rounds < 4 or rounds > 31:
            raise ValueError("Bcrypt rounds must be between 4 and 31.")
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        secret = plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(secret, bcrypt.gensalt(self._rounds)).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        secret = plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(secret, hashed.encode("utf-8"))
        except ValueError as e:
            raise HashFormatError(f"Stored password hash is malformed: {e}") from e


def gen_password(length: int | None = None) -> str:
    """Generate a random alphanumeric password."""
    size = settings.GENERATED_PASSWORD_LENGTH if length is None else length
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(size))


def get_password_hasher() -> BcryptPasswordHasher:
    """Get password hasher instance."""
    return BcryptPasswordHasher()
