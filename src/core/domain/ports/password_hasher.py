"""Password hasher port."""

from typing import Protocol


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return whether ``plaintext`` matches ``hashed``.

        Raises ``HashFormatError`` when ``hashed`` is not a valid hash.
        """
        ...
