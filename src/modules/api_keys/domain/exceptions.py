"""API Key domain exceptions."""

from src.core.domain.exceptions import EntityNotFoundError


class ApiKeyNotFoundError(EntityNotFoundError):
    """Raised when a key does not exist within the given application."""

    def __init__(self, key_id: str | None = None) -> None:
        super().__init__("ApiKey", key_id)
