"""API Key domain entities."""

import secrets
from datetime import UTC, datetime, timedelta

from pydantic import Field

from src.core.domain.base_entity import BaseEntity


def generate_key_value() -> str:
    """Generate a fresh URL-safe secret for a key."""
    return secrets.token_urlsafe(32)


class ApiKey(BaseEntity):
    """API Key issued to a subject user within one application.

    有效期从激活时刻起算；从未激活的 key 永不过期。
    """

    value: str = Field(default_factory=generate_key_value, description="Key 明文")
    activated_at: datetime | None = Field(default=None, description="激活时间")
    lifetime: int = Field(..., ge=0, description="有效期（秒）")
    is_banned: bool = Field(default=False, description="是否封禁")
    application_id: str = Field(..., description="所属应用 ID")
    user_id: str = Field(..., description="使用者用户 ID")
    created_by_user_id: str = Field(..., description="签发者用户 ID")

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once ``lifetime`` seconds have passed since activation."""
        if self.activated_at is None:
            return False
        now = now or datetime.now(UTC)
        return now - self.activated_at >= timedelta(seconds=self.lifetime)

    def activate(self, now: datetime | None = None) -> None:
        if self.activated_at is None:
            self.activated_at = now or datetime.now(UTC)
            self._update_timestamp()

    def deactivate(self) -> None:
        if self.activated_at is not None:
            self.activated_at = None
            self._update_timestamp()

    def ban(self, banned: bool = True) -> None:
        if self.is_banned != banned:
            self.is_banned = banned
            self._update_timestamp()

    def change_lifetime(self, lifetime: int) -> None:
        if self.lifetime != lifetime:
            self.lifetime = lifetime
            self._update_timestamp()
