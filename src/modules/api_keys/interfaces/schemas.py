"""API Key API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.modules.api_keys.domain.entities import ApiKey

# 单个 key 的最长有效期：10 年
MAX_LIFETIME_SEC = 10 * 365 * 24 * 3600


class CreateApiKeyRequest(BaseModel):
    """Create API key request."""

    lifetime: int = Field(..., ge=0, le=MAX_LIFETIME_SEC, description="有效期（秒）")
    user_id: str | None = Field(
        default=None, min_length=1, description="使用者用户 ID（默认为当前用户）"
    )
    activate: bool = Field(default=False, description="是否立即激活")

    model_config = ConfigDict(
        json_schema_extra={"example": {"lifetime": 2592000, "activate": True}}
    )


class UpdateApiKeyRequest(BaseModel):
    """Update API key request; omitted fields are left unchanged."""

    lifetime: int | None = Field(
        default=None, ge=0, le=MAX_LIFETIME_SEC, description="有效期（秒）"
    )
    is_banned: bool | None = Field(default=None, description="是否封禁")
    activated: bool | None = Field(
        default=None, description="true 激活（保留已有激活时间），false 取消激活"
    )


class ApiKeyResponse(BaseModel):
    """API key response (without the secret value)."""

    id: str = Field(..., description="Key ID")
    application_id: str = Field(..., description="所属应用 ID")
    user_id: str = Field(..., description="使用者用户 ID")
    created_by_user_id: str = Field(..., description="签发者用户 ID")
    activated_at: datetime | None = Field(None, description="激活时间")
    lifetime: int = Field(..., description="有效期（秒）")
    is_banned: bool = Field(..., description="是否封禁")
    is_expired: bool = Field(..., description="是否已过期")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="更新时间")

    @classmethod
    def from_entity(cls, api_key: ApiKey) -> "ApiKeyResponse":
        return cls(
            id=api_key.id,
            application_id=api_key.application_id,
            user_id=api_key.user_id,
            created_by_user_id=api_key.created_by_user_id,
            activated_at=api_key.activated_at,
            lifetime=api_key.lifetime,
            is_banned=api_key.is_banned,
            is_expired=api_key.is_expired(),
            created_at=api_key.created_at,
            updated_at=api_key.updated_at,
        )


class ApiKeyDetailResponse(ApiKeyResponse):
    """API key detail response (includes the secret value)."""

    value: str = Field(..., description="Key 明文")

    @classmethod
    def from_entity(cls, api_key: ApiKey) -> "ApiKeyDetailResponse":
        base = ApiKeyResponse.from_entity(api_key)
        return cls(**base.model_dump(), value=api_key.value)
