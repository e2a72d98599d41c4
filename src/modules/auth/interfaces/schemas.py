"""Auth API schemas."""

from datetime import date

from pydantic import BaseModel, EmailStr, Field

from src.core.domain.tokens import TokenKind


class RegisterRequest(BaseModel):
    """Registration request."""

    name: str = Field(..., min_length=1, max_length=255, description="用户名")
    email: EmailStr = Field(..., max_length=255, description="邮箱")
    password: str = Field(..., min_length=1, max_length=255, description="密码")
    birthday: date = Field(..., description="生日")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Alice",
                "email": "alice@example.com",
                "password": "secret123",
                "birthday": "1990-01-01",
            }
        }
    }


class LoginRequest(BaseModel):
    """Password login request."""

    email: EmailStr = Field(..., max_length=255, description="邮箱")
    password: str = Field(..., min_length=1, max_length=255, description="密码")


class TokenResponse(BaseModel):
    """OAuth2 token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="access token 有效期（秒）")


class IntrospectRequest(BaseModel):
    """Token introspection request."""

    token: str = Field(..., min_length=1)
    token_type_hint: TokenKind | None = Field(None, description="access_token / refresh_token")


class IntrospectResponse(BaseModel):
    """Token introspection response; metadata only present when active."""

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
