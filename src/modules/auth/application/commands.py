"""Auth application commands."""

from datetime import date

from pydantic import BaseModel, EmailStr

from src.core.domain.tokens import TokenKind


class RegisterCommand(BaseModel):
    """Register a new regular user."""

    name: str
    email: EmailStr
    password: str
    birthday: date


class LoginCommand(BaseModel):
    """Password login."""

    email: EmailStr
    password: str


class IntrospectCommand(BaseModel):
    """Token introspection request."""

    token: str
    token_type_hint: TokenKind | None = None
