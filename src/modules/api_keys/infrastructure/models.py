"""API Key database models."""

from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field

from src.core.infrastructure.database.base_model import BaseModel


class ApiKeyModel(BaseModel, table=True):
    """API Key database model."""

    __tablename__ = "api_keys"

    value: str = Field(nullable=False, unique=True, index=True, max_length=64)
    activated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    lifetime: int = Field(nullable=False, ge=0)
    is_banned: bool = Field(default=False, nullable=False)
    application_id: str = Field(
        foreign_key="applications.id", index=True, nullable=False
    )
    user_id: str = Field(foreign_key="users.id", index=True, nullable=False)
    created_by_user_id: str = Field(
        foreign_key="users.id", index=True, nullable=False
    )
