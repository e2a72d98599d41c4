"""User database models."""

from datetime import date

from sqlalchemy import JSON, Date
from sqlmodel import Field

from src.core.infrastructure.database.base_model import BaseModel


class UserModel(BaseModel, table=True):
    """User database model."""

    __tablename__ = "users"

    name: str = Field(index=True, nullable=False, max_length=255)
    email: str = Field(index=True, nullable=False, unique=True, max_length=255)
    password_hash: str = Field(nullable=False)
    birthday: date | None = Field(default=None, sa_type=Date, nullable=True)
    is_staff: bool = Field(default=False, nullable=False, index=True)
    staff_permissions: list[str] = Field(
        default_factory=list, sa_type=JSON, nullable=False
    )
