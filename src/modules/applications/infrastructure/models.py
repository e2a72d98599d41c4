"""Application database models."""

from sqlalchemy import ARRAY, Index, String, UniqueConstraint, text
from sqlmodel import Field

from src.core.infrastructure.database.base_model import BaseModel


class ApplicationModel(BaseModel, table=True):
    """Application database model."""

    __tablename__ = "applications"
    # 名称只在未删除的应用之间唯一
    __table_args__ = (
        Index(
            "uq_applications_name_live",
            "name",
            unique=True,
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    name: str = Field(nullable=False, max_length=255)
    description: str | None = Field(default=None, max_length=1024, nullable=True)


class ApplicationStaffModel(BaseModel, table=True):
    """Application staff grant database model."""

    __tablename__ = "application_staff"
    __table_args__ = (
        UniqueConstraint(
            "application_id", "user_id", name="uq_application_staff_app_user"
        ),
    )

    application_id: str = Field(
        foreign_key="applications.id", index=True, nullable=False
    )
    user_id: str = Field(foreign_key="users.id", index=True, nullable=False)
    permissions: list[str] = Field(
        default_factory=list, sa_type=ARRAY(String), nullable=False
    )
