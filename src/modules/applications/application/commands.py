"""Application commands."""

from pydantic import BaseModel

from src.core.domain.permissions import AppStaffPermission


class CreateApplicationCommand(BaseModel):
    creator_id: str
    name: str
    description: str | None = None


class UpdateApplicationCommand(BaseModel):
    application_id: str
    name: str | None = None
    description: str | None = None


class AddStaffCommand(BaseModel):
    application_id: str
    user_id: str
    permissions: list[AppStaffPermission]


class UpdateStaffCommand(BaseModel):
    application_id: str
    user_id: str
    permissions: list[AppStaffPermission]
