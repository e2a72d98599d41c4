"""User application commands."""

from datetime import date

from pydantic import BaseModel, EmailStr

from src.core.domain.permissions import StaffPermission


class CreateStaffUserCommand(BaseModel):
    """Create a platform staff user with a generated password."""

    name: str
    email: EmailStr
    birthday: date | None = None
    staff_permissions: list[StaffPermission] = []


class UpdateStaffUserCommand(BaseModel):
    """Update a staff user's profile and permissions."""

    user_id: str
    name: str | None = None
    birthday: date | None = None
    staff_permissions: list[StaffPermission] | None = None


class DeleteUserCommand(BaseModel):
    """Soft-delete a user of the given kind."""

    user_id: str
    is_staff: bool


class ChangePasswordCommand(BaseModel):
    """Change the caller's own password."""

    user_id: str
    old_password: str
    new_password: str
