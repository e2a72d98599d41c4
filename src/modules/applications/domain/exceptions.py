"""Application domain exceptions."""

from fastapi import status

from src.core.domain.exceptions import DomainException, EntityNotFoundError, InternalError


class ApplicationNotFoundError(EntityNotFoundError):
    def __init__(self, application_id: str | None = None) -> None:
        super().__init__("Application", application_id)


class ApplicationNameExistsError(DomainException):
    """Raised when an application name is already taken."""

    http_status_code = status.HTTP_409_CONFLICT
    error_code = "APPLICATION_NAME_EXISTS"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("application name already exists")


class StaffGrantExistsError(DomainException):
    """Raised when a user already has a grant on the application."""

    http_status_code = status.HTTP_409_CONFLICT
    error_code = "STAFF_ALREADY_EXISTS"

    def __init__(self, application_id: str, user_id: str) -> None:
        super().__init__(
            f"User '{user_id}' is already staff of application '{application_id}'"
        )


class StaffGrantNotFoundError(EntityNotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__("Application staff", user_id)


class CreatorGrantError(InternalError):
    """Raised when the creator's grant on a new application cannot be written."""
