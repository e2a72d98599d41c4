"""User domain exceptions.

每个异常类定义自己的 http_status_code 和 error_code，
由 core/interfaces/http/exceptions.py 中的 domain_exception_handler 统一处理。
"""

from fastapi import status

from src.core.domain.exceptions import DomainException, EntityNotFoundError


class UserNotFoundError(EntityNotFoundError):
    """Raised when user is not found."""

    def __init__(self, user_id: str | None = None) -> None:
        super().__init__("User", user_id)


class EmailAlreadyUsedError(DomainException):
    """Raised when registering with an email that already has an account."""

    http_status_code = status.HTTP_409_CONFLICT
    error_code = "EMAIL_ALREADY_USED"

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("email already used")


class PasswordOwnerNotFoundError(DomainException):
    """Raised when the caller of a password change no longer exists."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "USER_NOT_FOUND"

    def __init__(self) -> None:
        super().__init__("user doesn't exist")


class IncorrectOldPasswordError(DomainException):
    """Raised when the old password of a password change does not match."""

    http_status_code = status.HTTP_409_CONFLICT
    error_code = "INCORRECT_PASSWORD"

    def __init__(self) -> None:
        super().__init__("incorrect old password")


class NotStaffUserError(DomainException):
    """Raised when a staff-only operation targets a regular user (or vice versa)."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "USER_KIND_MISMATCH"

    def __init__(self, user_id: str, expected_staff: bool) -> None:
        kind = "a staff user" if expected_staff else "a regular user"
        super().__init__(f"User '{user_id}' is not {kind}")
