"""Auth domain exceptions."""

from fastapi import status

from src.core.domain.exceptions import DomainException


class EmailNotFoundError(DomainException):
    """Raised when logging in with an unknown email."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "EMAIL_NOT_FOUND"

    def __init__(self) -> None:
        super().__init__("email doesn't exist")


class IncorrectPasswordError(DomainException):
    """Raised when logging in with a wrong password."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INCORRECT_PASSWORD"

    def __init__(self) -> None:
        super().__init__("incorrect password")
