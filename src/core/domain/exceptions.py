"""Base domain exceptions.

所有领域异常都应继承自 DomainException，并可以通过定义 http_status_code 和 error_code
类属性来指定 HTTP 响应细节。
"""

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors.

    子类可以通过定义以下类属性来自定义 HTTP 响应：
    - http_status_code: HTTP 状态码（默认 400）
    - error_code: 错误代码字符串（默认 "DOMAIN_ERROR"）
    - headers: 额外响应头（默认无）
    """

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"
    headers: dict[str, str] | None = None

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str | None = None):
        message = f"{entity_type} not found"
        if entity_id:
            message = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(message)


class DuplicateEntityError(DomainException):
    """Raised when a duplicate entity is detected."""

    http_status_code = status.HTTP_409_CONFLICT
    error_code = "DUPLICATE_ENTITY"

    def __init__(self, entity_type: str, field: str, value: str):
        message = f"{entity_type} with {field} '{value}' already exists"
        super().__init__(message)


class ValidationError(DomainException):
    """Raised when validation fails."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class AuthorizationError(DomainException):
    """Raised when authorization fails."""

    http_status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class InternalError(DomainException):
    """Raised for failures whose detail must stay server-side."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__("An internal error occurred")


class HashFormatError(InternalError):
    """Raised when a stored password hash cannot be parsed."""


# ============================================================================
# Authentication
# ============================================================================


class AuthenticationError(DomainException):
    """Raised when the request cannot be authenticated.

    客户端只会看到统一的提示信息；具体原因保存在 reason 中，仅用于日志。
    """

    http_status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"
    headers = {"WWW-Authenticate": "Bearer"}
    reason: str = "unauthenticated"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__("Could not validate credentials")


class MissingAuthTokenError(AuthenticationError):
    reason = "missing_token"


class MalformedAuthHeaderError(AuthenticationError):
    reason = "malformed_header"


class TokenDecodeError(AuthenticationError):
    """Raised by the token codec; ``reason`` tells the failure kind apart."""

    reason = "malformed_token"


class TokenSignatureError(TokenDecodeError):
    reason = "invalid_signature"


class TokenSchemaError(TokenDecodeError):
    reason = "schema_mismatch"


class WrongTokenKindError(AuthenticationError):
    reason = "wrong_token_kind"


class TokenExpiredError(AuthenticationError):
    reason = "expired"


class TokenNotYetActiveError(AuthenticationError):
    reason = "not_yet_active"


class TokenRevokedError(AuthenticationError):
    reason = "revoked"
