"""Standard API response models."""

from typing import Self, TypeVar

from pydantic import BaseModel, ConfigDict

from src.core.domain.filters import Pagination

T = TypeVar("T")


class ApiResponse[T](BaseModel):
    """Standard API response model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    code: int = 200
    message: str = "Operation successful"
    data: T | None = None
    meta: dict | None = None

    @classmethod
    def success(
        cls,
        data: T = None,
        message: str = "Operation successful",
        code: int = 200,
        meta: dict | None = None,
    ) -> "ApiResponse[T]":
        return cls(code=code, message=message, data=data, meta=meta)


class OffsetPage[T](BaseModel):
    """Offset-based page of results.

    ``limit`` / ``offset`` 为实际生效（已夹取）的值。
    """

    items: list[T]
    limit: int
    offset: int
    total: int

    @classmethod
    def create(cls, items: list[T], total: int, pagination: Pagination) -> Self:
        return cls(
            items=items,
            limit=pagination.limit,
            offset=pagination.offset,
            total=total,
        )


class ErrorResponse(BaseModel):
    """Error response model."""

    error: dict

    @classmethod
    def create(
        cls,
        code: str,
        message: str,
        details: dict | list | None = None,
    ) -> "ErrorResponse":
        error_dict = {"code": code, "message": message}
        if details:
            error_dict["details"] = details
        return cls(error=error_dict)
