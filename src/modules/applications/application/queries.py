"""Application list query models."""

from datetime import date
from typing import ClassVar

from pydantic import Field

from src.core.domain.filters import (
    CREATED_RANGE_RULES,
    PAGINATION_RULES,
    FilterOperator,
    FilterQuery,
    FilterRule,
    wildcard,
)


class ApplicationQuery(FilterQuery):
    """Filters accepted by the application listing."""

    filter_rules: ClassVar[tuple[FilterRule, ...]] = (
        FilterRule("id"),
        FilterRule("name", FilterOperator.LIKE, transform=wildcard),
        FilterRule("description", FilterOperator.LIKE, transform=wildcard),
        *CREATED_RANGE_RULES,
        *PAGINATION_RULES,
    )

    id: str | None = Field(default=None, description="应用 ID")
    name: str | None = Field(default=None, description="名称（模糊匹配）")
    description: str | None = Field(default=None, description="描述（模糊匹配）")
    created_start: date | None = Field(default=None, description="创建日期起（含）")
    created_end: date | None = Field(default=None, description="创建日期止（不含）")


class ApplicationStaffQuery(FilterQuery):
    """Filters accepted by the staff grant listing."""

    filter_rules: ClassVar[tuple[FilterRule, ...]] = (
        FilterRule("user_id"),
        *PAGINATION_RULES,
    )

    user_id: str | None = Field(default=None, description="用户 ID")
