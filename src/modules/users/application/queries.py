"""User list query model."""

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


class UserQuery(FilterQuery):
    """Filters accepted by the user listings."""

    filter_rules: ClassVar[tuple[FilterRule, ...]] = (
        FilterRule("id"),
        FilterRule("name", FilterOperator.LIKE, transform=wildcard),
        FilterRule("email", FilterOperator.LIKE, transform=wildcard),
        *CREATED_RANGE_RULES,
        *PAGINATION_RULES,
    )

    id: str | None = Field(default=None, description="用户 ID")
    name: str | None = Field(default=None, description="用户名（模糊匹配）")
    email: str | None = Field(default=None, description="邮箱（模糊匹配）")
    created_start: date | None = Field(default=None, description="创建日期起（含）")
    created_end: date | None = Field(default=None, description="创建日期止（不含）")
