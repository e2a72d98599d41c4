"""API Key list query model."""

from datetime import date
from typing import ClassVar

from pydantic import Field

from src.core.domain.filters import (
    CREATED_RANGE_RULES,
    PAGINATION_RULES,
    FilterQuery,
    FilterRule,
)


class KeyQuery(FilterQuery):
    """Filters accepted by the key listing of one application."""

    filter_rules: ClassVar[tuple[FilterRule, ...]] = (
        FilterRule("user_id"),
        FilterRule("is_banned"),
        *CREATED_RANGE_RULES,
        *PAGINATION_RULES,
    )

    user_id: str | None = Field(default=None, description="使用者用户 ID")
    is_banned: bool | None = Field(default=None, description="是否封禁")
    created_start: date | None = Field(default=None, description="创建日期起（含）")
    created_end: date | None = Field(default=None, description="创建日期止（不含）")
