"""Declarative query filters and pagination.

每个查询模型通过 ``filter_rules`` 声明字段到谓词的映射：
``FilterRule(field, operator, column, transform, ignore)``。
编译成具体存储条件的工作由 infrastructure 层完成，这里只描述数据。
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import settings


class FilterOperator(StrEnum):
    """Supported comparison operators."""

    EQ = "eq"
    NE = "ne"
    LIKE = "like"
    NOT_LIKE = "not_like"
    IN = "in"
    NOT_IN = "not_in"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"


@dataclass(frozen=True)
class FilterRule:
    """One row of a filter table."""

    field: str
    operator: FilterOperator = FilterOperator.EQ
    column: str | None = None
    transform: Callable[[Any], Any] | None = None
    ignore: bool = False

    @property
    def target_column(self) -> str:
        return self.column or self.field

    def prepare(self, value: Any) -> Any:
        return self.transform(value) if self.transform else value


def wildcard(value: Any) -> str:
    """Wrap a value for substring pattern matching."""
    return f"%{value}%"


def start_of_day(value: date | datetime) -> datetime:
    """Convert a date into a comparable UTC timestamp at 00:00."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    return datetime.combine(value, time.min, tzinfo=UTC)


@dataclass(frozen=True)
class Pagination:
    offset: int
    limit: int


def clamp_pagination(offset: int | None = None, limit: int | None = None) -> Pagination:
    """Apply defaults and clamp out-of-range values instead of rejecting them."""
    if offset is None:
        offset = settings.PAGINATION_OFFSET_DEFAULT
    if limit is None:
        limit = settings.PAGINATION_LIMIT_DEFAULT
    return Pagination(
        offset=max(0, offset),
        limit=min(
            max(limit, settings.PAGINATION_LIMIT_MIN), settings.PAGINATION_LIMIT_MAX
        ),
    )


class FilterQuery(BaseModel):
    """Base class for list query models.

    ``offset`` 与 ``limit`` 只参与分页，不参与过滤。
    """

    model_config = ConfigDict(extra="forbid")

    filter_rules: ClassVar[tuple[FilterRule, ...]] = ()

    offset: int | None = Field(default=None, description="起始偏移")
    limit: int | None = Field(default=None, description="返回条数上限")

    def pagination(self) -> Pagination:
        return clamp_pagination(self.offset, self.limit)

    def active_filters(self) -> list[tuple[FilterRule, Any]]:
        """Rules with a present value, paired with the transformed value."""
        active: list[tuple[FilterRule, Any]] = []
        for rule in self.filter_rules:
            if rule.ignore:
                continue
            value = getattr(self, rule.field, None)
            if value is None:
                continue
            active.append((rule, rule.prepare(value)))
        return active


PAGINATION_RULES: tuple[FilterRule, ...] = (
    FilterRule("offset", ignore=True),
    FilterRule("limit", ignore=True),
)

CREATED_RANGE_RULES: tuple[FilterRule, ...] = (
    FilterRule(
        "created_start",
        FilterOperator.GTE,
        column="created_at",
        transform=start_of_day,
    ),
    FilterRule(
        "created_end",
        FilterOperator.LT,
        column="created_at",
        transform=start_of_day,
    ),
)
