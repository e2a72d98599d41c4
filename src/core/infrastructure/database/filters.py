"""Compile declarative filter queries into SQLAlchemy predicates.

编译结果是一个谓词列表（AND 语义），空列表表示不过滤。
同一个查询模型可以编译到任何暴露相同列名的 SQLModel 表。
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import SQLModel, col

from src.core.domain.filters import FilterOperator, FilterQuery, FilterRule

_OPERATORS: dict[FilterOperator, Callable[[Any, Any], ColumnElement[bool]]] = {
    FilterOperator.EQ: lambda column, value: column == value,
    FilterOperator.NE: lambda column, value: column != value,
    FilterOperator.LIKE: lambda column, value: column.like(value),
    FilterOperator.NOT_LIKE: lambda column, value: column.not_like(value),
    FilterOperator.IN: lambda column, value: column.in_(list(value)),
    FilterOperator.NOT_IN: lambda column, value: column.not_in(list(value)),
    FilterOperator.GT: lambda column, value: column > value,
    FilterOperator.LT: lambda column, value: column < value,
    FilterOperator.GTE: lambda column, value: column >= value,
    FilterOperator.LTE: lambda column, value: column <= value,
}


def compile_rule(rule: FilterRule, value: Any, model: type[SQLModel]) -> ColumnElement[bool]:
    """Build ``column OP value`` for one rule.

    Raises:
        ValueError: 目标表不存在该列
    """
    attribute = getattr(model, rule.target_column, None)
    if attribute is None:
        raise ValueError(
            f"{model.__name__} has no column '{rule.target_column}' "
            f"for filter field '{rule.field}'"
        )
    return _OPERATORS[rule.operator](col(attribute), value)


def compile_filter(
    query: FilterQuery, model: type[SQLModel]
) -> list[ColumnElement[bool]]:
    """Compile every present, non-ignored field of ``query`` against ``model``."""
    return [
        compile_rule(rule, value, model) for rule, value in query.active_filters()
    ]
